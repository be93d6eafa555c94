"""Shared schema types."""
from datetime import datetime
from typing import Annotated

from pydantic import PlainSerializer

from microblog.core.timeutils import to_utc_iso

# Serialised as an explicit UTC string, e.g. "2026-01-13T18:29:18.000Z"
UtcDatetime = Annotated[datetime, PlainSerializer(to_utc_iso, return_type=str, when_used="json")]
