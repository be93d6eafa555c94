"""Pydantic schemas for Reply."""
from pydantic import BaseModel

from microblog.schemas.common import UtcDatetime


class ReplyCreate(BaseModel):
    content: str


class ReplyResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    username: str
    content: str
    created_at: UtcDatetime
