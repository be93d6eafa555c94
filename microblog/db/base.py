"""SQLAlchemy declarative base and model imports for Alembic."""
from microblog.db.session import Base  # noqa: F401
from microblog.models.user import User  # noqa: F401
from microblog.models.post import Post  # noqa: F401
from microblog.models.reply import Reply  # noqa: F401
from microblog.models.engagement import Like  # noqa: F401

__all__ = ["Base", "User", "Post", "Reply", "Like"]
