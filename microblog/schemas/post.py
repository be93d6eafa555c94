"""Pydantic schemas for Post."""
from pydantic import BaseModel

from microblog.schemas.common import UtcDatetime
from microblog.schemas.reply import ReplyResponse


class PostCreate(BaseModel):
    # Length and blank checks happen in the service on the trimmed text
    content: str


class PostResponse(BaseModel):
    id: int
    user_id: int
    username: str
    content: str
    created_at: UtcDatetime
    likes_count: int = 0
    replies_count: int = 0


class PostDetailResponse(PostResponse):
    replies: list[ReplyResponse] = []


class MessageResponse(BaseModel):
    message: str
