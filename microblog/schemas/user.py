"""Pydantic schemas for User."""
from pydantic import BaseModel, EmailStr, Field

from microblog.schemas.common import UtcDatetime
from microblog.schemas.post import PostResponse


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1)
    bio: str | None = None


class UserUpdate(BaseModel):
    bio: str | None = None


class UserResponse(BaseModel):
    """The account owner's view of a user, including email."""

    id: int
    username: str
    email: str
    bio: str = ""
    created_at: UtcDatetime

    model_config = {"from_attributes": True}


class UserPublic(BaseModel):
    id: int
    username: str
    bio: str = ""
    created_at: UtcDatetime

    model_config = {"from_attributes": True}


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileResponse(BaseModel):
    user: UserPublic
    posts: list[PostResponse]


class ProfileUpdateResponse(BaseModel):
    message: str = "Profile updated"
    user: UserPublic
