from microblog.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserPublic,
    Token,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateResponse,
)
from microblog.schemas.post import PostCreate, PostResponse, PostDetailResponse, MessageResponse
from microblog.schemas.reply import ReplyCreate, ReplyResponse
