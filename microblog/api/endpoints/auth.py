"""Auth endpoints: register, login, me."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.api.deps import get_current_user, get_db
from microblog.models.user import User
from microblog.schemas.user import LoginRequest, Token, UserCreate, UserResponse
from microblog.services.auth_service import login_user, register_user, user_to_response

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    token = await register_user(db, data)
    await db.commit()
    return token


@router.post("/login", response_model=Token)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    return await login_user(db, data)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return user_to_response(current_user)
