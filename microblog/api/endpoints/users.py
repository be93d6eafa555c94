"""User profile endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.api.deps import get_current_user, get_db
from microblog.models.user import User
from microblog.schemas.user import ProfileResponse, ProfileUpdateResponse, UserUpdate
from microblog.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(user_id: int, db: AsyncSession = Depends(get_db)):
    return await user_service.get_profile(db, user_id)


@router.put("/{user_id}", response_model=ProfileUpdateResponse)
async def update_profile(
    user_id: int,
    data: UserUpdate | None = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.update_profile(db, current_user, user_id, data.bio if data else None)
    await db.commit()
    return ProfileUpdateResponse(user=user)
