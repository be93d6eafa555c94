"""Profile business logic."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from microblog.core.exceptions import AuthorizationError, NotFoundError
from microblog.models.user import User
from microblog.schemas.user import ProfileResponse, UserPublic
from microblog.services.auth_service import get_user_by_id
from microblog.services.post_service import get_user_posts

logger = logging.getLogger(__name__)


def user_to_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        username=user.username,
        bio=user.bio or "",
        created_at=user.created_at,
    )


async def get_profile(db: AsyncSession, user_id: int) -> ProfileResponse:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    posts = await get_user_posts(db, user_id)
    return ProfileResponse(user=user_to_public(user), posts=posts)


async def update_profile(db: AsyncSession, principal: User, user_id: int, bio: str | None) -> UserPublic:
    """Update the principal's own bio. Any other target raises AuthorizationError."""
    if principal.id != user_id:
        logger.warning("User %s tried to edit profile of user %s", principal.id, user_id)
        raise AuthorizationError("Unauthorized")
    principal.bio = bio or ""
    await db.flush()
    logger.info("Profile updated for user %s", principal.id)
    return user_to_public(principal)
