"""API dependencies: auth, db session."""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.db.session import get_db
from microblog.models.user import User
from microblog.services.auth_service import authenticate_token

security = HTTPBearer(auto_error=False)

__all__ = ["get_db", "get_current_user"]


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """The request's principal. Raises AuthError (401) without a valid bearer token."""
    token = credentials.credentials if credentials else None
    return await authenticate_token(db, token)
