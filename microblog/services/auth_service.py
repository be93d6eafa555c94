"""Authentication business logic: registration, login, token verification."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.core.exceptions import AuthError, ConflictError
from microblog.core.security import create_access_token, decode_token, get_password_hash, verify_password
from microblog.db.session import is_row_id
from microblog.models.user import User
from microblog.schemas.user import LoginRequest, Token, UserCreate, UserResponse

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    if not is_row_id(user_id):
        return None
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        bio=user.bio or "",
        created_at=user.created_at,
    )


def create_token_for_user(user: User) -> Token:
    return Token(
        token=create_access_token(user.id, user.username),
        user=user_to_response(user),
    )


async def register_user(db: AsyncSession, data: UserCreate) -> Token:
    """Create an account and issue its first token. Raises ConflictError on a taken username or email."""
    logger.info("Register attempt: username=%s", data.username)
    if await get_user_by_username(db, data.username):
        raise ConflictError("Username already taken")
    if await get_user_by_email(db, data.email):
        raise ConflictError("Email already registered")
    user = User(
        username=data.username,
        email=data.email,
        password_hash=get_password_hash(data.password),
        bio=data.bio or "",
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise ConflictError("User already exists", context={"username": data.username})
    logger.info("Register success: id=%s username=%s", user.id, user.username)
    return create_token_for_user(user)


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User | None:
    user = await get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


async def login_user(db: AsyncSession, data: LoginRequest) -> Token:
    user = await authenticate_user(db, data.username, data.password)
    if user is None:
        # Same error for unknown user and wrong password
        logger.warning("Login failed: username=%s", data.username)
        raise AuthError("Invalid username or password")
    logger.info("Login success: id=%s username=%s", user.id, user.username)
    return create_token_for_user(user)


async def authenticate_token(db: AsyncSession, token: str | None) -> User:
    """Resolve a bearer token to its principal. Raises AuthError when it cannot."""
    if not token:
        raise AuthError("Access token required")
    payload = decode_token(token)
    if not payload or payload.get("type") != "access":
        raise AuthError("Invalid or expired token")
    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise AuthError("Invalid or expired token")
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise AuthError("Invalid or expired token")
    return user
