"""Post, reply and like business logic."""
import logging

from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.core.exceptions import ConflictError, NotFoundError, ValidationError
from microblog.db.session import is_row_id
from microblog.models.engagement import Like
from microblog.models.post import Post
from microblog.models.reply import Reply
from microblog.models.user import User
from microblog.schemas.post import PostDetailResponse, PostResponse
from microblog.schemas.reply import ReplyResponse

logger = logging.getLogger(__name__)

MAX_POST_LENGTH = 280
MAX_REPLY_LENGTH = 280
FEED_LIMIT = 50


def validate_content(content: str | None, kind: str = "Post", max_length: int = MAX_POST_LENGTH) -> str:
    """Return the trimmed content, or raise ValidationError if blank or too long."""
    text = (content or "").strip()
    if not text:
        raise ValidationError(f"{kind} content cannot be empty", field="content")
    if len(text) > max_length:
        raise ValidationError(
            f"{kind} must be {max_length} characters or less",
            field="content",
            context={"length": len(text)},
        )
    return text


def _likes_count():
    return (
        select(func.count(Like.id))
        .where(Like.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("likes_count")
    )


def _replies_count():
    return (
        select(func.count(Reply.id))
        .where(Reply.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("replies_count")
    )


def _post_summary_query():
    """Posts joined with author username and live like/reply counts, newest first."""
    return (
        select(Post, User.username, _likes_count(), _replies_count())
        .join(User, Post.user_id == User.id)
        .order_by(desc(Post.created_at), desc(Post.id))
    )


def post_to_response(post: Post, username: str, likes_count: int = 0, replies_count: int = 0) -> PostResponse:
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        username=username,
        content=post.content,
        created_at=post.created_at,
        likes_count=likes_count or 0,
        replies_count=replies_count or 0,
    )


def reply_to_response(reply: Reply, username: str) -> ReplyResponse:
    return ReplyResponse(
        id=reply.id,
        post_id=reply.post_id,
        user_id=reply.user_id,
        username=username,
        content=reply.content,
        created_at=reply.created_at,
    )


async def create_post(db: AsyncSession, author: User, content: str | None) -> PostResponse:
    author_id, username = author.id, author.username
    try:
        text = validate_content(content, "Post", MAX_POST_LENGTH)
    except ValidationError as exc:
        logger.warning("Rejected post by user %s: %s", author_id, exc.message)
        raise
    post = Post(user_id=author_id, content=text)
    db.add(post)
    await db.flush()
    logger.info("Post created by user %s (id=%s)", author_id, post.id)
    return post_to_response(post, username)


async def get_feed(db: AsyncSession, limit: int = FEED_LIMIT) -> list[PostResponse]:
    result = await db.execute(_post_summary_query().limit(limit))
    posts = [post_to_response(*row) for row in result.all()]
    logger.debug("Feed fetched: %d posts", len(posts))
    return posts


async def get_user_posts(db: AsyncSession, user_id: int) -> list[PostResponse]:
    result = await db.execute(_post_summary_query().where(Post.user_id == user_id))
    return [post_to_response(*row) for row in result.all()]


async def post_exists(db: AsyncSession, post_id: int) -> bool:
    if not is_row_id(post_id):
        return False
    result = await db.execute(select(Post.id).where(Post.id == post_id))
    return result.scalar_one_or_none() is not None


async def get_post(db: AsyncSession, post_id: int) -> PostDetailResponse:
    """A post with its replies in reading order (oldest first)."""
    if not is_row_id(post_id):
        raise NotFoundError("Post", post_id)
    result = await db.execute(_post_summary_query().where(Post.id == post_id))
    row = result.first()
    if row is None:
        raise NotFoundError("Post", post_id)
    post, username, likes_count, replies_count = row

    replies_result = await db.execute(
        select(Reply, User.username)
        .join(User, Reply.user_id == User.id)
        .where(Reply.post_id == post_id)
        .order_by(Reply.created_at, Reply.id)
    )
    replies = [reply_to_response(reply, reply_username) for reply, reply_username in replies_result.all()]
    summary = post_to_response(post, username, likes_count, replies_count)
    return PostDetailResponse(**summary.model_dump(), replies=replies)


async def like_post(db: AsyncSession, user: User, post_id: int) -> None:
    """Like a post. Not idempotent: a second like raises ConflictError."""
    user_id = user.id
    if not await post_exists(db, post_id):
        raise NotFoundError("Post", post_id)
    db.add(Like(post_id=post_id, user_id=user_id))
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        # The post was checked above; a vanished post means it was deleted concurrently
        if not await post_exists(db, post_id):
            raise NotFoundError("Post", post_id)
        raise ConflictError("Post already liked", context={"post_id": post_id, "user_id": user_id})
    logger.info("Post %s liked by user %s", post_id, user_id)


async def unlike_post(db: AsyncSession, user: User, post_id: int) -> None:
    """Remove a like if present. Always succeeds."""
    user_id = user.id
    if not is_row_id(post_id):
        return
    result = await db.execute(delete(Like).where(Like.post_id == post_id, Like.user_id == user_id))
    if result.rowcount:
        logger.info("Post %s unliked by user %s", post_id, user_id)


async def reply_to_post(db: AsyncSession, user: User, post_id: int, content: str | None) -> ReplyResponse:
    user_id, username = user.id, user.username
    try:
        text = validate_content(content, "Reply", MAX_REPLY_LENGTH)
    except ValidationError as exc:
        logger.warning("Rejected reply by user %s: %s", user_id, exc.message)
        raise
    if not await post_exists(db, post_id):
        raise NotFoundError("Post", post_id)
    reply = Reply(post_id=post_id, user_id=user_id, content=text)
    db.add(reply)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise NotFoundError("Post", post_id)
    logger.info("Reply created by user %s on post %s (id=%s)", user_id, post_id, reply.id)
    return reply_to_response(reply, username)
