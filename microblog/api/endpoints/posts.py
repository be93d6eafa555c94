"""Posts: feed, create, detail, likes and replies."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from microblog.api.deps import get_current_user, get_db
from microblog.models.user import User
from microblog.schemas.post import MessageResponse, PostCreate, PostDetailResponse, PostResponse
from microblog.schemas.reply import ReplyCreate, ReplyResponse
from microblog.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/feed", response_model=list[PostResponse])
async def get_feed(db: AsyncSession = Depends(get_db)):
    return await post_service.get_feed(db)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await post_service.create_post(db, current_user, data.content)
    await db.commit()
    return post


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await post_service.get_post(db, post_id)


@router.post("/{post_id}/like", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def like_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await post_service.like_post(db, current_user, post_id)
    await db.commit()
    return MessageResponse(message="Post liked")


@router.delete("/{post_id}/like", response_model=MessageResponse)
async def unlike_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await post_service.unlike_post(db, current_user, post_id)
    await db.commit()
    return MessageResponse(message="Post unliked")


@router.post("/{post_id}/reply", response_model=ReplyResponse, status_code=status.HTTP_201_CREATED)
async def reply_to_post(
    post_id: int,
    data: ReplyCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    reply = await post_service.reply_to_post(db, current_user, post_id, data.content)
    await db.commit()
    return reply
