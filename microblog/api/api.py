"""API router aggregation."""
from fastapi import APIRouter

from microblog.api.endpoints import auth, health, posts, users

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(posts.router)
api_router.include_router(users.router)
api_router.include_router(health.router)
