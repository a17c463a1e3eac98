"""API router aggregator."""

from fastapi import APIRouter

from minisocial.api.endpoints import auth, posts, users, statistics

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(posts.router)
api_router.include_router(users.router)
api_router.include_router(statistics.router)

__all__ = ["api_router"]
