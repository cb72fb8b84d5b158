"""API routes."""

from fastapi import APIRouter

from rbac_api.api import auth, health, posts

router = APIRouter()
router.include_router(auth.router, tags=["Authentication"])
router.include_router(posts.router, prefix="/posts", tags=["Posts"])
router.include_router(health.router, prefix="/health", tags=["System"])
