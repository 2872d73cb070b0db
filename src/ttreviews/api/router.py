"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from ttreviews.api.routes import health, moderation, submissions

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(submissions.router)
api_router.include_router(moderation.router)
