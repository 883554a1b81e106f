"""API Routes."""

from fastapi import APIRouter

from .auth import router as auth_router
from .categories import router as categories_router
from .health import router as health_router
from .news import router as news_router
from .publishers import router as publishers_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(news_router)
api_router.include_router(categories_router)
api_router.include_router(publishers_router)
