"""Main API router aggregation."""

from fastapi import APIRouter

from .code_reviews import router as code_reviews_router
from .health import router as health_router
from .home import router as home_router
from .standards import router as standards_router

router = APIRouter()

# Include sub-routers
router.include_router(health_router)
router.include_router(home_router)
router.include_router(code_reviews_router)
router.include_router(standards_router)
