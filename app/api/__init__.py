"""API v1 router initialization."""
from fastapi import APIRouter

from .makeup import router as makeup_router

# Create v1 router
router = APIRouter()

router.include_router(
    makeup_router,
    prefix="/makeup",
    tags=["makeup"]
)
