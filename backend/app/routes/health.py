"""Health check and warm-up endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.config import settings

router = APIRouter()

# Mounted at "/" so the mobile app can wake the service before a scan
root_router = APIRouter()


@router.get("")
async def health():
    """Basic health check."""
    return {"status": "healthy", "jurisdiction": settings.jurisdiction_keyword}


@root_router.get("/", response_class=PlainTextResponse)
async def warm_up():
    """Warm-up endpoint."""
    return "EPWD Backend Active"
