"""Health check endpoint."""

from fastapi import APIRouter

from marquee.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status message plus the listing source being served
    """
    return {"status": "ok", "listing_url": settings.listing_url}
