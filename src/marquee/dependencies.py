"""FastAPI dependencies."""

from fastapi import Request

from marquee.services.listings import ListingService


def get_listing_service(request: Request) -> ListingService:
    """
    Dependency providing the listing service built at startup.

    Usage:
        @app.get("/endpoint")
        async def endpoint(service: ListingService = Depends(get_listing_service)):
            ...
    """
    return request.app.state.listing_service
