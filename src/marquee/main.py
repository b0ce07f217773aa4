"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marquee.api.routes import health, movies, titles
from marquee.config import settings
from marquee.services.enrichment import MovieEnricher
from marquee.services.info_cache import MovieInfoCache
from marquee.services.listings import ListingService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One cache for the life of the process, shared by every request
    cache = MovieInfoCache(version=settings.cache_version)
    app.state.listing_service = ListingService(enricher=MovieEnricher(cache=cache))
    logger.info(f"Listing service ready for {settings.listing_url}")

    yield

    cache.clear()
    logger.info("Listing service shut down")


# Create FastAPI app
app = FastAPI(
    title="Marquee API",
    description="Cinema schedule with TMDb metadata",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(movies.router, prefix="/api", tags=["movies"])
app.include_router(titles.router, prefix="/api", tags=["titles"])


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
