"""Shared test fixtures."""

import pytest
from fastapi import FastAPI

from marquee.api.routes import health, movies, titles


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the cache lifespan, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(movies.router, prefix="/api")
    app.include_router(titles.router, prefix="/api")
    return app
