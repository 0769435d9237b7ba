"""
FastAPI application entry point for the recordforge API.

Configures logging, CORS and the API routers. The service is stateless:
every request carries the template and records it operates on, so there is
no storage to open or close during the application lifespan.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recordforge import __version__
from recordforge.api import api_router
from recordforge.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Log service start and stop; there are no connections to open or close.
    """
    logger.info(f"{settings.app_name} API starting (version {__version__})")
    yield
    logger.info(f"{settings.app_name} API shutting down")


# Create FastAPI application
app = FastAPI(
    title="recordforge API",
    version=__version__,
    description=(
        "Schema-driven record validation and analytics runtime. "
        "Provides endpoints for template checks, record validation, "
        "and summary/chart view rendering."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Template, record and view routers
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Liveness probe. The service holds no state, so it is healthy whenever it answers.
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Service name, version and documentation links.
    """
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Local development server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "recordforge.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
