"""
recordforge API package initialization.

This package contains stateless FastAPI router modules exposing the
template runtime:
- templates: authoring-time template checks
- records: write-path record validation and normalization
- views: summary and chart view rendering
"""

from fastapi import APIRouter

# Import router modules
from recordforge.api.templates import router as templates_router
from recordforge.api.records import router as records_router
from recordforge.api.views import router as views_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(templates_router, prefix="/templates", tags=["templates"])
api_router.include_router(records_router, prefix="/records", tags=["records"])
api_router.include_router(views_router, prefix="/views", tags=["views"])

# Export all routers for selective imports
__all__ = [
    "api_router",
    "templates_router",
    "records_router",
    "views_router",
]
