"""
FastAPI dependency injection utilities for the recordforge service.

Usage:
    from recordforge.core.dependencies import SettingsDep

    @router.post("/views/{view_id}/summary")
    async def render(view_id: str, settings: SettingsDep):
        limit = settings.max_records_per_request
"""

from typing import Annotated

from fastapi import Depends

from recordforge.core.config import Settings, get_settings


def get_settings_dependency() -> Settings:
    """
    FastAPI dependency returning the cached Settings instance.

    Wrapping get_settings() lets tests replace settings through
    app.dependency_overrides without touching the lru_cache.
    """
    return get_settings()


# Type alias for endpoint signatures
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
