"""
Core infrastructure package for the recordforge service.

Provides:
- Configuration management via pydantic-settings
- FastAPI dependency injection utilities

Usage:
    from recordforge.core import get_settings, SettingsDep
"""

from recordforge.core.config import Settings, get_settings
from recordforge.core.dependencies import get_settings_dependency, SettingsDep

__all__ = [
    'Settings',
    'get_settings',
    'get_settings_dependency',
    'SettingsDep',
]
