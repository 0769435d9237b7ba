"""
Settings and environment management module for the recordforge service.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access

Environment Variables (all optional, prefix RECORDFORGE_):
- RECORDFORGE_APP_NAME: Service name reported by the root endpoint
- RECORDFORGE_LOG_LEVEL: Root logging level (default: INFO)
- RECORDFORGE_CORS_ORIGINS: JSON list of allowed browser origins
- RECORDFORGE_EMPTY_GROUP_KEY: Partition key for missing group values (default: "(empty)")
- RECORDFORGE_CURRENCY_SYMBOL: Symbol used by currency formatting (default: "$")
- RECORDFORGE_DEFAULT_TIME_RANGE: Preset applied when neither request nor view supplies one
- RECORDFORGE_MAX_RECORDS_PER_REQUEST: Upper bound on records accepted per render call

Usage:
    from recordforge.core.config import get_settings

    settings = get_settings()
    print(settings.empty_group_key)
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from recordforge.models.enums import TimePreset


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The core computation functions take their parameters explicitly; these
    settings supply the defaults the HTTP layer and formatting helpers pass in.

    Attributes:
        app_name: Service name reported by the root endpoint.
        log_level: Root logging level name.
        cors_origins: Browser origins allowed by the CORS middleware.
        empty_group_key: Partition key used for records with no group value.
        currency_symbol: Symbol prefixed to currency-formatted values.
        default_time_range: Preset used when no explicit or view default range exists.
        max_records_per_request: Upper bound on records per analytics request.
    """

    model_config = SettingsConfigDict(
        env_prefix='RECORDFORGE_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Service
    # =========================================================================

    app_name: str = 'recordforge'

    log_level: str = 'INFO'

    # Next.js style front-end dev servers by default
    cors_origins: List[str] = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    # =========================================================================
    # Analytics Defaults
    # =========================================================================

    # Records whose group value is missing or empty land in this partition
    empty_group_key: str = '(empty)'

    currency_symbol: str = '$'

    # Only consulted by the HTTP layer; the runtime itself treats an absent
    # range as "no time filtering"
    default_time_range: TimePreset = TimePreset.ALL_TIME

    max_records_per_request: int = 50000


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Raises:
        pydantic.ValidationError: If an environment variable has an invalid value.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
