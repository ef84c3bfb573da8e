"""Core dependencies for FastAPI application."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from .config import Settings, get_global_settings
from .database import DatabaseManager, db_manager
from .henrik_api import HenrikAPIClient


def get_app_settings() -> Settings:
    """Settings dependency, overridable in tests."""
    return get_global_settings()


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def get_database_manager() -> DatabaseManager:
    """Process-wide database manager, overridable in tests."""
    return db_manager


DatabaseManagerDep = Annotated[DatabaseManager, Depends(get_database_manager)]


async def get_henrik_client(
    settings: SettingsDep,
) -> AsyncGenerator[HenrikAPIClient, None]:
    """Get a HenrikDev API client scoped to one request."""
    client = HenrikAPIClient(
        api_key=settings.henrik_api_key,
        base_url=settings.henrik_base_url,
        timeout=settings.henrik_timeout_seconds,
    )
    await client.start_session()
    try:
        yield client
    finally:
        await client.close()


# Type aliases for cleaner dependency injection
HenrikClientDep = Annotated[HenrikAPIClient, Depends(get_henrik_client)]

__all__ = [
    "get_app_settings",
    "get_henrik_client",
    "get_database_manager",
    "SettingsDep",
    "HenrikClientDep",
    "DatabaseManagerDep",
]
