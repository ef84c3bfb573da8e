"""Players feature: account lookup by Riot ID with a database cache."""

from .router import router as players_router

__all__ = ["players_router"]
