"""
HenrikDev API client package for Valorant account and match data.

This package provides an async HTTP client for the HenrikDev API with
typed error mapping and retries on transient failures.
"""

from .client import HenrikAPIClient
from .errors import (
    HenrikAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    BadRequestError,
    ServiceUnavailableError,
)
from .models import (
    AccountDTO,
    AccountCardDTO,
    MatchMetadata,
    MatchPlayer,
    MatchRecord,
    PlayerStats,
    TeamResult,
)
from .constants import Region

__all__ = [
    "HenrikAPIClient",
    "HenrikAPIError",
    "RateLimitError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "BadRequestError",
    "ServiceUnavailableError",
    "AccountDTO",
    "AccountCardDTO",
    "MatchMetadata",
    "MatchPlayer",
    "MatchRecord",
    "PlayerStats",
    "TeamResult",
    "Region",
]
