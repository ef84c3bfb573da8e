"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import get_db, db_manager, DatabaseManager
from .exceptions import (
    ServiceException,
    PlayerServiceError,
    AnalysisServiceError,
    DatabaseError,
    ValidationError,
    ExternalServiceError,
)
from .enums import MatchOutcome, TeamKey
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "get_db",
    "db_manager",
    "DatabaseManager",
    # Exceptions
    "ServiceException",
    "PlayerServiceError",
    "AnalysisServiceError",
    "DatabaseError",
    "ValidationError",
    "ExternalServiceError",
    # Enums
    "MatchOutcome",
    "TeamKey",
    # Models
    "Base",
]
