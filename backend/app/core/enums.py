"""Shared enums used across features.

This module provides a single source of truth for enums used in both the
analysis engine and the API schemas.
"""

from enum import Enum


class MatchOutcome(str, Enum):
    """The subject's team result for one match."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
    UNKNOWN = "unknown"


class TeamKey(str, Enum):
    """Keys of the ``teams`` mapping in a match payload."""

    RED = "red"
    BLUE = "blue"
