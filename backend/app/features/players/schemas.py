"""Pydantic schemas for the players feature."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AccountResponse(BaseModel):
    """Account lookup result."""

    puuid: str = Field(..., description="Player's PUUID")
    name: str = Field(..., description="Riot ID game name")
    tag: str = Field(..., description="Riot ID tag line")
    data: Dict[str, Any] = Field(
        default_factory=dict, description="Account payload as returned by the provider"
    )
    cached: bool = Field(
        default=False, description="Whether the account was served from the cache"
    )


class DatabaseStatusResponse(BaseModel):
    """Database connectivity check.

    Exactly one of ``players_count`` and ``count_error`` is set.
    """

    connected: bool
    players_count: Optional[int] = Field(None, serialization_alias="playersCount")
    count_error: Optional[str] = Field(None, serialization_alias="countError")
