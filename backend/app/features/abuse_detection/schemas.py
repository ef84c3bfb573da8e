"""Schemas for abuse detection responses.

Field names serialize in camelCase; list fields always serialize as arrays,
never null.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.enums import MatchOutcome


class CamelModel(BaseModel):
    """Base schema serializing field names in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OpponentStatResponse(CamelModel):
    """Interaction profile for one opponent."""

    puuid: str
    display_name: str = Field(..., description="Riot ID as name#tag")
    encounters: int = Field(..., ge=1, description="Matches shared with the subject")
    as_ally: int = Field(..., ge=0)
    as_enemy: int = Field(..., ge=0)
    subject_losses: int = Field(
        ..., ge=0, description="Shared matches the subject did not win"
    )
    kills: int = Field(0, description="Opponent's own kills, summed")
    deaths: int = Field(0, description="Opponent's own deaths, summed")
    assists: int = Field(0, description="Opponent's own assists, summed")
    score: int = Field(0, description="Opponent's own score, summed")


class MatchSummaryResponse(CamelModel):
    """The subject's line for one match."""

    match_id: str
    map: str
    mode: str
    agent: str
    result: MatchOutcome
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    score: int = 0


class AbuseAnalysisResponse(CamelModel):
    """Result of analysing one player's match history."""

    matches_count: int = Field(..., ge=0, description="Number of matches received")
    abusing_detected: bool = Field(
        ..., description="True when at least one opponent was flagged"
    )
    details: List[str] = Field(
        default_factory=list, description="Human-readable findings"
    )
    players: List[OpponentStatResponse] = Field(
        default_factory=list, description="Opponents sorted by encounters, descending"
    )
    history: List[MatchSummaryResponse] = Field(
        default_factory=list, description="Subject's matches in input order"
    )
