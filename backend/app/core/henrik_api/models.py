"""Pydantic models for HenrikDev API response data.

Match payloads differ between game modes and API versions, so the match
models coerce every field to a safe default instead of rejecting the record.
Validation happens once, here; downstream code reads plain typed attributes.
"""

import math
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_int(value: Any) -> int:
    """Coerce a stat value to int; anything non-numeric becomes 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    return 0


class AccountCardDTO(BaseModel):
    """Player card artwork attached to an account."""

    id: Optional[str] = None
    small: Optional[str] = None
    large: Optional[str] = None
    wide: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class AccountDTO(BaseModel):
    """Valorant account information from the v1 account endpoint."""

    puuid: str
    name: str
    tag: str
    region: Optional[str] = None
    account_level: Optional[int] = None
    card: Optional[AccountCardDTO] = None
    last_update: Optional[str] = None

    # Untouched payload, kept for the cache row
    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "AccountDTO":
        """Build an AccountDTO from the ``data`` object of the response."""
        account = cls.model_validate(data)
        account.raw = dict(data)
        return account


class PlayerStats(BaseModel):
    """One player's stat line for a match."""

    kills: int = 0
    deaths: int = 0
    assists: int = 0
    score: int = 0

    model_config = ConfigDict(extra="ignore")

    @field_validator("kills", "deaths", "assists", "score", mode="before")
    @classmethod
    def numeric_or_zero(cls, value: Any) -> int:
        return _as_int(value)


class MatchPlayer(BaseModel):
    """Entry of ``players.all_players``."""

    puuid: str = ""
    name: str = ""
    tag: str = ""
    team: str = ""
    character: str = ""
    stats: PlayerStats = Field(default_factory=PlayerStats)

    model_config = ConfigDict(extra="ignore")

    @field_validator("puuid", "name", "tag", "team", "character", mode="before")
    @classmethod
    def string_or_empty(cls, value: Any) -> str:
        return _as_str(value)

    @field_validator("stats", mode="before")
    @classmethod
    def stats_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, PlayerStats) else _as_dict(value)

    @property
    def display_name(self) -> str:
        """Riot ID as ``name#tag``."""
        return f"{self.name}#{self.tag}"


class TeamResult(BaseModel):
    """Outcome info for one team label."""

    has_won: bool = False
    rounds_won: int = 0
    rounds_lost: int = 0

    model_config = ConfigDict(extra="ignore")

    @field_validator("has_won", mode="before")
    @classmethod
    def strict_true(cls, value: Any) -> bool:
        return value is True

    @field_validator("rounds_won", "rounds_lost", mode="before")
    @classmethod
    def rounds_or_zero(cls, value: Any) -> int:
        return _as_int(value)


class MatchMetadata(BaseModel):
    """Match identity fields from ``metadata``."""

    matchid: str = ""
    map: str = ""
    mode: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("matchid", "map", "mode", mode="before")
    @classmethod
    def string_or_empty(cls, value: Any) -> str:
        return _as_str(value)


class MatchRecord(BaseModel):
    """One match from the v3 match-history endpoint.

    ``teams`` is keyed by lower-cased team label. ``malformed`` is set when
    the payload lacked a usable ``players.all_players`` list or ``teams``
    mapping.
    """

    metadata: MatchMetadata = Field(default_factory=MatchMetadata)
    players: List[MatchPlayer] = Field(default_factory=list)
    teams: Dict[str, TeamResult] = Field(default_factory=dict)
    malformed: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "MatchRecord":
        """Decode a raw match object. Never raises."""
        raw = _as_dict(payload)
        players_raw = raw.get("players")
        all_players = (
            players_raw.get("all_players") if isinstance(players_raw, dict) else None
        )
        teams_raw = raw.get("teams")

        players = [
            MatchPlayer.model_validate(entry)
            for entry in (all_players if isinstance(all_players, list) else [])
            if isinstance(entry, dict)
        ]
        teams = {
            str(label).lower(): TeamResult.model_validate(info)
            for label, info in _as_dict(teams_raw).items()
            if isinstance(info, dict)
        }

        return cls(
            metadata=MatchMetadata.model_validate(_as_dict(raw.get("metadata"))),
            players=players,
            teams=teams,
            malformed=not isinstance(all_players, list)
            or not isinstance(teams_raw, dict),
        )
