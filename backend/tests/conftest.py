"""Shared fixtures: builders for raw HenrikDev match payloads."""

from typing import Any, Dict, List, Optional

import pytest

from app.core.henrik_api.models import MatchRecord

SUBJECT = "subject-puuid"


def build_player(
    puuid: str,
    team: Any = "Red",
    name: Optional[str] = None,
    tag: str = "KR1",
    character: str = "Jett",
    kills: Any = 10,
    deaths: Any = 10,
    assists: Any = 5,
    score: Any = 200,
) -> Dict[str, Any]:
    return {
        "puuid": puuid,
        "name": name if name is not None else puuid.title(),
        "tag": tag,
        "team": team,
        "character": character,
        "stats": {"kills": kills, "deaths": deaths, "assists": assists, "score": score},
    }


def build_match(
    players: List[Dict[str, Any]],
    winner: Optional[str] = "blue",
    matchid: str = "match-1",
    rounds: tuple = (13, 7),
    teams: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Raw v3 match; ``winner`` None gives a draw on ``rounds[0]`` each."""
    if teams is None:
        won, lost = rounds
        if winner is None:
            teams = {
                "red": {"has_won": False, "rounds_won": won, "rounds_lost": won},
                "blue": {"has_won": False, "rounds_won": won, "rounds_lost": won},
            }
        else:
            loser = "red" if winner == "blue" else "blue"
            teams = {
                winner: {"has_won": True, "rounds_won": won, "rounds_lost": lost},
                loser: {"has_won": False, "rounds_won": lost, "rounds_lost": won},
            }
    return {
        "metadata": {"matchid": matchid, "map": "Ascent", "mode": "Competitive"},
        "players": {"all_players": players},
        "teams": teams,
    }


@pytest.fixture
def make_player():
    return build_player


@pytest.fixture
def make_match():
    return build_match


@pytest.fixture
def make_record():
    """Build a decoded MatchRecord straight from builder arguments."""

    def _make(*args, **kwargs) -> MatchRecord:
        return MatchRecord.from_payload(build_match(*args, **kwargs))

    return _make


@pytest.fixture
def losing_to_opponent(make_player, make_record):
    """Subject on red losing to ``opp`` on blue, with ``mate`` on red."""

    def _make(count: int, opponent: str = "opp") -> List[MatchRecord]:
        return [
            make_record(
                [
                    make_player(SUBJECT, team="Red"),
                    make_player("mate", team="Red"),
                    make_player(opponent, team="Blue"),
                ],
                winner="blue",
                matchid=f"match-{i}",
            )
            for i in range(count)
        ]

    return _make
