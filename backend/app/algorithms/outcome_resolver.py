"""
Outcome and identity resolution for a single match.

Finds the subject's entry in a match, maps their team label to a key of the
``teams`` mapping and derives the subject's result. Missing data degrades to
defaults instead of raising.
"""

from dataclasses import dataclass, field
from typing import Optional

from app.core.enums import MatchOutcome, TeamKey
from app.core.henrik_api.models import MatchPlayer, MatchRecord, PlayerStats


def same_id(left: str, right: str) -> bool:
    """Case-insensitive identifier comparison."""
    return left.casefold() == right.casefold()


@dataclass
class ResolvedMatch:
    """What one match says about the subject."""

    subject: Optional[MatchPlayer]
    team: str
    outcome: MatchOutcome
    subject_stats: PlayerStats = field(default_factory=PlayerStats)

    @property
    def subject_found(self) -> bool:
        return self.subject is not None


class OutcomeResolver:
    """Resolves the subject's team and result for individual matches."""

    def __init__(self, subject_puuid: str):
        self.subject_puuid = subject_puuid

    def find_subject(self, match: MatchRecord) -> Optional[MatchPlayer]:
        """Return the first player entry matching the subject, if any."""
        for player in match.players:
            if same_id(player.puuid, self.subject_puuid):
                return player
        return None

    @staticmethod
    def team_key(team_label: str) -> TeamKey:
        """Map a player's team label to a ``teams`` key.

        Only "blue" (any casing) maps to BLUE; everything else, including an
        empty label, maps to RED.
        """
        if team_label.casefold() == TeamKey.BLUE.value:
            return TeamKey.BLUE
        return TeamKey.RED

    @classmethod
    def outcome_for(cls, match: MatchRecord, team_label: str) -> MatchOutcome:
        """Result of the team with ``team_label`` in ``match``."""
        team = match.teams.get(cls.team_key(team_label).value)
        if team is None:
            return MatchOutcome.UNKNOWN
        if team.has_won:
            return MatchOutcome.WIN
        if team.rounds_won == team.rounds_lost and team.rounds_won > 0:
            return MatchOutcome.DRAW
        return MatchOutcome.LOSS

    def resolve(self, match: MatchRecord) -> ResolvedMatch:
        """Resolve subject, team and outcome for one match."""
        subject = self.find_subject(match)
        if subject is None:
            return ResolvedMatch(subject=None, team="", outcome=MatchOutcome.UNKNOWN)

        return ResolvedMatch(
            subject=subject,
            team=subject.team,
            outcome=self.outcome_for(match, subject.team),
            subject_stats=subject.stats,
        )
