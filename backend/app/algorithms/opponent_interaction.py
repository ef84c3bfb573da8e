"""
Opponent interaction aggregation and suspicion classification.

Walks a player's match history once, building per-opponent encounter
statistics, then flags opponents the subject keeps losing against while they
sit on the other team. A high loss share against one specific counterpart is
the signature of deliberate losses used for account boosting.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

import structlog

from app.core.enums import MatchOutcome
from app.core.henrik_api.models import MatchPlayer, MatchRecord
from .outcome_resolver import OutcomeResolver, ResolvedMatch, same_id

logger = structlog.get_logger(__name__)

DEFAULT_ENEMY_THRESHOLD = 3
DEFAULT_LOSS_RATIO_THRESHOLD = 0.75

# Earlier rule: 5 encounters on any side, 80% losses
LEGACY_ENCOUNTER_THRESHOLD = 5
LEGACY_LOSS_RATIO_THRESHOLD = 0.8

# Low-KDA rule, off unless max_avg_kda is set
DEFAULT_KDA_MIN_ENCOUNTERS = 5


@dataclass(frozen=True)
class AnalysisConfig:
    """Thresholds and policies for one analysis run.

    Attributes:
        enemy_threshold: Minimum encounters as enemy (or in total, with
            ``ignore_side``) before an opponent can be flagged
        loss_ratio_threshold: Minimum ``subject_losses / encounters``
        treat_unknown_as_loss: Count matches without team data as losses
        ignore_side: Compare ``enemy_threshold`` against all encounters
        skip_malformed_matches: Drop matches missing players/teams entirely
            instead of keeping them in the history
        max_avg_kda: Flag an opponent when the subject's average KDA in
            enemy encounters is at or below this value; None disables it
        kda_min_encounters: Enemy encounters required before the KDA rule
            applies
    """

    enemy_threshold: int = DEFAULT_ENEMY_THRESHOLD
    loss_ratio_threshold: float = DEFAULT_LOSS_RATIO_THRESHOLD
    treat_unknown_as_loss: bool = True
    ignore_side: bool = False
    skip_malformed_matches: bool = False
    max_avg_kda: Optional[float] = None
    kda_min_encounters: int = DEFAULT_KDA_MIN_ENCOUNTERS

    def __post_init__(self) -> None:
        if isinstance(self.enemy_threshold, bool) or not isinstance(
            self.enemy_threshold, int
        ):
            raise ValueError("enemy_threshold must be an integer")
        if self.enemy_threshold < 1:
            raise ValueError("enemy_threshold must be at least 1")
        if not 0.0 <= self.loss_ratio_threshold <= 1.0:
            raise ValueError("loss_ratio_threshold must be between 0 and 1")
        if self.max_avg_kda is not None and self.max_avg_kda < 0:
            raise ValueError("max_avg_kda must not be negative")
        if self.kda_min_encounters < 1:
            raise ValueError("kda_min_encounters must be at least 1")

    @classmethod
    def legacy(cls) -> "AnalysisConfig":
        """The simpler side-agnostic rule: 5 encounters, 80% losses."""
        return cls(
            enemy_threshold=LEGACY_ENCOUNTER_THRESHOLD,
            loss_ratio_threshold=LEGACY_LOSS_RATIO_THRESHOLD,
            ignore_side=True,
        )

    def counts_as_loss(self, outcome: MatchOutcome) -> bool:
        """Whether ``outcome`` adds to an opponent's ``subject_losses``."""
        if outcome is MatchOutcome.UNKNOWN:
            return self.treat_unknown_as_loss
        return outcome is not MatchOutcome.WIN


@dataclass
class OpponentStat:
    """Accumulated interaction with one opponent.

    Stat totals are the opponent's own, summed over encounters.
    """

    puuid: str
    name: str = ""
    tag: str = ""
    encounters: int = 0
    as_ally: int = 0
    as_enemy: int = 0
    subject_losses: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    score: int = 0
    # Sum of the subject's per-match KDA over enemy encounters
    subject_kda_as_enemy: float = 0.0

    @property
    def display_name(self) -> str:
        return f"{self.name}#{self.tag}"

    @property
    def loss_ratio(self) -> float:
        return self.subject_losses / self.encounters if self.encounters else 0.0

    @property
    def avg_subject_kda(self) -> float:
        """Subject's mean KDA in matches against this opponent as an enemy."""
        return self.subject_kda_as_enemy / self.as_enemy if self.as_enemy else 0.0

    def record(
        self,
        player: MatchPlayer,
        allied: bool,
        subject_lost: bool,
        subject_kda: float = 0.0,
    ) -> None:
        """Add one encounter with ``player``."""
        if not self.name and player.name:
            self.name, self.tag = player.name, player.tag

        self.encounters += 1
        if allied:
            self.as_ally += 1
        else:
            self.as_enemy += 1
            self.subject_kda_as_enemy += subject_kda
        if subject_lost:
            self.subject_losses += 1

        self.kills += player.stats.kills
        self.deaths += player.stats.deaths
        self.assists += player.stats.assists
        self.score += player.stats.score


@dataclass
class MatchSummary:
    """The subject's line for one match of the history."""

    match_id: str
    map: str
    mode: str
    agent: str
    result: MatchOutcome
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    score: int = 0


@dataclass
class Finding:
    """A flagged opponent and why."""

    puuid: str
    description: str


@dataclass
class InteractionReport:
    """Result of one analysis run."""

    matches_count: int
    opponents: List[OpponentStat] = field(default_factory=list)
    findings: List[Finding] = field(default_factory=list)
    history: List[MatchSummary] = field(default_factory=list)

    @property
    def abusing_detected(self) -> bool:
        return bool(self.findings)

    @property
    def details(self) -> List[str]:
        return [finding.description for finding in self.findings]


class OpponentInteractionAnalyzer:
    """Aggregates opponent encounters and flags suspicious counterparts."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize the analyzer.

        Args:
            config: Thresholds and policies; defaults to AnalysisConfig()
        """
        self.config = config or AnalysisConfig()

    def analyze(
        self, matches: Iterable[MatchRecord], subject_puuid: str
    ) -> InteractionReport:
        """
        Build the interaction report for ``subject_puuid``.

        Args:
            matches: Match history in chronological order as supplied
            subject_puuid: Identifier of the analysed player

        Returns:
            InteractionReport with opponents sorted by encounters (descending)
        """
        matches = list(matches)
        resolver = OutcomeResolver(subject_puuid)
        opponents: Dict[str, OpponentStat] = {}
        history: List[MatchSummary] = []
        skipped = 0

        for match in matches:
            if match.malformed and self.config.skip_malformed_matches:
                skipped += 1
                logger.debug(
                    "Skipping malformed match", match_id=match.metadata.matchid
                )
                continue

            resolved = resolver.resolve(match)
            history.append(self._summarize(match, resolved))
            self._accumulate(match, resolved, subject_puuid, opponents)

        # sorted() is stable, so ties keep first-encounter order
        ranked = sorted(opponents.values(), key=lambda s: s.encounters, reverse=True)
        findings: List[Finding] = []
        for stat in ranked:
            if self.is_flagged(stat):
                findings.append(
                    Finding(puuid=stat.puuid, description=self._describe(stat))
                )
            if self.has_low_kda(stat):
                findings.append(
                    Finding(puuid=stat.puuid, description=self._describe_kda(stat))
                )

        logger.info(
            "Opponent interaction analysis completed",
            matches=len(matches),
            skipped_matches=skipped,
            opponents=len(ranked),
            flagged=len(findings),
            enemy_threshold=self.config.enemy_threshold,
            loss_ratio_threshold=self.config.loss_ratio_threshold,
            max_avg_kda=self.config.max_avg_kda,
        )

        return InteractionReport(
            matches_count=len(matches),
            opponents=ranked,
            findings=findings,
            history=history,
        )

    def is_flagged(self, stat: OpponentStat) -> bool:
        """Apply the suspicion thresholds to final tallies.

        The loss ratio is over all encounters, not only enemy ones.
        """
        side_count = stat.encounters if self.config.ignore_side else stat.as_enemy
        return (
            side_count >= self.config.enemy_threshold
            and stat.loss_ratio >= self.config.loss_ratio_threshold
        )

    def has_low_kda(self, stat: OpponentStat) -> bool:
        """Opt-in rule: the subject plays abnormally badly against this enemy."""
        if self.config.max_avg_kda is None:
            return False
        return (
            stat.as_enemy >= self.config.kda_min_encounters
            and stat.avg_subject_kda <= self.config.max_avg_kda
        )

    def _accumulate(
        self,
        match: MatchRecord,
        resolved: ResolvedMatch,
        subject_puuid: str,
        opponents: Dict[str, OpponentStat],
    ) -> None:
        subject_lost = self.config.counts_as_loss(resolved.outcome)
        subject_kda = self._kda(resolved)
        seen: Set[str] = set()

        for player in match.players:
            # Entries without an identifier cannot be tracked across matches
            if not player.puuid or same_id(player.puuid, subject_puuid):
                continue

            # One encounter per match, even if a player is listed twice
            key = player.puuid.casefold()
            if key in seen:
                continue
            seen.add(key)

            stat = opponents.get(key)
            if stat is None:
                stat = opponents[key] = OpponentStat(puuid=player.puuid)

            allied = (
                bool(resolved.team)
                and bool(player.team)
                and same_id(player.team, resolved.team)
            )
            stat.record(
                player,
                allied=allied,
                subject_lost=subject_lost,
                subject_kda=subject_kda,
            )

    @staticmethod
    def _kda(resolved: ResolvedMatch) -> float:
        stats = resolved.subject_stats
        return (stats.kills + stats.assists) / max(1, stats.deaths)

    @staticmethod
    def _summarize(match: MatchRecord, resolved: ResolvedMatch) -> MatchSummary:
        stats = resolved.subject_stats
        return MatchSummary(
            match_id=match.metadata.matchid,
            map=match.metadata.map,
            mode=match.metadata.mode,
            agent=resolved.subject.character if resolved.subject else "",
            result=resolved.outcome,
            kills=stats.kills,
            deaths=stats.deaths,
            assists=stats.assists,
            score=stats.score,
        )

    @staticmethod
    def _describe(stat: OpponentStat) -> str:
        return (
            f"Opponent {stat.display_name} ({stat.puuid}): met {stat.encounters} times "
            f"({stat.as_enemy} as enemy), subject lost {stat.subject_losses} "
            f"({stat.loss_ratio:.0%})"
        )

    @staticmethod
    def _describe_kda(stat: OpponentStat) -> str:
        return (
            f"Opponent {stat.display_name} ({stat.puuid}): met {stat.as_enemy} times "
            f"as enemy, subject average KDA {stat.avg_subject_kda:.2f}"
        )
