"""
Detection algorithms package for abuse detection analysis.

This package contains the per-match outcome resolver and the opponent
interaction analyzer that flags suspected deliberate-loss patterns.
"""

from .outcome_resolver import OutcomeResolver, ResolvedMatch
from .opponent_interaction import (
    AnalysisConfig,
    Finding,
    InteractionReport,
    MatchSummary,
    OpponentInteractionAnalyzer,
    OpponentStat,
)

__all__ = [
    "OutcomeResolver",
    "ResolvedMatch",
    "AnalysisConfig",
    "Finding",
    "InteractionReport",
    "MatchSummary",
    "OpponentInteractionAnalyzer",
    "OpponentStat",
]
