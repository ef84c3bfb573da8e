"""Data mapper from the analysis engine's report to API schemas."""

from app.algorithms.opponent_interaction import (
    InteractionReport,
    MatchSummary,
    OpponentStat,
)
from .schemas import AbuseAnalysisResponse, MatchSummaryResponse, OpponentStatResponse


def opponent_to_response(stat: OpponentStat) -> OpponentStatResponse:
    return OpponentStatResponse(
        puuid=stat.puuid,
        display_name=stat.display_name,
        encounters=stat.encounters,
        as_ally=stat.as_ally,
        as_enemy=stat.as_enemy,
        subject_losses=stat.subject_losses,
        kills=stat.kills,
        deaths=stat.deaths,
        assists=stat.assists,
        score=stat.score,
    )


def summary_to_response(summary: MatchSummary) -> MatchSummaryResponse:
    return MatchSummaryResponse(
        match_id=summary.match_id,
        map=summary.map,
        mode=summary.mode,
        agent=summary.agent,
        result=summary.result,
        kills=summary.kills,
        deaths=summary.deaths,
        assists=summary.assists,
        score=summary.score,
    )


def report_to_response(report: InteractionReport) -> AbuseAnalysisResponse:
    """Transform an InteractionReport into the API response."""
    return AbuseAnalysisResponse(
        matches_count=report.matches_count,
        abusing_detected=report.abusing_detected,
        details=report.details,
        players=[opponent_to_response(stat) for stat in report.opponents],
        history=[summary_to_response(summary) for summary in report.history],
    )
