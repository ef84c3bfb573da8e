from dataclasses import replace
from typing import Iterable, Optional, Union
import structlog

from app.algorithms.opponent_interaction import (
    AnalysisConfig,
    OpponentInteractionAnalyzer,
)
from app.core.decorators import service_error_handler, input_validation
from app.core.exceptions import AnalysisServiceError
from app.core.henrik_api import MatchRecord, Region
from app.features.abuse_detection.gateway import MatchHistoryGateway
from app.features.abuse_detection.schemas import AbuseAnalysisResponse
from app.features.abuse_detection.transformers import report_to_response

logger = structlog.get_logger(__name__)


class AbuseDetectionService:
    """Fetches a player's match history and runs the opponent interaction analysis"""

    def __init__(
        self,
        gateway: MatchHistoryGateway,
        default_config: Optional[AnalysisConfig] = None,
    ):
        self.gateway = gateway
        self.default_config = default_config or AnalysisConfig()

    def build_config(
        self,
        enemy_threshold: Optional[int] = None,
        loss_ratio_threshold: Optional[float] = None,
    ) -> AnalysisConfig:
        """Default config with per-request threshold overrides applied"""
        overrides = {}
        if enemy_threshold is not None:
            overrides["enemy_threshold"] = enemy_threshold
        if loss_ratio_threshold is not None:
            overrides["loss_ratio_threshold"] = loss_ratio_threshold
        return replace(self.default_config, **overrides)

    def analyze_matches(
        self,
        matches: Iterable[MatchRecord],
        puuid: str,
        config: Optional[AnalysisConfig] = None,
    ) -> AbuseAnalysisResponse:
        """Run the analysis over already-decoded matches"""
        analyzer = OpponentInteractionAnalyzer(config or self.default_config)
        report = analyzer.analyze(matches, puuid)
        return report_to_response(report)

    @service_error_handler(
        "AbuseDetectionService", default_error_type=AnalysisServiceError
    )
    @input_validation(validate_non_empty=["puuid"])
    async def analyze_player(
        self,
        puuid: str,
        region: Union[Region, str],
        enemy_threshold: Optional[int] = None,
        loss_ratio_threshold: Optional[float] = None,
    ) -> AbuseAnalysisResponse:
        """Fetch the player's recent matches and analyse them"""
        config = self.build_config(enemy_threshold, loss_ratio_threshold)
        matches = await self.gateway.fetch_match_history(puuid, region)

        response = self.analyze_matches(matches, puuid, config)
        logger.info(
            "abuse_analysis_completed",
            puuid=puuid,
            matches=response.matches_count,
            abusing_detected=response.abusing_detected,
        )
        return response
