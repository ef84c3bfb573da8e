from dataclasses import replace
from typing import Annotated

from fastapi import Depends

from app.algorithms.opponent_interaction import AnalysisConfig
from app.core.dependencies import HenrikClientDep, SettingsDep
from app.features.abuse_detection.gateway import MatchHistoryGateway
from app.features.abuse_detection.service import AbuseDetectionService


# Gateway dependency
def get_match_history_gateway(henrik_client: HenrikClientDep) -> MatchHistoryGateway:
    return MatchHistoryGateway(henrik_client)


MatchHistoryGatewayDep = Annotated[
    MatchHistoryGateway, Depends(get_match_history_gateway)
]


# Config dependency
def get_analysis_config(settings: SettingsDep) -> AnalysisConfig:
    """Analysis defaults from settings; the legacy rule ignores the thresholds."""
    if settings.abuse_rule == "legacy":
        base = AnalysisConfig.legacy()
    else:
        base = AnalysisConfig(
            enemy_threshold=settings.abuse_enemy_threshold,
            loss_ratio_threshold=settings.abuse_loss_ratio_threshold,
        )
    return replace(
        base,
        treat_unknown_as_loss=settings.abuse_treat_unknown_as_loss,
        skip_malformed_matches=settings.abuse_skip_malformed_matches,
        max_avg_kda=settings.abuse_max_avg_kda,
        kda_min_encounters=settings.abuse_kda_min_encounters,
    )


AnalysisConfigDep = Annotated[AnalysisConfig, Depends(get_analysis_config)]


# Service dependency
def get_abuse_detection_service(
    gateway: MatchHistoryGatewayDep, config: AnalysisConfigDep
) -> AbuseDetectionService:
    return AbuseDetectionService(gateway, config)


AbuseDetectionServiceDep = Annotated[
    AbuseDetectionService, Depends(get_abuse_detection_service)
]
