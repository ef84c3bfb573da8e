from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
import structlog

from app.core.dependencies import SettingsDep
from app.core.exceptions import ServiceException, ValidationError
from app.core.henrik_api import HenrikAPIError, NotFoundError, RateLimitError, Region
from app.features.abuse_detection.dependencies import AbuseDetectionServiceDep
from app.features.abuse_detection.schemas import AbuseAnalysisResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/player", tags=["abuse-detection"])


@router.get("/matches/{puuid}", response_model=AbuseAnalysisResponse)
async def analyze_player_matches(
    puuid: str,
    service: AbuseDetectionServiceDep,
    settings: SettingsDep,
    region: Optional[Region] = Query(default=None),
    enemy_threshold: Optional[int] = Query(default=None, alias="enemyThreshold", ge=1),
    loss_ratio_threshold: Optional[float] = Query(
        default=None, alias="lossRatioThreshold", ge=0.0, le=1.0
    ),
) -> AbuseAnalysisResponse:
    """Analyse a player's recent matches for suspected deliberate losses"""
    try:
        return await service.analyze_player(
            puuid,
            region or settings.default_region,
            enemy_threshold=enemy_threshold,
            loss_ratio_threshold=loss_ratio_threshold,
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No match history found for this player",
        )
    except RateLimitError:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Upstream rate limit exceeded, try again later",
        )
    except HenrikAPIError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load match data: {e.message}",
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )
    except ServiceException as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to analyse matches: {e.message}",
        )
