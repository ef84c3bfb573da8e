from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse
import structlog
from sqlalchemy.exc import SQLAlchemyError

from app.core.dependencies import DatabaseManagerDep
from app.core.exceptions import ServiceException
from app.core.henrik_api.errors import HenrikAPIError, NotFoundError, RateLimitError
from app.features.players.dependencies import PlayerRepositoryDep, PlayerServiceDep
from app.features.players.schemas import AccountResponse, DatabaseStatusResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["players"])


@router.get("/account/riotid", response_model=AccountResponse)
async def get_account(
    service: PlayerServiceDep,
    game_name: Optional[str] = Query(default=None, alias="gameName"),
    tag_line: Optional[str] = Query(default=None, alias="tagLine"),
) -> AccountResponse:
    """Look up an account by Riot ID (cached, falling back to the provider)"""
    logger.info("Account lookup requested", game_name=game_name, tag_line=tag_line)

    if not game_name or not game_name.strip() or not tag_line or not tag_line.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="gameName and tagLine are required",
        )

    try:
        return await service.get_account(game_name, tag_line)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Player not found"
        )
    except RateLimitError:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Upstream rate limit exceeded, try again later",
        )
    except HenrikAPIError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch account: {e.message}",
        )
    except ServiceException as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to look up account: {e.message}",
        )


@router.get(
    "/dbstatus", response_model=DatabaseStatusResponse, response_model_exclude_none=True
)
async def db_status(database: DatabaseManagerDep, repository: PlayerRepositoryDep):
    """Report database connectivity and the number of cached accounts.

    An unreachable database is a 500; a reachable one whose count fails still
    reports ``connected`` with the count error.
    """
    try:
        await database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database ping failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"connected": False, "error": str(e)},
        )

    try:
        count = await repository.count()
    except SQLAlchemyError as e:
        logger.error("Cached account count failed", error=str(e))
        return DatabaseStatusResponse(connected=True, count_error=str(e))
    return DatabaseStatusResponse(connected=True, players_count=count)
