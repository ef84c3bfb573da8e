"""Dependencies for the players feature.

Injects repository and gateway into the service.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import get_db
from app.core.dependencies import HenrikClientDep
from .gateway import HenrikAccountGateway
from .service import PlayerService
from .repository import (
    SQLAlchemyPlayerAccountRepository,
    PlayerAccountRepositoryInterface,
)


async def get_player_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PlayerAccountRepositoryInterface:
    """Get player account repository instance.

    :param db: Database session
    :returns: Repository implementation
    """
    return SQLAlchemyPlayerAccountRepository(db)


async def get_account_gateway(henrik_client: HenrikClientDep) -> HenrikAccountGateway:
    """Get HenrikDev account gateway instance.

    :param henrik_client: HenrikDev API client
    :returns: Account gateway
    """
    return HenrikAccountGateway(henrik_client)


async def get_player_service(
    repository: Annotated[
        PlayerAccountRepositoryInterface, Depends(get_player_repository)
    ],
    gateway: Annotated[HenrikAccountGateway, Depends(get_account_gateway)],
) -> PlayerService:
    """Get player service instance.

    :param repository: Player account repository
    :param gateway: HenrikDev account gateway
    :returns: Player service with injected dependencies
    """
    return PlayerService(repository, gateway)


# Type aliases for cleaner dependency injection
PlayerServiceDep = Annotated[PlayerService, Depends(get_player_service)]
PlayerRepositoryDep = Annotated[
    PlayerAccountRepositoryInterface, Depends(get_player_repository)
]

__all__ = [
    "get_player_service",
    "get_player_repository",
    "get_account_gateway",
    "PlayerServiceDep",
    "PlayerRepositoryDep",
]
