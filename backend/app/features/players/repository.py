"""Repository pattern implementation for the players feature.

Provides a collection-like interface over cached player accounts and isolates
data access from business logic.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .orm_models import PlayerAccountORM

logger = structlog.get_logger(__name__)


class PlayerAccountRepositoryInterface(ABC):
    """Interface for the player account cache."""

    @abstractmethod
    async def find_by_riot_id(self, name: str, tag: str) -> Optional[PlayerAccountORM]:
        """Find a cached account by Riot ID, ignoring case.

        :param name: Riot ID game name
        :param tag: Riot ID tag line
        :returns: PlayerAccountORM if cached, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, account: PlayerAccountORM) -> PlayerAccountORM:
        """Insert the account or overwrite the cached row with the same PUUID.

        :param account: Account to store
        :returns: Persisted account
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of cached accounts."""
        pass


class SQLAlchemyPlayerAccountRepository(PlayerAccountRepositoryInterface):
    """SQLAlchemy implementation of the player account cache."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        :param db: Async database session
        """
        self.db = db

    async def find_by_riot_id(self, name: str, tag: str) -> Optional[PlayerAccountORM]:
        """Find a cached account by Riot ID, ignoring case."""
        stmt = select(PlayerAccountORM).where(
            func.lower(PlayerAccountORM.name) == name.lower(),
            func.lower(PlayerAccountORM.tag) == tag.lower(),
        )
        result = await self.db.execute(stmt)
        account = result.scalars().first()

        if account:
            logger.debug("player_account_cache_hit", name=name, tag=tag)

        return account

    async def upsert(self, account: PlayerAccountORM) -> PlayerAccountORM:
        """Insert or overwrite the cached row for this PUUID."""
        merged = await self.db.merge(account)
        await self.db.commit()
        logger.info(
            "player_account_cached", puuid=merged.puuid, riot_id=merged.riot_id
        )
        return merged

    async def count(self) -> int:
        """Number of cached accounts."""
        result = await self.db.execute(
            select(func.count()).select_from(PlayerAccountORM)
        )
        return int(result.scalar_one())
