"""
HenrikDev API Gateway - Anti-Corruption Layer for the players feature.

Translates provider account DTOs into our cached account model so the rest of
the feature never sees the provider's payload layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import structlog

from .orm_models import PlayerAccountORM

if TYPE_CHECKING:
    from app.core.henrik_api.client import HenrikAPIClient

logger = structlog.get_logger(__name__)


class HenrikAccountGateway:
    """Fetches accounts from the HenrikDev API as PlayerAccountORM objects."""

    def __init__(self, henrik_client: "HenrikAPIClient"):
        """
        Initialize gateway with HenrikDev API client.

        :param henrik_client: Low-level HenrikDev API client
        """
        self._client = henrik_client

    async def fetch_account(self, name: str, tag: str) -> PlayerAccountORM:
        """
        Fetch an account by Riot ID and translate it to our domain model.

        Args:
            name: Riot ID game name
            tag: Riot ID tag line

        Returns:
            PlayerAccountORM (not yet persisted)

        Raises:
            NotFoundError: If the account doesn't exist
            HenrikAPIError: If the API call fails
        """
        logger.debug("Fetching account from HenrikDev API", name=name, tag=tag)

        account_dto = await self._client.get_account(name, tag)

        return PlayerAccountORM(
            puuid=account_dto.puuid,
            name=account_dto.name,
            tag=account_dto.tag,
            region=account_dto.region,
            account_level=account_dto.account_level,
            card_small=account_dto.card.small if account_dto.card else None,
            payload=account_dto.raw,
        )
