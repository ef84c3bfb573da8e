"""Player service for account lookups.

Thin orchestration over the account cache (repository) and the HenrikDev API
(gateway). The cache is best effort: read or write failures are logged and
the lookup continues against the provider.
"""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from .schemas import AccountResponse
from .repository import PlayerAccountRepositoryInterface
from .transformers import account_orm_to_response
from .gateway import HenrikAccountGateway
from app.core.exceptions import PlayerServiceError
from app.core.decorators import service_error_handler, input_validation

logger = structlog.get_logger(__name__)


class PlayerService:
    """Service for handling player account lookups."""

    def __init__(
        self,
        repository: PlayerAccountRepositoryInterface,
        gateway: HenrikAccountGateway,
    ):
        """Initialize player service with repository and gateway.

        :param repository: Account cache
        :param gateway: Anti-Corruption Layer for the HenrikDev API
        """
        self.repository = repository
        self.gateway = gateway

    @service_error_handler("PlayerService", default_error_type=PlayerServiceError)
    @input_validation(validate_non_empty=["name", "tag"])
    async def get_account(self, name: str, tag: str) -> AccountResponse:
        """Look up an account by Riot ID, serving from the cache when possible.

        :param name: Riot ID game name
        :param tag: Riot ID tag line
        :returns: Account response schema
        :raises NotFoundError: If the provider has no such account
        :raises HenrikAPIError: If the provider call fails
        """
        safe_name = name.strip()
        safe_tag = tag.strip()

        try:
            cached = await self.repository.find_by_riot_id(safe_name, safe_tag)
        except SQLAlchemyError as e:
            logger.warning(
                "Account cache lookup failed, falling back to provider",
                name=safe_name,
                tag=safe_tag,
                error=str(e),
            )
            cached = None

        if cached is not None:
            logger.info("Account served from cache", puuid=cached.puuid)
            return account_orm_to_response(cached, cached=True)

        logger.info("Account not cached, calling provider", name=safe_name, tag=safe_tag)
        account = await self.gateway.fetch_account(safe_name, safe_tag)

        try:
            account = await self.repository.upsert(account)
        except SQLAlchemyError as e:
            logger.warning(
                "Failed to cache account",
                puuid=account.puuid,
                error=str(e),
            )

        return account_orm_to_response(account, cached=False)
