"""Transformers for converting between layers in the players feature."""

from .orm_models import PlayerAccountORM
from .schemas import AccountResponse


def account_orm_to_response(account: PlayerAccountORM, cached: bool) -> AccountResponse:
    """Transform a cached account row into the API response.

    :param account: Account domain model
    :param cached: Whether the row came from the cache
    :returns: Account response schema for API
    """
    return AccountResponse(
        puuid=account.puuid,
        name=account.name,
        tag=account.tag,
        data=dict(account.payload or {}),
        cached=cached,
    )
