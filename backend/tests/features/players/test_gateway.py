import pytest
from unittest.mock import AsyncMock

from app.core.henrik_api import AccountDTO, HenrikAPIClient, NotFoundError
from app.features.players.gateway import HenrikAccountGateway
from app.features.players.orm_models import PlayerAccountORM


@pytest.fixture
def mock_client():
    return AsyncMock(spec=HenrikAPIClient)


@pytest.fixture
def gateway(mock_client):
    return HenrikAccountGateway(mock_client)


async def test_fetch_account_translates_dto(gateway, mock_client):
    """Test gateway maps the provider DTO onto the cache model"""
    # Setup
    payload = {
        "puuid": "p-1",
        "name": "Player",
        "tag": "KR1",
        "region": "kr",
        "account_level": 55,
        "card": {"small": "https://cards/small.png"},
    }
    mock_client.get_account.return_value = AccountDTO.from_payload(payload)

    # Execute
    account = await gateway.fetch_account("Player", "KR1")

    # Verify
    assert isinstance(account, PlayerAccountORM)
    assert account.puuid == "p-1"
    assert account.riot_id == "Player#KR1"
    assert account.account_level == 55
    assert account.card_small == "https://cards/small.png"
    assert account.payload == payload
    mock_client.get_account.assert_called_once_with("Player", "KR1")


async def test_fetch_account_without_card(gateway, mock_client):
    """Test a missing card leaves card_small empty"""
    mock_client.get_account.return_value = AccountDTO.from_payload(
        {"puuid": "p-2", "name": "NoCard", "tag": "0001"}
    )

    account = await gateway.fetch_account("NoCard", "0001")

    assert account.card_small is None


async def test_fetch_account_propagates_not_found(gateway, mock_client):
    """Test provider errors are not swallowed"""
    mock_client.get_account.side_effect = NotFoundError("missing", status_code=404)

    with pytest.raises(NotFoundError):
        await gateway.fetch_account("Nobody", "0000")
