import pytest
from unittest.mock import AsyncMock, MagicMock

from app.features.players.orm_models import PlayerAccountORM
from app.features.players.repository import (
    PlayerAccountRepositoryInterface,
    SQLAlchemyPlayerAccountRepository,
)


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def repository(mock_db):
    return SQLAlchemyPlayerAccountRepository(mock_db)


@pytest.fixture
def account():
    return PlayerAccountORM(puuid="p-1", name="Player", tag="KR1", payload={})


def test_repository_implements_interface(repository):
    """Test the SQLAlchemy repository satisfies the interface"""
    assert isinstance(repository, PlayerAccountRepositoryInterface)


async def test_find_by_riot_id_hit(repository, mock_db, account):
    """Test cache lookup returns the stored row"""
    # Setup
    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = account
    mock_db.execute = AsyncMock(return_value=mock_result)

    # Execute
    result = await repository.find_by_riot_id("player", "kr1")

    # Verify
    assert result is account
    mock_db.execute.assert_called_once()


async def test_find_by_riot_id_miss(repository, mock_db):
    """Test cache lookup returns None when nothing is stored"""
    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = None
    mock_db.execute = AsyncMock(return_value=mock_result)

    assert await repository.find_by_riot_id("Nobody", "0000") is None


async def test_find_by_riot_id_compares_lower_case(repository, mock_db):
    """Test the lookup query lower-cases both columns"""
    mock_result = MagicMock()
    mock_result.scalars.return_value.first.return_value = None
    mock_db.execute = AsyncMock(return_value=mock_result)

    await repository.find_by_riot_id("PlAyEr", "Kr1")

    stmt = mock_db.execute.call_args.args[0]
    compiled = stmt.compile(compile_kwargs={"literal_binds": True})
    sql = str(compiled).lower()
    assert "lower(player_accounts.name) = 'player'" in sql
    assert "lower(player_accounts.tag) = 'kr1'" in sql


async def test_upsert_merges_and_commits(repository, mock_db, account):
    """Test upsert overwrites by primary key and commits"""
    mock_db.merge = AsyncMock(return_value=account)
    mock_db.commit = AsyncMock()

    result = await repository.upsert(account)

    assert result is account
    mock_db.merge.assert_called_once_with(account)
    mock_db.commit.assert_called_once()


async def test_count(repository, mock_db):
    """Test counting cached accounts"""
    mock_result = MagicMock()
    mock_result.scalar_one.return_value = 7
    mock_db.execute = AsyncMock(return_value=mock_result)

    assert await repository.count() == 7
