"""
Tests for the HenrikDev API client.

The network is stubbed with httpx.MockTransport; retry delays are disabled
with backoff_base=0.
"""

import httpx
import pytest

from app.core.henrik_api.client import HenrikAPIClient
from app.core.henrik_api.constants import MAX_RETRIES, Region
from app.core.henrik_api.errors import (
    AuthenticationError,
    HenrikAPIError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
)


def _client(handler, api_key="test-key"):
    return HenrikAPIClient(
        api_key=api_key,
        base_url="https://henrik.test",
        timeout=5,
        transport=httpx.MockTransport(handler),
        backoff_base=0,
    )


@pytest.fixture
def account_data():
    return {
        "puuid": "p-1",
        "name": "Player",
        "tag": "KR1",
        "region": "kr",
        "account_level": 87,
    }


class TestGetAccount:
    """Account lookups."""

    async def test_success_sends_key_and_decodes(self, account_data):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": 200, "data": account_data})

        async with _client(handler) as client:
            account = await client.get_account("Player", "KR1")

        assert account.puuid == "p-1"
        assert account.raw == account_data
        assert seen[0].url.path == "/valorant/v1/account/Player/KR1"
        assert seen[0].headers["Authorization"] == "test-key"

    async def test_no_authorization_header_without_key(self, account_data):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": account_data})

        async with _client(handler, api_key="") as client:
            await client.get_account("Player", "KR1")

        assert "Authorization" not in seen[0].headers

    async def test_404_maps_to_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404, json={"errors": [{"message": "Account not found"}]}
            )

        async with _client(handler) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.get_account("Nobody", "0000")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Account not found"

    async def test_missing_data_maps_to_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": 200, "data": None})

        async with _client(handler) as client:
            with pytest.raises(NotFoundError):
                await client.get_account("Player", "KR1")

    async def test_401_maps_to_authentication_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401)

        async with _client(handler) as client:
            with pytest.raises(AuthenticationError):
                await client.get_account("Player", "KR1")


class TestRetries:
    """Retry behaviour on transient failures."""

    async def test_rate_limit_then_success(self, account_data):
        responses = [
            httpx.Response(429, headers={"Retry-After": "2"}),
            httpx.Response(200, json={"data": account_data}),
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        async with _client(handler) as client:
            account = await client.get_account("Player", "KR1")

        assert account.puuid == "p-1"
        assert responses == []

    async def test_rate_limit_exhausted(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(429, headers={"Retry-After": "3"})

        async with _client(handler) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_account("Player", "KR1")

        assert len(calls) == MAX_RETRIES + 1
        assert exc_info.value.retry_after == 3.0

    async def test_server_error_exhausted(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async with _client(handler) as client:
            with pytest.raises(ServiceUnavailableError):
                await client.get_account("Player", "KR1")

        assert len(calls) == MAX_RETRIES + 1

    async def test_transport_error_exhausted(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(HenrikAPIError, match="Request failed"):
                await client.get_account("Player", "KR1")

    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        async with _client(handler) as client:
            with pytest.raises(HenrikAPIError, match="Invalid JSON"):
                await client.get_account("Player", "KR1")

    async def test_non_object_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[1, 2, 3])

        async with _client(handler) as client:
            with pytest.raises(HenrikAPIError, match="Expected JSON object"):
                await client.get_account("Player", "KR1")


class TestGetMatchHistory:
    """v3 match-history lookups."""

    async def test_decodes_matches(self, make_match, make_player):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "status": 200,
                    "data": [make_match([make_player("a")]), "junk", {}],
                },
            )

        async with _client(handler) as client:
            matches = await client.get_match_history("p-1", Region.KR)

        assert seen[0].url.path == "/valorant/v3/by-puuid/matches/kr/p-1"
        assert len(matches) == 2
        assert matches[0].malformed is False
        assert matches[1].malformed is True

    async def test_region_string_is_lower_cased(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": []})

        async with _client(handler) as client:
            assert await client.get_match_history("p-1", "EU", size=5) == []

        assert seen[0].url.path == "/valorant/v3/by-puuid/matches/eu/p-1"
        assert seen[0].url.params["size"] == "5"

    async def test_null_data_is_empty_history(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": None})

        async with _client(handler) as client:
            assert await client.get_match_history("p-1", Region.NA) == []

    async def test_non_list_data_is_an_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {"oops": True}})

        async with _client(handler) as client:
            with pytest.raises(HenrikAPIError, match="Expected list"):
                await client.get_match_history("p-1", Region.NA)
