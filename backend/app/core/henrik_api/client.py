"""HenrikDev API HTTP client with error mapping and retry on transient failures."""

import asyncio
from typing import Optional, Dict, Any, List, Union
from urllib.parse import quote

import httpx
import structlog

from app.core.config import get_global_settings
from .errors import (
    HenrikAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    BadRequestError,
)
from .models import AccountDTO, MatchRecord
from .constants import Region, MAX_RETRIES, USER_AGENT

logger = structlog.get_logger(__name__)


class HenrikAPIClient:
    """Async client for the HenrikDev Valorant API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        backoff_base: float = 1.0,
    ):
        """
        Initialize HenrikDev API client.

        Args:
            api_key: HenrikDev API key (uses config if None)
            base_url: API root URL (uses config if None)
            timeout: Total request timeout in seconds (uses config if None)
            transport: Optional httpx transport, used to stub the network in tests
            backoff_base: Multiplier for the exponential retry delay
        """
        settings = get_global_settings()
        self.api_key = api_key if api_key is not None else settings.henrik_api_key
        self.base_url = (base_url or settings.henrik_base_url).rstrip("/")
        self.timeout = timeout or settings.henrik_timeout_seconds
        self.backoff_base = backoff_base
        self._transport = transport

        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "Accept": "application/json",
                        "User-Agent": USER_AGENT,
                    }
                    if self.api_key:
                        headers["Authorization"] = self.api_key

                    self.session = httpx.AsyncClient(
                        base_url=self.base_url,
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout),
                        transport=self._transport,
                    )

                    logger.info(
                        "HenrikDev API client session started",
                        base_url=self.base_url,
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("HenrikDev API client session closed")

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        """Pull the provider's error message out of an error body, if any."""
        try:
            body = response.json()
        except ValueError:
            return default
        errors = body.get("errors") if isinstance(body, dict) else None
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return str(errors[0].get("message") or default)
        return default

    def _raise_client_error_if_needed(self, response: httpx.Response) -> None:
        """Raise specific HenrikAPIError subclass for client errors."""
        status = response.status_code
        if status == 400:
            raise BadRequestError(
                self._error_message(response, "Invalid request parameters"),
                status_code=status,
            )
        elif status == 401:
            raise AuthenticationError(
                self._error_message(response, "Invalid API key"), status_code=status
            )
        elif status == 403:
            raise ForbiddenError(
                self._error_message(response, "Access forbidden"), status_code=status
            )
        elif status == 404:
            raise NotFoundError(
                self._error_message(response, "Resource not found"),
                status_code=status,
            )

    def _handle_rate_limit(
        self, response: httpx.Response, attempt: int, max_retries: int
    ) -> float:
        """Handle rate limit (429): return the delay or raise once retries run out."""
        try:
            retry_after = float(response.headers.get("Retry-After", 1))
        except ValueError:
            retry_after = 1.0
        if attempt < max_retries:
            return retry_after * self.backoff_base
        raise RateLimitError(
            "Rate limit exceeded", status_code=429, retry_after=retry_after
        )

    def _handle_server_error(self, status: int, attempt: int, max_retries: int) -> float:
        """Handle server errors (5xx) with exponential backoff."""
        if attempt < max_retries:
            return (2**attempt) * self.backoff_base
        if status == 503:
            raise ServiceUnavailableError("Service unavailable", status_code=status)
        raise HenrikAPIError(f"Server error {status}", status_code=status)

    async def _make_request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        retry_on_failure: bool = True,
    ) -> Dict[str, Any]:
        """
        Make a GET request with retry logic.

        Args:
            path: Request path relative to the base URL
            params: Query parameters
            retry_on_failure: Retry on transient failures

        Returns:
            Decoded JSON body

        Raises:
            HenrikAPIError: For API errors
        """
        await self.start_session()

        if self.session is None:
            raise HenrikAPIError("Session not initialized")

        max_retries = MAX_RETRIES if retry_on_failure else 0
        last_error: Optional[Exception] = None

        for attempt in range(max_retries + 1):
            try:
                response = await self.session.get(path, params=params)
            except (httpx.RequestError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning(
                    "HenrikDev API request failed",
                    path=path,
                    attempt=attempt,
                    error=str(e),
                )
                if attempt < max_retries:
                    await asyncio.sleep((2**attempt) * self.backoff_base)
                continue

            if response.status_code == 200:
                try:
                    body = response.json()
                except ValueError as e:
                    raise HenrikAPIError(
                        f"Invalid JSON in response: {str(e)}", status_code=200
                    ) from e
                if not isinstance(body, dict):
                    raise HenrikAPIError(
                        f"Expected JSON object, got {type(body).__name__}",
                        status_code=200,
                    )
                return body

            logger.warning(
                "HenrikDev API error status",
                path=path,
                status_code=response.status_code,
                attempt=attempt,
            )
            self._raise_client_error_if_needed(response)

            if response.status_code == 429:
                delay = self._handle_rate_limit(response, attempt, max_retries)
            elif response.status_code >= 500:
                delay = self._handle_server_error(
                    response.status_code, attempt, max_retries
                )
            else:
                raise HenrikAPIError(
                    f"Unexpected status {response.status_code}",
                    status_code=response.status_code,
                )
            await asyncio.sleep(delay)

        raise HenrikAPIError(f"Request failed: {str(last_error)}")

    @staticmethod
    def _enum_str(value: Union[Region, str]) -> str:
        """Extract string value from enum or return as-is."""
        return value.value if isinstance(value, Region) else str(value).lower()

    # Account endpoints
    async def get_account(self, name: str, tag: str) -> AccountDTO:
        """Get account by Riot ID (name#tag)."""
        path = f"/valorant/v1/account/{quote(name, safe='')}/{quote(tag, safe='')}"
        response = await self._make_request(path)

        data = response.get("data")
        if not isinstance(data, dict) or not data.get("puuid"):
            raise NotFoundError(
                f"No account data for {name}#{tag}", status_code=404, response_data=response
            )
        return AccountDTO.from_payload(data)

    # Match endpoints
    async def get_match_history(
        self,
        puuid: str,
        region: Union[Region, str],
        size: Optional[int] = None,
    ) -> List[MatchRecord]:
        """Get the v3 match history for a PUUID, decoded into MatchRecord.

        Non-object entries in ``data`` are dropped; every other entry decodes,
        possibly with ``malformed`` set.
        """
        path = f"/valorant/v3/by-puuid/matches/{self._enum_str(region)}/{quote(puuid, safe='')}"
        params = {"size": size} if size else None
        response = await self._make_request(path, params=params)

        data = response.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise HenrikAPIError(
                f"Expected list response for match history, got {type(data).__name__}"
            )
        return [
            MatchRecord.from_payload(match) for match in data if isinstance(match, dict)
        ]
