"""Async client for the auto-api.com car listings API."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from auto_api_client.config import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    Settings,
)
from auto_api_client.errors import ApiError, AuthError, NetworkError
from auto_api_client.models import (
    ChangesResult,
    OffersQuery,
    OffersResult,
    parse_change_cursor,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

AUTH_STATUSES = (401, 403)
SNIPPET_LENGTH = 200


def _passthrough(payload: Any) -> Any:
    return payload


class AutoApiClient:
    """Async client for auto-api.com.

    One instance can serve concurrent calls: the only shared state is the
    configuration, which should be set before the first request.

    Every GET endpoint sends the key as the ``api_key`` query parameter.
    ``get_offer_by_url`` is the exception: it posts to the fixed ``v1`` path
    and sends the key in the ``x-api-key`` header.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize client with optional shared ``httpx.AsyncClient``.

        ``transport`` is only used by the client created here when no
        ``http_client`` is given.
        """
        self.config = ClientConfig(
            api_key=api_key,
            base_url=base_url,
            api_version=api_version,
            timeout=timeout,
        )
        self._client = http_client
        self._owns_client = http_client is None
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "AutoApiClient":
        """Build a client from ``AUTO_API_*`` environment variables or ``.env``."""
        config = (settings or Settings()).to_client_config()
        return cls(
            config.api_key,
            base_url=config.base_url,
            api_version=config.api_version,
            timeout=config.timeout,
            http_client=http_client,
        )

    def set_base_url(self, base_url: str) -> None:
        self.config.base_url = base_url.rstrip("/")

    def set_api_version(self, version: str) -> None:
        self.config.api_version = version

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
                transport=self._transport,
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "AutoApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _source_url(self, source: str, endpoint: str) -> str:
        return f"{self.config.base_url}/api/{self.config.api_version}/{source}/{endpoint}"

    async def list_filters(self, source: str) -> Any:
        """Return the filters a source supports (brands, models, body types, ...)."""
        return await self._get(self._source_url(source, "filters"), [], _passthrough)

    async def list_offers(
        self, source: str, query: Optional[OffersQuery] = None
    ) -> OffersResult:
        """Return one page of offers matching ``query`` (page 1, unfiltered by default)."""
        query = query or OffersQuery()
        return await self._get(
            self._source_url(source, "offers"),
            query.to_query_pairs(),
            OffersResult.from_payload,
        )

    async def get_offer(self, source: str, inner_id: str) -> OffersResult:
        """Return the offer with the given source-specific id.

        The response has the listing shape and may hold zero or more items.
        """
        return await self._get(
            self._source_url(source, "offer"),
            [("inner_id", inner_id)],
            OffersResult.from_payload,
        )

    async def get_change_cursor(self, source: str, date: str) -> int:
        """Return the change id the feed had on ``date`` (``yyyy-mm-dd``, sent as is).

        Zero is a valid cursor meaning the start of the feed.
        """
        return await self._get(
            self._source_url(source, "change_id"),
            [("date", date)],
            parse_change_cursor,
        )

    async def list_changes(self, source: str, change_id: int) -> ChangesResult:
        """Return the batch of added/changed/removed offers starting at ``change_id``."""
        return await self._get(
            self._source_url(source, "changes"),
            [("change_id", str(change_id))],
            ChangesResult.from_payload,
        )

    async def get_offer_by_url(self, url: str) -> Any:
        """Return offer data for a marketplace listing URL."""
        endpoint = f"{self.config.base_url}/api/v1/offer/info"
        headers = {
            "x-api-key": self.config.api_key,
            "Content-Type": "application/json",
        }
        logger.debug("POST %s", endpoint)
        response = await self._send("POST", endpoint, headers=headers, json={"url": url})
        return self._handle_response(response, _passthrough)

    async def _get(
        self,
        url: str,
        params: list[tuple[str, str]],
        parse: Callable[[Any], T],
    ) -> T:
        query = [*params, ("api_key", self.config.api_key)]
        logger.debug("GET %s params=%s", url, [key for key, _ in params])
        response = await self._send("GET", url, params=query)
        return self._handle_response(response, parse)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        try:
            return await asyncio.wait_for(
                client.request(method, url, **kwargs), timeout=self.config.timeout
            )
        except asyncio.TimeoutError as exc:
            logger.error("auto-api request timed out: %s %s", method, url)
            raise NetworkError(
                f"request timed out after {self.config.timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("auto-api transport error: %s %s: %s", method, url, exc)
            raise NetworkError(str(exc)) from exc

    def _handle_response(self, response: httpx.Response, parse: Callable[[Any], T]) -> T:
        status = response.status_code
        body = response.text

        if not 200 <= status < 300:
            message = f"API error: {status}"
            try:
                parsed = json.loads(body)
            except (ValueError, RecursionError):
                parsed = None
            if isinstance(parsed, dict) and isinstance(parsed.get("message"), str):
                message = parsed["message"]

            logger.warning("auto-api returned %s: %s", status, message)
            if status in AUTH_STATUSES:
                raise AuthError(status, message)
            raise ApiError(status, message, body)

        try:
            return parse(json.loads(body))
        except (ValueError, TypeError, RecursionError) as exc:
            logger.warning("auto-api returned an unexpected body with status %s: %s", status, exc)
            raise ApiError(
                status, f"Invalid JSON response: {body[:SNIPPET_LENGTH]}", body
            ) from exc
