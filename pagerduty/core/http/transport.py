from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

import httpx
from pydantic import ValidationError

from loggers import get_logger
from pagerduty.core.errors.exceptions import APIError, TransportError
from pagerduty.core.http.interface import RequesterProtocol
from pagerduty.core.http.schemas import ErrorEnvelope
from pagerduty.main.config import DEFAULT_API_ENDPOINT

logger = get_logger(__name__)

ACCEPT_HEADER = "application/vnd.pagerduty+json;version=2"


class HTTPTransport(RequesterProtocol):
    """
    Async requester for the PagerDuty REST API over httpx.

    Usage:
    async with HTTPTransport(api_token="...") as transport:
        body = await transport.request("GET", "/teams")
    """

    def __init__(
        self,
        *,
        api_token: str,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = api_token
        self._api_endpoint = api_endpoint.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Self:
        if self._client is not None:
            raise RuntimeError("HTTPTransport is already open.")
        self._client = httpx.AsyncClient(
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": ACCEPT_HEADER,
            "Authorization": f"Token token={self._api_token}",
            "Content-Type": "application/json",
        }

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "HTTP client is not initialized. Use 'async with HTTPTransport(...):'."
            )
        return self._client

    def _url(self, path: str) -> str:
        return f"{self._api_endpoint}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> bytes:
        client = self._ensure_client()
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, dict(params or {}))
        try:
            response = await client.request(method, url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("Request %s %s failed: %s", method, url, exc)
            raise TransportError(
                f"Failed to reach PagerDuty: {exc}",
                additional_info={"method": method, "url": url},
            ) from exc

        if response.is_error:
            error = self._api_error(response)
            logger.debug(
                "Request %s %s returned HTTP %s: %s",
                method,
                url,
                response.status_code,
                error.message,
            )
            raise error
        return response.content

    @staticmethod
    def _api_error(response: httpx.Response) -> APIError:
        try:
            envelope = ErrorEnvelope.model_validate_json(response.content)
        except ValidationError:
            return APIError(response.status_code)
        return APIError(
            response.status_code,
            envelope.error.message,
            code=envelope.error.code,
            errors=envelope.error.errors,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None
