from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Self

import httpx

from pagerduty.core.http.transport import HTTPTransport
from pagerduty.main.config import DEFAULT_API_ENDPOINT, Config, get_settings
from pagerduty.teams.schemas import ListMembersOptions, ListMembersResponse
from pagerduty.teams.services import TeamService


class Client:
    """
    Entry point to the PagerDuty REST API.

    Usage:
    async with Client(api_token="...") as pd:
        members = await pd.list_members("PTEAM01")
    """

    def __init__(
        self,
        api_token: str,
        *,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
        timeout: float = 30.0,
        page_size: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = HTTPTransport(
            api_token=api_token,
            api_endpoint=api_endpoint,
            timeout=timeout,
            transport=transport,
        )
        self.teams = TeamService(self._http, default_page_size=page_size)

    async def __aenter__(self) -> Self:
        await self._http.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._http.__aexit__(exc_type, exc, tb)

    async def list_members(
        self, team_id: str, options: ListMembersOptions | None = None
    ) -> ListMembersResponse:
        return await self.teams.list_members(team_id, options)

    async def close(self) -> None:
        await self._http.close()


@asynccontextmanager
async def open_client(settings: Config | None = None) -> AsyncGenerator[Client]:
    pagerduty = (settings or get_settings()).pagerduty
    if not pagerduty.is_configured:
        raise RuntimeError("PagerDuty is not configured (PAGERDUTY_API_TOKEN)")
    async with Client(
        pagerduty.PAGERDUTY_API_TOKEN,
        api_endpoint=pagerduty.PAGERDUTY_API_ENDPOINT,
        timeout=pagerduty.PAGERDUTY_TIMEOUT_SECONDS,
        page_size=pagerduty.PAGERDUTY_PAGE_SIZE,
    ) as client:
        yield client
