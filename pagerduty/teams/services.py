from typing import TypeVar
from urllib.parse import quote

from pagerduty.core.http.interface import RequesterProtocol
from pagerduty.core.pagination.paginator import Paginator
from pagerduty.core.pagination.schemas import ListOptions
from pagerduty.teams.schemas import (
    ListMembersOptions,
    ListMembersResponse,
    ListTeamsOptions,
    ListTeamsResponse,
    Member,
    Team,
)

OptionsT = TypeVar("OptionsT", bound=ListOptions)


class TeamService:
    def __init__(
        self, requester: RequesterProtocol, *, default_page_size: int | None = None
    ) -> None:
        self._members = Paginator(requester, Member, "members")
        self._teams = Paginator(requester, Team, "teams")
        self._default_page_size = default_page_size

    def _with_page_size(self, options: OptionsT) -> OptionsT:
        if options.limit is None and self._default_page_size is not None:
            return options.model_copy(update={"limit": self._default_page_size})
        return options

    async def list_members(
        self, team_id: str, options: ListMembersOptions | None = None
    ) -> ListMembersResponse:
        """Return every member of a team, walking all pages."""
        if not team_id:
            raise ValueError("team_id must not be empty")
        options = self._with_page_size(options or ListMembersOptions())
        path = f"/teams/{quote(team_id, safe='')}/members"
        result = await self._members.list(path, options)
        return ListMembersResponse(
            members=result.items,
            limit=result.limit,
            offset=result.offset,
            total=result.total,
        )

    async def list_teams(self, options: ListTeamsOptions | None = None) -> ListTeamsResponse:
        options = self._with_page_size(options or ListTeamsOptions())
        params = {"query": options.query} if options.query else None
        result = await self._teams.list("/teams", options, params=params)
        return ListTeamsResponse(
            teams=result.items,
            limit=result.limit,
            offset=result.offset,
            total=result.total,
        )
