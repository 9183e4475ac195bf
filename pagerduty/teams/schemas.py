from pydantic import Field

from pagerduty.core.pagination.schemas import APIListObject, ListOptions
from pagerduty.core.schemas import APIObject, Base
from pagerduty.teams.enums import TeamRole


class Member(Base):
    user: APIObject
    role: TeamRole | str


class Team(APIObject):
    name: str
    description: str | None = None
    parent: APIObject | None = None


class ListMembersOptions(ListOptions):
    pass


class ListTeamsOptions(ListOptions):
    query: str | None = None


class ListMembersResponse(APIListObject):
    more: bool = False
    members: list[Member] = Field(default_factory=list)


class ListTeamsResponse(APIListObject):
    more: bool = False
    teams: list[Team] = Field(default_factory=list)
