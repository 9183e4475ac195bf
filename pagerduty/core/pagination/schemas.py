from typing import Any, Generic, TypeVar

from pydantic import Field

from pagerduty.core.schemas import Base

ItemT = TypeVar("ItemT")


class ListOptions(Base):
    """Offset pagination request parameters.

    - limit: page size, left to the server default (25) when unset
    - offset: index of the first item to fetch
    - total: ask the server to compute the total count
    """

    limit: int | None = Field(None, ge=1, le=100)
    offset: int = Field(0, ge=0)
    total: bool = False

    def to_params(self, offset: int | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"offset": self.offset if offset is None else offset}
        if self.limit is not None:
            params["limit"] = self.limit
        if self.total:
            params["total"] = "true"
        return params


class APIListObject(Base):
    """Pagination metadata carried by every list response."""

    more: bool
    limit: int
    offset: int
    total: int | None = None


class Page(APIListObject, Generic[ItemT]):
    items: list[ItemT]


class ListResult(Base, Generic[ItemT]):
    """Items accumulated across every page of one list call."""

    items: list[ItemT]
    limit: int
    offset: int = 0
    total: int | None = None
    pages: int = Field(1, ge=1)
