from collections.abc import AsyncIterator, Mapping
import json
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from loggers import get_logger
from pagerduty.core.errors.exceptions import DecodeError
from pagerduty.core.http.interface import RequesterProtocol
from pagerduty.core.pagination.schemas import ListOptions, ListResult, Page

logger = get_logger(__name__)

ItemT = TypeVar("ItemT")


def decode_page(body: bytes, item_schema: type[ItemT], items_key: str) -> Page[ItemT]:
    """
    Decode one list response into a Page.

    The resource list lives under a resource-specific key (``members``, ``teams``)
    next to the ``more``/``limit``/``offset`` metadata.

    Raises:
        DecodeError: the body is not a JSON object or does not match the page schema.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(payload).__name__}",
            additional_info={"items_key": items_key},
        )

    try:
        return Page[item_schema].model_validate(  # type: ignore[valid-type]
            {**payload, "items": payload.get(items_key)}
        )
    except ValidationError as exc:
        raise DecodeError(
            f"Response does not match the '{items_key}' page schema",
            additional_info={"items_key": items_key, "errors": exc.errors()},
        ) from exc


class Paginator(Generic[ItemT]):
    """
    Walks an offset-paginated list endpoint until the server reports ``more=false``.

    Pages are fetched one at a time: the offset of page N+1 is the offset of
    page N plus the ``limit`` page N reports. Any transport or decode failure
    aborts the walk and propagates; items gathered so far are discarded.
    """

    def __init__(
        self,
        requester: RequesterProtocol,
        item_schema: type[ItemT],
        items_key: str,
    ) -> None:
        self._requester = requester
        self._item_schema = item_schema
        self._items_key = items_key

    async def iter_pages(
        self,
        path: str,
        options: ListOptions | None = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[Page[ItemT]]:
        options = options or ListOptions()
        offset = options.offset

        while True:
            query = {**(params or {}), **options.to_params(offset=offset)}
            body = await self._requester.request("GET", path, params=query)
            page = decode_page(body, self._item_schema, self._items_key)
            logger.debug(
                "Fetched %s page offset=%s limit=%s items=%s more=%s",
                path,
                page.offset,
                page.limit,
                len(page.items),
                page.more,
            )

            if page.more and (not page.items or page.limit < 1):
                raise DecodeError(
                    "Server reported more results but the page cannot advance",
                    additional_info={
                        "path": path,
                        "offset": offset,
                        "limit": page.limit,
                        "items": len(page.items),
                    },
                )

            yield page

            if not page.more:
                return
            offset += page.limit

    async def list(
        self,
        path: str,
        options: ListOptions | None = None,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> ListResult[ItemT]:
        """Fetch every page and return the concatenated items in server order."""
        options = options or ListOptions()
        pages = [page async for page in self.iter_pages(path, options, params=params)]

        return ListResult(
            items=[item for page in pages for item in page.items],
            limit=pages[-1].limit,
            offset=options.offset,
            total=pages[-1].total,
            pages=len(pages),
        )
