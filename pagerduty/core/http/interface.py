from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class RequesterProtocol(Protocol):
    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> bytes: ...
    async def close(self) -> None: ...
