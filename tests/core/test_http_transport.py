from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from pagerduty.client import Client
from pagerduty.core.errors.exceptions import APIError, TransportError
from pagerduty.core.http import transport as transport_module
from pagerduty.core.http.transport import ACCEPT_HEADER, HTTPTransport
from tests.fakes.pagerduty import FakePagerDuty


@pytest.fixture()
def transport(fake_pagerduty: FakePagerDuty) -> HTTPTransport:
    return HTTPTransport(
        api_token="MYKEY",
        api_endpoint="https://pagerduty.test/",
        transport=fake_pagerduty.transport,
    )


@pytest.mark.asyncio
async def test_request_sends_auth_and_version_headers(
    transport: HTTPTransport, fake_pagerduty: FakePagerDuty
) -> None:
    fake_pagerduty.serve("/teams", httpx.Response(200, content=b'{"ok": true}'))

    async with transport:
        body = await transport.request("GET", "teams", params={"offset": 0})

    assert body == b'{"ok": true}'
    request = fake_pagerduty.requests[0]
    assert str(request.url) == "https://pagerduty.test/teams?offset=0"
    assert request.headers["Authorization"] == "Token token=MYKEY"
    assert request.headers["Accept"] == ACCEPT_HEADER


@pytest.mark.asyncio
async def test_request_outside_context_raises(transport: HTTPTransport) -> None:
    with pytest.raises(RuntimeError, match="not initialized"):
        await transport.request("GET", "/teams")


@pytest.mark.asyncio
async def test_context_exit_closes_client(transport: HTTPTransport) -> None:
    async with transport:
        pass

    with pytest.raises(RuntimeError):
        await transport.request("GET", "/teams")


@pytest.mark.asyncio
async def test_error_status_maps_to_api_error(
    transport: HTTPTransport, fake_pagerduty: FakePagerDuty
) -> None:
    fake_pagerduty.serve(
        "/teams/NOPE/members",
        httpx.Response(
            404,
            json={
                "error": {
                    "message": "Not Found",
                    "code": 2100,
                    "errors": ["Team not found"],
                }
            },
        ),
    )

    async with transport:
        with pytest.raises(APIError) as exc_info:
            await transport.request("GET", "/teams/NOPE/members")

    error = exc_info.value
    assert error.status_code == 404
    assert error.not_found
    assert error.code == 2100
    assert error.message == "Not Found"
    assert error.errors == ["Team not found"]


@pytest.mark.asyncio
async def test_error_status_without_envelope(
    transport: HTTPTransport, fake_pagerduty: FakePagerDuty
) -> None:
    fake_pagerduty.serve("/teams", httpx.Response(502, content=b"Bad Gateway"))

    async with transport:
        with pytest.raises(APIError) as exc_info:
            await transport.request("GET", "/teams")

    assert exc_info.value.status_code == 502
    assert exc_info.value.code is None
    assert isinstance(exc_info.value, TransportError)


@pytest.mark.asyncio
async def test_network_failure_maps_to_transport_error(
    transport: HTTPTransport, fake_pagerduty: FakePagerDuty
) -> None:
    fake_pagerduty.serve("/teams", httpx.ConnectError("connection refused"))

    async with transport:
        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "/teams")

    assert not isinstance(exc_info.value, APIError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.additional_info == {
        "method": "GET",
        "url": "https://pagerduty.test/teams",
    }


@pytest.mark.asyncio
async def test_timeout_maps_to_transport_error(
    transport: HTTPTransport, fake_pagerduty: FakePagerDuty
) -> None:
    fake_pagerduty.serve("/teams", httpx.ReadTimeout("timed out"))

    async with transport:
        with pytest.raises(TransportError):
            await transport.request("GET", "/teams")


@pytest.mark.asyncio
async def test_malformed_endpoint_maps_to_transport_error() -> None:
    async with HTTPTransport(api_token="MYKEY", api_endpoint="A-FAKE-URL") as transport:
        with pytest.raises(TransportError):
            await transport.request("GET", "/teams")


@pytest.mark.asyncio
async def test_failures_are_raised_not_logged_above_debug(
    transport: HTTPTransport,
    fake_pagerduty: FakePagerDuty,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logged = Mock()
    for level in ("info", "warning", "error", "exception"):
        monkeypatch.setattr(transport_module.logger, level, logged)
    fake_pagerduty.serve(
        "/teams", httpx.ConnectError("refused"), httpx.Response(500, content=b"")
    )

    async with transport:
        with pytest.raises(TransportError):
            await transport.request("GET", "/teams")
        with pytest.raises(APIError):
            await transport.request("GET", "/teams")

    logged.assert_not_called()


@pytest.mark.asyncio
async def test_entering_open_transport_twice_raises(transport: HTTPTransport) -> None:
    async with transport:
        with pytest.raises(RuntimeError, match="already open"):
            await transport.__aenter__()

    # Reusable once closed
    async with transport:
        pass


@pytest.mark.asyncio
async def test_entering_open_client_twice_raises(pd_client: Client) -> None:
    with pytest.raises(RuntimeError, match="already open"):
        async with pd_client:
            pass
