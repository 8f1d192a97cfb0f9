import asyncio
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest

from infra.services.http_prober import DEFAULT_USER_AGENT, HttpProber

URL = "https://service.example.com/health"


@pytest.fixture
async def prober_factory() -> AsyncGenerator:
    clients: list[httpx.AsyncClient] = []

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> HttpProber:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=False)
        clients.append(http_client)
        return HttpProber(http_client)

    try:
        yield _factory
    finally:
        for client in clients:
            await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, reachable",
    [
        (200, True),
        (204, True),
        (301, True),
        (399, True),
        (404, False),
        (500, False),
        (503, False),
    ],
)
async def test_probe_classifies_by_status_code(prober_factory, status_code: int, reachable: bool) -> None:
    prober = prober_factory(lambda request: httpx.Response(status_code))

    result = await prober.probe(URL, timeout_ms=1_000)

    assert result.reachable is reachable
    assert result.status_code == status_code
    assert result.latency_ms is not None
    assert result.latency_ms >= 0
    assert result.transport_failed is False


@pytest.mark.asyncio
async def test_probe_does_not_follow_redirects(prober_factory) -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(301, headers={"Location": "https://elsewhere.example.com/"})

    result = await prober_factory(handler).probe(URL, timeout_ms=1_000)

    assert result.reachable is True
    assert requested == [URL]


@pytest.mark.asyncio
async def test_probe_sends_user_agent_get(prober_factory) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="a body nobody reads")

    await prober_factory(handler).probe(URL, timeout_ms=1_000)

    assert seen[0].method == "GET"
    assert seen[0].headers["User-Agent"] == DEFAULT_USER_AGENT


@pytest.mark.asyncio
async def test_probe_connection_error_is_unreachable(prober_factory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    result = await prober_factory(handler).probe(URL, timeout_ms=1_000)

    assert result.reachable is False
    assert result.latency_ms is None
    assert result.status_code is None
    assert result.error == "Connection refused"
    assert result.transport_failed is True


@pytest.mark.asyncio
async def test_probe_transport_timeout_is_unreachable(prober_factory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = await prober_factory(handler).probe(URL, timeout_ms=1_000)

    assert result.reachable is False
    assert result.latency_ms is None
    assert result.error == "Request timeout"


@pytest.mark.asyncio
async def test_probe_enforces_overall_deadline(prober_factory) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200)

    result = await prober_factory(handler).probe(URL, timeout_ms=50)

    assert result.reachable is False
    assert result.error == "Request timeout"
