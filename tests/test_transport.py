"""Tests for RateLimiter and BridgeTransport."""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import aiohttp
import pytest

from airzone_local.exceptions import AirzoneConnectionError
from airzone_local.transport import BridgeTransport, RateLimiter

from .conftest import FakeBridge, FakeSession

# ---------------------------------------------------------------------------
# RateLimiter
# ---------------------------------------------------------------------------


async def test_rate_limiter_spaces_and_serializes() -> None:
    limiter = RateLimiter(0.05)
    loop = asyncio.get_running_loop()
    spans: list[tuple[float, float]] = []
    in_flight = 0

    async def _request() -> None:
        nonlocal in_flight
        async with limiter.slot():
            in_flight += 1
            assert in_flight == 1
            start = loop.time()
            await asyncio.sleep(0.01)
            end = loop.time()
            in_flight -= 1
        spans.append((start, end))

    await asyncio.gather(*(_request() for _ in range(4)))

    assert len(spans) == 4
    spans.sort()
    for (_, prev_end), (next_start, _) in zip(spans, spans[1:], strict=False):
        assert next_start - prev_end >= 0.05


async def test_rate_limiter_first_request_not_delayed() -> None:
    limiter = RateLimiter(10)
    assert limiter.next_call_not_before is None
    loop = asyncio.get_running_loop()
    before = loop.time()
    async with limiter.slot():
        pass
    assert loop.time() - before < 1
    assert limiter.next_call_not_before is not None
    assert limiter.next_call_not_before >= before + 10


async def test_rate_limiter_failure_still_spaces() -> None:
    limiter = RateLimiter(0.05)
    loop = asyncio.get_running_loop()
    with pytest.raises(RuntimeError):
        async with limiter.slot():
            raise RuntimeError
    deadline = limiter.next_call_not_before
    assert deadline is not None
    async with limiter.slot():
        assert loop.time() >= deadline


def test_rate_limiter_spacing_property() -> None:
    assert RateLimiter(1.5).spacing == 1.5
    assert RateLimiter().spacing == 3.0


# ---------------------------------------------------------------------------
# BridgeTransport
# ---------------------------------------------------------------------------


def test_base_url() -> None:
    transport = BridgeTransport("10.0.0.7", 3001)
    assert transport.base_url == "http://10.0.0.7:3001/api/v1/"


async def test_execute_posts_json(
    transport: BridgeTransport, session: FakeSession
) -> None:
    text = await transport.execute("POST", "version", "")
    assert text == '{"version":"1.62"}'
    method, url, body = session.requests[0]
    assert method == "POST"
    assert url == "http://192.168.1.100:3000/api/v1/version"
    assert body is None
    kwargs = session.kwargs[0]
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert kwargs["timeout"] == aiohttp.ClientTimeout(total=1.0)


async def test_execute_records_communication(transport: BridgeTransport) -> None:
    assert transport.online is False
    assert transport.last_communication is None
    await transport.execute("POST", "hvac", b'{"systemID":127}')
    assert transport.last_communication is not None
    assert transport.last_successful_communication == transport.last_communication
    assert transport.online is True


@pytest.mark.parametrize(
    "result",
    [
        TimeoutError(),
        aiohttp.ClientConnectionError("refused"),
        (500, "Internal Server Error"),
        (404, "Not Found"),
    ],
)
async def test_execute_failures(result: object) -> None:
    session = FakeSession(lambda method, url, body: result)  # type: ignore[arg-type]
    transport = BridgeTransport(
        "192.168.1.100",
        rate_limiter=RateLimiter(0),
        session=session,  # type: ignore[arg-type]
    )
    with pytest.raises(AirzoneConnectionError):
        await transport.execute("POST", "hvac", b"{}")
    assert transport.last_communication is not None
    assert transport.last_successful_communication is None
    assert transport.online is False


async def test_execute_goes_offline_after_failure(
    transport: BridgeTransport, bridge: FakeBridge
) -> None:
    await transport.execute("POST", "version", "")
    bridge.offline = True
    with pytest.raises(AirzoneConnectionError, match="timed out"):
        await transport.execute("POST", "version", "")
    assert transport.online is False


async def test_concurrent_execute_is_serialized_and_spaced(bridge: FakeBridge) -> None:
    loop = asyncio.get_running_loop()
    starts: list[float] = []

    def _handler(method: str, url: str, body: object) -> object:
        starts.append(loop.time())
        return bridge(method, url, body)

    # 0.02s reading each response plus 0.05s spacing, minus timer slack
    session = FakeSession(_handler, delay=0.02)  # type: ignore[arg-type]
    transport = BridgeTransport(
        "192.168.1.100",
        rate_limiter=RateLimiter(0.05),
        session=session,  # type: ignore[arg-type]
    )
    await asyncio.gather(
        *(transport.execute("POST", "version", "") for _ in range(4))
    )
    assert len(starts) == 4
    for prev, nxt in zip(starts, starts[1:], strict=False):
        assert nxt - prev >= 0.065


async def test_close_keeps_external_session(
    transport: BridgeTransport, session: FakeSession
) -> None:
    await transport.close()
    assert session.closed is False


async def test_owned_session_created_and_closed(session: FakeSession) -> None:
    transport = BridgeTransport("192.168.1.100", rate_limiter=RateLimiter(0))
    with patch(
        "airzone_local.transport.aiohttp.ClientSession", return_value=session
    ) as mock_cls:
        await transport.execute("POST", "version", "")
        await transport.execute("POST", "version", "")
    mock_cls.assert_called_once_with()
    await transport.close()
    assert session.closed is True


async def test_close_without_session() -> None:
    transport = BridgeTransport("192.168.1.100")
    await transport.close()
