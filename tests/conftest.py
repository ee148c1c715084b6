"""Shared fixtures for airzone_local tests."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import orjson
import pytest

from airzone_local.config import BridgeConfig
from airzone_local.manager import AirzoneApiManager
from airzone_local.transport import BridgeTransport, RateLimiter

if TYPE_CHECKING:
    from collections.abc import Callable

    Handler = Callable[[str, str, Any], "tuple[int, Any] | BaseException"]


def make_zone(system_id: int = 1, zone_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """Build a wire-format zone object."""
    zone: dict[str, Any] = {
        "systemID": system_id,
        "zoneID": zone_id,
        "name": f"Zone {zone_id}",
        "thermos_type": 2,
        "thermos_firmware": "3.33",
        "thermos_radio": 1,
        "on": 1,
        "double_sp": 0,
        "coolsetpoint": 25.0,
        "coolmaxtemp": 30.0,
        "coolmintemp": 18.0,
        "heatsetpoint": 21.0,
        "heatmaxtemp": 30.0,
        "heatmintemp": 15.0,
        "maxTemp": 30.0,
        "minTemp": 15.0,
        "setpoint": 22.5,
        "roomTemp": 21.3,
        "humidity": 48,
        "sleep": 0,
        "temp_step": 0.5,
        "modes": [],
        "mode": 3,
        "speeds": 3,
        "speed": 1,
        "coldStages": 1,
        "coldStage": 1,
        "heatStages": 2,
        "heatStage": 2,
        "units": 0,
        "errors": [],
        "air_demand": 0,
        "floor_demand": 0,
        "cold_demand": 0,
        "heat_demand": 1,
        "aq_mode": 2,
        "aq_quality": 1,
        "aq_thrlow": 30,
        "aq_thrhigh": 60,
        "master_zoneID": 1,
        "eco_adapt": "a_p",
        "antifreeze": 0,
    }
    zone.update(overrides)
    return zone


def make_system(system_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """Build a wire-format system object."""
    system: dict[str, Any] = {
        "systemID": system_id,
        "mc_connected": 0,
        "power": 1250.0,
        "system_firmware": "3.31",
        "system_type": 1,
        "manufacturer": "Daikin",
        "errors": [],
    }
    system.update(overrides)
    return system


def zones_body(*zones: dict[str, Any]) -> dict[str, Any]:
    """Wrap zones like the all-zones poll response, grouped by system."""
    by_system: dict[int, list[dict[str, Any]]] = {}
    for zone in zones:
        by_system.setdefault(zone["systemID"], []).append(zone)
    return {"systems": [{"data": data} for data in by_system.values()]}


class FakeResponse:
    """Stand-in for the response context manager of aiohttp."""

    def __init__(self, status: int, body: bytes, delay: float = 0) -> None:
        self.status = status
        self._body = body
        self._delay = delay

    async def read(self) -> bytes:
        if self._delay:
            await asyncio.sleep(self._delay)
        return self._body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *args: object) -> None:
        return None


class FakeSession:
    """Stand-in for aiohttp.ClientSession answering from a handler.

    The handler gets (method, url, decoded JSON body or None) and returns
    (status, body) or an exception to raise.
    """

    def __init__(self, handler: Handler, delay: float = 0) -> None:
        self.handler = handler
        self.delay = delay
        self.requests: list[tuple[str, str, Any]] = []
        self.kwargs: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        data = kwargs.get("data") or b""
        body = orjson.loads(data) if data else None
        self.requests.append((method, url, body))
        self.kwargs.append(kwargs)
        result = self.handler(method, url, body)
        if isinstance(result, BaseException):
            raise result
        status, payload = result
        if isinstance(payload, str):
            raw = payload.encode()
        elif isinstance(payload, bytes):
            raw = payload
        else:
            raw = orjson.dumps(payload)
        return FakeResponse(status, raw, self.delay)

    async def close(self) -> None:
        self.closed = True

    def puts(self) -> list[Any]:
        """Return the bodies of the PUT requests sent so far."""
        return [body for method, _url, body in self.requests if method == "PUT"]


class FakeBridge:
    """In-memory bridge serving hvac, webserver and version resources."""

    def __init__(
        self,
        zones: list[dict[str, Any]],
        systems: list[dict[str, Any]],
    ) -> None:
        self.zones = zones
        self.systems = systems
        self.version = "1.62"
        self.fail_puts = False
        self.offline = False

    def __call__(
        self, method: str, url: str, body: Any
    ) -> tuple[int, Any] | BaseException:
        if self.offline:
            return TimeoutError()
        resource = url.rsplit("/", 1)[-1]
        if resource == "version":
            return 200, {"version": self.version}
        if resource == "webserver":
            return 200, {
                "mac": "AA:BB:CC:DD:EE:FF",
                "wifi_channel": 6,
                "wifi_quality": 4,
                "wifi_rssi": -42,
                "interface": "wifi",
                "ws_firmware": "3.44",
                "ws_type": "ws_az",
            }
        if method == "PUT":
            if self.fail_puts:
                return 500, "Internal Server Error"
            return 200, {"data": [body]}
        if body == {"systemID": 127}:
            return 200, {"systems": self.systems}
        return 200, zones_body(*self.zones)


@pytest.fixture
def bridge() -> FakeBridge:
    """Return a bridge with one system: master zone 1 and slave zone 2."""
    return FakeBridge(
        zones=[
            make_zone(1, 1, name="Salon", modes=[1, 2, 3, 4, 5]),
            make_zone(1, 2, name="Bedroom"),
        ],
        systems=[make_system(1)],
    )


@pytest.fixture
def session(bridge: FakeBridge) -> FakeSession:
    return FakeSession(bridge)


@pytest.fixture
def config() -> BridgeConfig:
    """Return a config without request spacing so tests run fast."""
    return BridgeConfig(
        "192.168.1.100", retries=2, refresh_interval=0.01, request_spacing=0
    )


@pytest.fixture
def transport(session: FakeSession) -> BridgeTransport:
    return BridgeTransport(
        "192.168.1.100",
        rate_limiter=RateLimiter(0),
        session=session,  # type: ignore[arg-type]
    )


@pytest.fixture
def manager(config: BridgeConfig, session: FakeSession) -> AirzoneApiManager:
    return AirzoneApiManager(config, session=session)  # type: ignore[arg-type]
