"""Polling, caching and command API for one AirZone bridge."""

from __future__ import annotations

import asyncio
import contextlib
import functools
import logging
from typing import TYPE_CHECKING, Any

from .cache import Snapshot, SnapshotCache
from .codec import (
    ALL_SYSTEMS_REQUEST,
    ALL_ZONES_REQUEST,
    decode_api_version,
    decode_server_properties,
    decode_systems_response,
    decode_zones_response,
    encode_put_payload,
)
from .commands import (
    translate_air_quality_mode,
    translate_eco_adapt,
    translate_mode,
    translate_sleep,
    translate_speed,
    translate_stage,
)
from .const import (
    BACKOFF_FACTOR,
    FIELD_AIR_QUALITY_HIGH_THRESHOLD,
    FIELD_AIR_QUALITY_LOW_THRESHOLD,
    FIELD_AIR_QUALITY_MODE,
    FIELD_ANTI_FREEZE,
    FIELD_COLD_STAGE,
    FIELD_COOL_SETPOINT,
    FIELD_ECO_ADAPT,
    FIELD_HEAT_SETPOINT,
    FIELD_HEAT_STAGE,
    FIELD_MODE,
    FIELD_NAME,
    FIELD_ON,
    FIELD_SETPOINT,
    FIELD_SLATS_HORIZONTAL_POSITION,
    FIELD_SLATS_HORIZONTAL_SWING,
    FIELD_SLATS_VERTICAL_POSITION,
    FIELD_SLATS_VERTICAL_SWING,
    FIELD_SLEEP,
    FIELD_SPEED,
    POLL_BACKOFF_MAX,
    RESOURCE_HVAC,
    RESOURCE_VERSION,
    RESOURCE_WEBSERVER,
)
from .exceptions import AirzoneConnectionError, AirzoneDecodeError, CommandError
from .transport import BridgeTransport, RateLimiter

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Self

    import aiohttp

    from .config import BridgeConfig
    from .models import PutRequestTarget, ServerProperties, SystemInfo, ZoneSnapshot

_LOGGER = logging.getLogger(__name__)


class AirzoneApiManager:
    """
    Poll a bridge, cache its zones and systems, and send zone commands.

    Reads are served from the cache; the first read on an empty cache
    triggers one fetch_status(). Keeping the cache fresh is up to the
    caller, either by calling fetch_status() or start_polling().

    Setters never raise for unknown zones, invalid values or failed
    requests: they log a warning and return False. A successful write is
    followed by a fetch_status(), but the bridge may apply the change
    later, so the refreshed cache is not a confirmation.
    """

    def __init__(
        self,
        config: BridgeConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: BridgeTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport or BridgeTransport(
            config.ip_address,
            config.port,
            timeout=config.timeout,
            rate_limiter=RateLimiter(config.request_spacing),
            session=session,
        )
        self._cache = SnapshotCache()
        self._fetch_lock = asyncio.Lock()
        self._update_callbacks: list[Callable[[Snapshot], None]] = []
        self._poll_task: asyncio.Task[None] | None = None

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @property
    def transport(self) -> BridgeTransport:
        return self._transport

    @property
    def cache(self) -> SnapshotCache:
        return self._cache

    @property
    def online(self) -> bool:
        """Return True if the last request to the bridge succeeded."""
        return self._transport.online

    @property
    def polling(self) -> bool:
        """Return True while the background poll loop runs."""
        return self._poll_task is not None and not self._poll_task.done()

    def add_update_callback(
        self, callback: Callable[[Snapshot], None]
    ) -> Callable[[], None]:
        """Register a callback run after each successful poll.

        Returns a callable to unregister it.
        """
        self._update_callbacks.append(callback)

        def _remove() -> None:
            with contextlib.suppress(ValueError):
                self._update_callbacks.remove(callback)

        return _remove

    def _notify(self) -> None:
        snapshot = self._cache.snapshot
        for cb in self._update_callbacks:
            try:
                cb(snapshot)
            except Exception:  # noqa: PERF203
                _LOGGER.exception("Error in update callback")

    # --- Polling ---

    async def fetch_status(self) -> bool:
        """
        Poll all zones and all systems and replace the cache.

        The cache only changes when both polls were fetched and decoded.

        Returns:
            True if the cache was replaced.

        """
        try:
            zones = decode_zones_response(
                await self._transport.execute("POST", RESOURCE_HVAC, ALL_ZONES_REQUEST)
            )
            systems = decode_systems_response(
                await self._transport.execute(
                    "POST", RESOURCE_HVAC, ALL_SYSTEMS_REQUEST
                )
            )
        except AirzoneConnectionError as exc:
            _LOGGER.warning("fetch_status: request failed: %s", exc)
            return False
        except AirzoneDecodeError as exc:
            _LOGGER.warning("fetch_status: invalid response: %s", exc)
            return False
        self._cache.replace(zones, systems)
        _LOGGER.debug("Cached %d zones and %d systems", len(zones), len(systems))
        self._notify()
        return True

    async def _ensure_populated(self) -> None:
        """Fetch once if the cache has never been filled."""
        if self._cache.populated:
            return
        async with self._fetch_lock:
            if not self._cache.populated:
                await self.fetch_status()

    async def _poll_loop(self) -> None:
        """Call fetch_status() periodically, backing off while it fails."""
        interval = self._config.refresh_interval
        delay = interval
        try:
            while True:
                await asyncio.sleep(delay)
                if await self.fetch_status():
                    delay = interval
                else:
                    delay = min(delay * BACKOFF_FACTOR, max(interval, POLL_BACKOFF_MAX))
                    _LOGGER.info("Poll failed, next attempt in %.0fs", delay)
        except asyncio.CancelledError:
            return

    def start_polling(self) -> None:
        """Start the background poll loop if it is not running."""
        if not self.polling:
            self._poll_task = asyncio.create_task(self._poll_loop())

    async def stop_polling(self) -> None:
        """Stop the background poll loop."""
        if self._poll_task:
            self._poll_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._poll_task
            self._poll_task = None

    # --- Reads ---

    async def get_zone(self, system_id: int, zone_id: int) -> ZoneSnapshot | None:
        await self._ensure_populated()
        return self._cache.get_zone(system_id, zone_id)

    async def get_system(self, system_id: int) -> SystemInfo | None:
        await self._ensure_populated()
        return self._cache.get_system(system_id)

    async def get_master_zone(self, system_id: int) -> ZoneSnapshot | None:
        """Return the zone that governs the mode of a system."""
        await self._ensure_populated()
        return self._cache.get_master_zone(system_id)

    async def get_zones(self, system_id: int | None = None) -> list[ZoneSnapshot]:
        await self._ensure_populated()
        return self._cache.zones(system_id)

    async def get_systems(self) -> list[SystemInfo]:
        await self._ensure_populated()
        return self._cache.systems()

    async def get_server_properties(self) -> ServerProperties | None:
        """Fetch the bridge's network and firmware properties."""
        try:
            return decode_server_properties(
                await self._transport.execute("POST", RESOURCE_WEBSERVER, "")
            )
        except (AirzoneConnectionError, AirzoneDecodeError) as exc:
            _LOGGER.warning("get_server_properties: %s", exc)
            return None

    async def _request_api_version(self) -> str | None:
        return decode_api_version(
            await self._transport.execute("POST", RESOURCE_VERSION, "")
        )

    async def get_api_version(self) -> str | None:
        """Fetch the version of the bridge's local API."""
        try:
            return await self._request_api_version()
        except (AirzoneConnectionError, AirzoneDecodeError) as exc:
            _LOGGER.warning("get_api_version: %s", exc)
            return None

    # --- Writes ---

    async def _resolve_zone(self, target: PutRequestTarget) -> ZoneSnapshot | None:
        """Return the zone a command is checked against.

        An all-zones target is checked against the system's master zone.
        """
        if target.is_all_zones:
            zone = await self.get_master_zone(target.system_id)
        else:
            zone = await self.get_zone(target.system_id, target.zone_id)
        if zone is None:
            _LOGGER.warning(
                "No zone values for system %s zone %s",
                target.system_id,
                target.zone_id,
            )
        return zone

    async def _put(self, target: PutRequestTarget, field: str, value: Any) -> bool:
        payload = encode_put_payload(target, field, value)
        try:
            await self._transport.execute("PUT", RESOURCE_HVAC, payload)
        except AirzoneConnectionError as exc:
            _LOGGER.warning("set %s: request failed: %s", field, exc)
            return False
        await self.fetch_status()
        return True

    async def _set_translated(
        self,
        target: PutRequestTarget,
        field: str,
        value: Any,
        translate: Callable[[ZoneSnapshot, Any], Any],
    ) -> bool:
        zone = await self._resolve_zone(target)
        if zone is None:
            return False
        try:
            wire_value = translate(zone, value)
        except CommandError as exc:
            _LOGGER.warning("Dropping %s command: %s", field, exc)
            return False
        return await self._put(target, field, wire_value)

    async def set_zone_field(
        self, target: PutRequestTarget, field: str, value: Any
    ) -> bool:
        """
        Send one field of one zone, or of all zones of a system.

        Returns:
            True if the bridge accepted the request.

        """
        if await self._resolve_zone(target) is None:
            return False
        return await self._put(target, field, value)

    async def set_on(self, target: PutRequestTarget, on: bool) -> bool:  # noqa: FBT001
        return await self.set_zone_field(target, FIELD_ON, bool(on))

    async def set_setpoint(self, target: PutRequestTarget, value: float) -> bool:
        return await self.set_zone_field(target, FIELD_SETPOINT, value)

    async def set_cool_setpoint(self, target: PutRequestTarget, value: float) -> bool:
        return await self.set_zone_field(target, FIELD_COOL_SETPOINT, value)

    async def set_heat_setpoint(self, target: PutRequestTarget, value: float) -> bool:
        return await self.set_zone_field(target, FIELD_HEAT_SETPOINT, value)

    async def set_name(self, target: PutRequestTarget, name: str) -> bool:
        return await self.set_zone_field(target, FIELD_NAME, name)

    async def set_mode(self, target: PutRequestTarget, mode: Any) -> bool:
        """Set the mode by name ("HEATING", ...) if the zone allows it."""
        return await self._set_translated(target, FIELD_MODE, mode, translate_mode)

    async def set_speed(self, target: PutRequestTarget, speed: float) -> bool:
        return await self._set_translated(target, FIELD_SPEED, speed, translate_speed)

    async def set_cold_stage(self, target: PutRequestTarget, stage: Any) -> bool:
        return await self._set_translated(
            target,
            FIELD_COLD_STAGE,
            stage,
            functools.partial(translate_stage, kind="cold"),
        )

    async def set_heat_stage(self, target: PutRequestTarget, stage: Any) -> bool:
        return await self._set_translated(
            target,
            FIELD_HEAT_STAGE,
            stage,
            functools.partial(translate_stage, kind="heat"),
        )

    async def set_sleep(self, target: PutRequestTarget, sleep: Any) -> bool:
        return await self._set_translated(
            target, FIELD_SLEEP, sleep, lambda _zone, value: translate_sleep(value)
        )

    async def set_air_quality_mode(self, target: PutRequestTarget, mode: Any) -> bool:
        return await self._set_translated(
            target,
            FIELD_AIR_QUALITY_MODE,
            mode,
            lambda _zone, value: translate_air_quality_mode(value),
        )

    async def set_air_quality_low_threshold(
        self, target: PutRequestTarget, value: float
    ) -> bool:
        return await self.set_zone_field(target, FIELD_AIR_QUALITY_LOW_THRESHOLD, value)

    async def set_air_quality_high_threshold(
        self, target: PutRequestTarget, value: float
    ) -> bool:
        return await self.set_zone_field(
            target, FIELD_AIR_QUALITY_HIGH_THRESHOLD, value
        )

    async def set_slats_vertical_swing(
        self, target: PutRequestTarget, swing: bool  # noqa: FBT001
    ) -> bool:
        return await self.set_zone_field(target, FIELD_SLATS_VERTICAL_SWING, swing)

    async def set_slats_horizontal_swing(
        self, target: PutRequestTarget, swing: bool  # noqa: FBT001
    ) -> bool:
        return await self.set_zone_field(target, FIELD_SLATS_HORIZONTAL_SWING, swing)

    async def set_slats_vertical_position(
        self, target: PutRequestTarget, position: int
    ) -> bool:
        return await self.set_zone_field(
            target, FIELD_SLATS_VERTICAL_POSITION, position
        )

    async def set_slats_horizontal_position(
        self, target: PutRequestTarget, position: int
    ) -> bool:
        return await self.set_zone_field(
            target, FIELD_SLATS_HORIZONTAL_POSITION, position
        )

    async def set_eco_adapt(self, target: PutRequestTarget, eco_adapt: str) -> bool:
        """Set eco-adapt by display name ("A_PLUS", ...)."""
        return await self._set_translated(
            target,
            FIELD_ECO_ADAPT,
            eco_adapt,
            lambda _zone, value: translate_eco_adapt(value),
        )

    async def set_anti_freeze(
        self, target: PutRequestTarget, anti_freeze: bool  # noqa: FBT001
    ) -> bool:
        return await self.set_zone_field(target, FIELD_ANTI_FREEZE, anti_freeze)

    # --- Lifecycle ---

    async def connect(self) -> str | None:
        """
        Wait until the bridge answers, retrying with a growing delay.

        Makes up to ``retries + 1`` attempts; the delay after attempt n is
        ``refresh_interval * 2**n``.

        Returns:
            The API version reported by the bridge.

        Raises:
            AirzoneConnectionError: If no attempt succeeded.

        """
        attempts = self._config.retries + 1
        last_exc: Exception | None = None
        for attempt in range(attempts):
            try:
                version = await self._request_api_version()
            except (AirzoneConnectionError, AirzoneDecodeError) as exc:
                last_exc = exc
                if attempt + 1 < attempts:
                    delay = self._config.refresh_interval * BACKOFF_FACTOR**attempt
                    _LOGGER.warning(
                        "Bridge not reachable (%s), retrying in %.0fs", exc, delay
                    )
                    await asyncio.sleep(delay)
            else:
                _LOGGER.info(
                    "Connected to %s, API version %s",
                    self._transport.base_url,
                    version,
                )
                return version
        raise AirzoneConnectionError(
            f"Bridge {self._transport.base_url} not reachable "
            f"after {attempts} attempts: {last_exc}"
        )

    async def close(self) -> None:
        """Stop polling and release the HTTP session."""
        await self.stop_polling()
        await self._transport.close()
        _LOGGER.info("Closed")

    async def __aenter__(self) -> Self:
        """Connect, load the first snapshot and start polling."""
        try:
            await self.connect()
            await self.fetch_status()
        except BaseException:
            await self._transport.close()
            raise
        self.start_polling()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Stop polling and close the session."""
        await self.close()
