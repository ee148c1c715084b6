"""Encoding and decoding of the bridge's JSON bodies."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, TypeVar

import orjson

from .const import ALL_SYSTEMS_ID, ALL_ZONES_ID
from .exceptions import AirzoneDecodeError
from .models import ServerProperties, SystemInfo, ZoneError, ZoneSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .models import (
        ErrorEntry,
        HvacSystemInfo,
        HvacZone,
        PutRequestTarget,
        WebServerResponse,
    )

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

# Some firmware versions send a line that is not JSON ahead of the object,
# terminated by ",\n". Only one such line at the very start is removed.
_RESPONSE_PREFIX = re.compile(r"^.+,\n")


def strip_response_prefix(text: str) -> str:
    """Remove the non-JSON leading line some firmware prepends to bodies."""
    return _RESPONSE_PREFIX.sub("", text, count=1)


def _load(data: bytes | str) -> dict[str, Any]:
    """Decode a response body into a JSON object."""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    cleaned = strip_response_prefix(text)
    if cleaned != text:
        _LOGGER.debug("Stripped response prefix, cleaned body: %s", cleaned[:200])
    try:
        body = orjson.loads(cleaned)
    except orjson.JSONDecodeError as exc:
        raise AirzoneDecodeError(f"Invalid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise AirzoneDecodeError(f"Expected a JSON object, got {type(body).__name__}")
    return body


def _list(body: dict[str, Any], key: str) -> list[Any]:
    value = body.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise AirzoneDecodeError(f"Expected a list for {key!r}")
    return value


def _field(
    raw: Mapping[str, Any], key: str, conv: Callable[[Any], _T], default: _T
) -> _T:
    """Convert raw[key], treating a missing key and a JSON null alike."""
    value = raw.get(key)
    return default if value is None else conv(value)


def _optional_bool(value: Any) -> bool | None:
    return None if value is None else bool(value)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def _decode_errors(entries: list[ErrorEntry] | None) -> tuple[ZoneError, ...]:
    return tuple(
        ZoneError(system=entry.get("system"), zone=entry.get("zone"))
        for entry in entries or ()
    )


def _decode_zone(raw: HvacZone) -> ZoneSnapshot:
    """Build a ZoneSnapshot from a wire zone object."""
    return ZoneSnapshot(
        system_id=int(raw["systemID"]),
        zone_id=int(raw["zoneID"]),
        name=_field(raw, "name", str, ""),
        thermostat_type=_field(raw, "thermos_type", int, 0),
        thermostat_firmware=_field(raw, "thermos_firmware", str, ""),
        thermostat_radio=_field(raw, "thermos_radio", int, 0),
        on=_field(raw, "on", bool, False),
        double_setpoint=_field(raw, "double_sp", bool, False),
        cool_setpoint=_field(raw, "coolsetpoint", float, 0.0),
        heat_setpoint=_field(raw, "heatsetpoint", float, 0.0),
        setpoint=_field(raw, "setpoint", float, 0.0),
        room_temperature=_field(raw, "roomTemp", float, 0.0),
        humidity=_field(raw, "humidity", float, 0.0),
        sleep=_field(raw, "sleep", int, 0),
        temperature_step=_field(raw, "temp_step", float, 0.0),
        mode=_field(raw, "mode", int, 0),
        modes=tuple(int(mode) for mode in raw.get("modes") or ()),
        speed=_field(raw, "speed", int, 0),
        speeds=_field(raw, "speeds", int, 0),
        cold_stage=_field(raw, "coldStage", int, 0),
        heat_stage=_field(raw, "heatStage", int, 0),
        cold_stages=_field(raw, "coldStages", int, 0),
        heat_stages=_field(raw, "heatStages", int, 0),
        units=_field(raw, "units", int, 0),
        errors=_decode_errors(raw.get("errors")),
        cool_max_temperature=_optional_float(raw.get("coolmaxtemp")),
        cool_min_temperature=_optional_float(raw.get("coolmintemp")),
        heat_max_temperature=_optional_float(raw.get("heatmaxtemp")),
        heat_min_temperature=_optional_float(raw.get("heatmintemp")),
        max_temperature=_optional_float(raw.get("maxTemp")),
        min_temperature=_optional_float(raw.get("minTemp")),
        air_demand=_optional_bool(raw.get("air_demand")),
        floor_demand=_optional_bool(raw.get("floor_demand")),
        cold_demand=_optional_bool(raw.get("cold_demand")),
        heat_demand=_optional_bool(raw.get("heat_demand")),
        air_quality_mode=_optional_int(raw.get("aq_mode")),
        air_quality=_optional_int(raw.get("aq_quality")),
        air_quality_threshold_low=_optional_float(raw.get("aq_thrlow")),
        air_quality_threshold_high=_optional_float(raw.get("aq_thrhigh")),
        master_zone_id=_optional_int(raw.get("master_zoneID")),
        slats_vertical_swing=_optional_bool(raw.get("slats_vswing")),
        slats_horizontal_swing=_optional_bool(raw.get("slats_hswing")),
        slats_vertical_position=_optional_int(raw.get("slats_vertical")),
        slats_horizontal_position=_optional_int(raw.get("slats_horizontal")),
        eco_adapt=raw.get("eco_adapt"),
        anti_freeze=_optional_bool(raw.get("antifreeze")),
    )


def _decode_system(raw: HvacSystemInfo) -> SystemInfo:
    """Build a SystemInfo from a wire system object."""
    return SystemInfo(
        system_id=int(raw["systemID"]),
        meter_connected=_field(raw, "mc_connected", bool, False),
        power=_optional_float(raw.get("power")),
        firmware=_field(raw, "system_firmware", str, ""),
        system_type=_field(raw, "system_type", int, 0),
        manufacturer=_field(raw, "manufacturer", str, ""),
        errors=_decode_errors(raw.get("errors")),
    )


def decode_zones_response(data: bytes | str) -> list[ZoneSnapshot]:
    """
    Decode the response to an all-zones poll.

    Raises:
        AirzoneDecodeError: If the body is not the expected shape.

    """
    body = _load(data)
    try:
        return [
            _decode_zone(zone)
            for system in _list(body, "systems")
            for zone in _list(system, "data")
        ]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise AirzoneDecodeError(f"Malformed zone entry: {exc!r}") from exc


def decode_systems_response(data: bytes | str) -> list[SystemInfo]:
    """
    Decode the response to an all-systems poll.

    Raises:
        AirzoneDecodeError: If the body is not the expected shape.

    """
    body = _load(data)
    try:
        return [_decode_system(system) for system in _list(body, "systems")]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise AirzoneDecodeError(f"Malformed system entry: {exc!r}") from exc


def decode_server_properties(data: bytes | str) -> ServerProperties:
    """Decode the ``webserver`` response."""
    raw: WebServerResponse = _load(data)  # type: ignore[assignment]
    try:
        return ServerProperties(
            mac=_field(raw, "mac", str, ""),
            wifi_channel=_field(raw, "wifi_channel", int, 0),
            wifi_quality=_field(raw, "wifi_quality", int, 0),
            wifi_rssi=_field(raw, "wifi_rssi", int, 0),
            interface=_field(raw, "interface", str, ""),
            firmware=_field(raw, "ws_firmware", str, ""),
            type=_field(raw, "ws_type", str, ""),
        )
    except (TypeError, ValueError) as exc:
        raise AirzoneDecodeError(f"Malformed webserver response: {exc!r}") from exc


def decode_api_version(data: bytes | str) -> str | None:
    """Decode the ``version`` response; ``None`` if no version is given."""
    version = _load(data).get("version")
    return None if version is None else str(version)


def encode_command_value(value: Any) -> int | float | str:
    """
    Coerce a command value to the JSON type the bridge expects.

    Booleans (on/off) become 0/1, other numbers are sent as doubles and
    anything else as its string representation.
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        return float(value)
    return str(value)


def encode_put_payload(target: PutRequestTarget, field: str, value: Any) -> bytes:
    """Encode a PUT body changing one field of a zone, or of all zones."""
    return orjson.dumps(
        {
            "systemID": target.system_id,
            "zoneID": target.zone_id,
            field: encode_command_value(value),
        }
    )


def encode_request(system_id: int, zone_id: int | None = None) -> bytes:
    """Encode a poll request body."""
    if zone_id is None:
        return orjson.dumps({"systemID": system_id})
    return orjson.dumps({"systemID": system_id, "zoneID": zone_id})


ALL_ZONES_REQUEST = encode_request(ALL_ZONES_ID, ALL_ZONES_ID)
ALL_SYSTEMS_REQUEST = encode_request(ALL_SYSTEMS_ID)
