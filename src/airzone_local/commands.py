"""
Translate human-readable command values into wire values.

Each function checks the value against the zone it is aimed at and raises
CommandError when the bridge would not accept it, so that nothing invalid
is ever sent.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import CommandError
from .mappings import (
    AIR_QUALITY_MODE_TO_INT,
    ECO_ADAPT_TO_STRING,
    SLEEP_TO_INT,
    STAGE_TO_INT,
    ZONE_MODE_TO_INT,
)

if TYPE_CHECKING:
    from .models import ZoneSnapshot

_T = TypeVar("_T")


def _name_of(value: Any, what: str) -> str:
    """Return the display name carried by a command value."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str):
        return value
    raise CommandError(
        f"Only string values are supported for {what}, "
        f"received {type(value).__name__}"
    )


def _lookup(table: dict[str, _T], value: Any, what: str) -> _T:
    name = _name_of(value, what)
    code = table.get(name)
    if code is None:
        raise CommandError(f"Unknown {what} {name!r}, known values are {list(table)}")
    return code


def translate_mode(zone: ZoneSnapshot, value: Any) -> int:
    """Return the wire code of a mode the zone accepts."""
    code = _lookup(ZONE_MODE_TO_INT, value, "mode")
    allowed = sorted(zone.modes)
    index = bisect_left(allowed, code)
    if index == len(allowed) or allowed[index] != code:
        raise CommandError(
            f"Unsupported mode {code} for zone {zone.key}, "
            f"allowed modes are {allowed}"
        )
    return code


def translate_speed(zone: ZoneSnapshot, value: Any) -> int | float:
    """Return the speed unchanged if it is within 0..speeds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CommandError(
            f"Only numeric values are supported for speed, "
            f"received {type(value).__name__}"
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise CommandError(f"Unsupported speed {value} for zone {zone.key}")
    if int(value) not in zone.allowed_speeds:
        raise CommandError(
            f"Unsupported speed {int(value)} for zone {zone.key}, "
            f"allowed speeds are {list(zone.allowed_speeds)}"
        )
    return value


def translate_stage(zone: ZoneSnapshot, value: Any, kind: str) -> int:
    """
    Return the wire code of a cold or heat stage.

    The bridge supports a single configured stage per zone, so the value
    must equal ``cold_stages``/``heat_stages`` exactly.
    """
    code = _lookup(STAGE_TO_INT, value, f"{kind} stage")
    allowed = zone.cold_stages if kind == "cold" else zone.heat_stages
    if code != allowed:
        raise CommandError(
            f"Unsupported {kind} stage {code} for zone {zone.key}, "
            f"allowed stages are {allowed}"
        )
    return code


def translate_sleep(value: Any) -> int:
    return _lookup(SLEEP_TO_INT, value, "sleep")


def translate_air_quality_mode(value: Any) -> int:
    return _lookup(AIR_QUALITY_MODE_TO_INT, value, "air quality mode")


def translate_eco_adapt(value: Any) -> str:
    return _lookup(ECO_ADAPT_TO_STRING, value, "eco adapt")
