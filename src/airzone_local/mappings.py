"""
Lookup tables between wire codes and human-readable values.

Forward tables (wire -> name) cover every code the bridge documents; reverse
tables (name -> wire) are only used to build outgoing payloads. A value that
is missing from a table is unmappable: callers get ``None`` from ``dict.get``
and must not fall back to a default.
"""

from __future__ import annotations

from .const import AirQuality, AirQualityMode, SleepTimer, Stage, Units, ZoneMode

INT_TO_ZONE_MODE: dict[int, str] = {mode.value: mode.name for mode in ZoneMode}
ZONE_MODE_TO_INT: dict[str, int] = {v: k for k, v in INT_TO_ZONE_MODE.items()}

INT_TO_STAGE: dict[int, str] = {stage.value: stage.name for stage in Stage}
STAGE_TO_INT: dict[str, int] = {v: k for k, v in INT_TO_STAGE.items()}

INT_TO_SLEEP: dict[int, str] = {timer.value: timer.name for timer in SleepTimer}
SLEEP_TO_INT: dict[str, int] = {v: k for k, v in INT_TO_SLEEP.items()}

INT_TO_AIR_QUALITY_MODE: dict[int, str] = {
    mode.value: mode.name for mode in AirQualityMode
}
AIR_QUALITY_MODE_TO_INT: dict[str, int] = {
    v: k for k, v in INT_TO_AIR_QUALITY_MODE.items()
}

# Read only: the bridge never accepts an air quality level.
INT_TO_AIR_QUALITY: dict[int, str] = {level.value: level.name for level in AirQuality}

STRING_TO_ECO_ADAPT: dict[str, str] = {
    "off": "OFF",
    "manual": "MANUAL",
    "a": "A",
    "a_p": "A_PLUS",
    "a_pp": "A_PLUS_PLUS",
}
ECO_ADAPT_TO_STRING: dict[str, str] = {v: k for k, v in STRING_TO_ECO_ADAPT.items()}

INT_TO_UNITS: dict[int, str] = {unit.value: unit.name for unit in Units}

INT_TO_THERMOSTAT_TYPE: dict[int, str] = {
    1: "Blueface",
    2: "Blueface Zero",
    3: "Lite",
    4: "Think",
}

INT_TO_THERMOSTAT_RADIO: dict[int, str] = {
    0: "Cable",
    1: "Radio",
}

INT_TO_SYSTEM_TYPE: dict[int, str] = {
    1: "C6",
    2: "AQUAGLASS",
    3: "DZK",
    4: "Radiant",
    5: "C3",
    6: "ZBS",
    7: "ZS6",
}
