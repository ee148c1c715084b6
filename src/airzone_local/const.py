"""Constants and enums for the AirZone local HTTP API."""

from __future__ import annotations

from enum import IntEnum


class ZoneMode(IntEnum):
    """Zone operating mode. Code 6 is reserved by the bridge."""

    STOP = 1
    COOLING = 2
    HEATING = 3
    FAN = 4
    DRY = 5
    AUTO = 7


class Stage(IntEnum):
    """Cold/heat stage of a zone."""

    AIR = 1
    RADIANT = 2
    COMBINED = 3


class SleepTimer(IntEnum):
    """Sleep timer, in minutes."""

    OFF = 0
    THIRTY = 30
    SIXTY = 60
    NINETY = 90


class AirQualityMode(IntEnum):
    """Air quality control mode."""

    OFF = 0
    ON = 1
    AUTO = 2


class AirQuality(IntEnum):
    """Air quality level reported by the zone (read only)."""

    OFF = 0
    GOOD = 1
    MEDIUM = 2
    LOW = 3


class Units(IntEnum):
    """Temperature units of a zone."""

    CELSIUS = 0
    FAHRENHEIT = 1


# Resources under /api/v1/
API_PATH = "/api/v1/"
RESOURCE_HVAC = "hvac"
RESOURCE_WEBSERVER = "webserver"
RESOURCE_VERSION = "version"

# Special ids used in poll requests and PUT targets
ALL_ZONES_ID = 0
ALL_SYSTEMS_ID = 127
ZONE_KEY_FACTOR = 1000  # ids range from 1 to 32

# Field names accepted by PUT /hvac
FIELD_ON = "on"
FIELD_SETPOINT = "setpoint"
FIELD_COOL_SETPOINT = "coolsetpoint"
FIELD_HEAT_SETPOINT = "heatsetpoint"
FIELD_NAME = "name"
FIELD_MODE = "mode"
FIELD_SPEED = "speed"
FIELD_COLD_STAGE = "coldstage"
FIELD_HEAT_STAGE = "heatstage"
FIELD_SLEEP = "sleep"
FIELD_AIR_QUALITY_MODE = "aq_mode"
FIELD_AIR_QUALITY_LOW_THRESHOLD = "aq_thrlow"
FIELD_AIR_QUALITY_HIGH_THRESHOLD = "aq_thrhigh"
FIELD_SLATS_VERTICAL_SWING = "slats_vswing"
FIELD_SLATS_HORIZONTAL_SWING = "slats_hswing"
FIELD_SLATS_VERTICAL_POSITION = "slats_vertical"
FIELD_SLATS_HORIZONTAL_POSITION = "slats_horizontal"
FIELD_ECO_ADAPT = "eco_adapt"
FIELD_ANTI_FREEZE = "antifreeze"

DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 1.0  # seconds
DEFAULT_RETRIES = 5
DEFAULT_REFRESH_INTERVAL = 10.0  # seconds
REQUEST_SPACING = 3.0  # seconds between the end of a request and the next one
BACKOFF_FACTOR = 2  # multiply poll delay by this on each failure
POLL_BACKOFF_MAX = 300  # max delay between failed polls (5 minutes)
