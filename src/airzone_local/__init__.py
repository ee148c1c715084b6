"""Local polling and control of AirZone HVAC bridges over HTTP."""

__version__ = "1.0.0"

from .cache import SnapshotCache, zone_key
from .config import BridgeConfig
from .const import (
    DEFAULT_PORT,
    AirQuality,
    AirQualityMode,
    SleepTimer,
    Stage,
    Units,
    ZoneMode,
)
from .detailed_errors import describe, format_errors
from .exceptions import (
    AirzoneConnectionError,
    AirzoneDecodeError,
    AirzoneError,
    CommandError,
    ConfigError,
)
from .manager import AirzoneApiManager
from .models import (
    PutRequestTarget,
    ServerProperties,
    SystemInfo,
    ZoneError,
    ZoneSnapshot,
)
from .transport import BridgeTransport, RateLimiter

__all__ = [
    "DEFAULT_PORT",
    "AirQuality",
    "AirQualityMode",
    "AirzoneApiManager",
    "AirzoneConnectionError",
    "AirzoneDecodeError",
    "AirzoneError",
    "BridgeConfig",
    "BridgeTransport",
    "CommandError",
    "ConfigError",
    "PutRequestTarget",
    "RateLimiter",
    "ServerProperties",
    "SleepTimer",
    "SnapshotCache",
    "Stage",
    "SystemInfo",
    "Units",
    "ZoneError",
    "ZoneMode",
    "ZoneSnapshot",
    "describe",
    "format_errors",
    "zone_key",
]
