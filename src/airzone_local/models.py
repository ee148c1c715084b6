"""Data models for bridge responses, zone snapshots and request targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypedDict

from .const import ALL_ZONES_ID
from .mappings import (
    INT_TO_AIR_QUALITY,
    INT_TO_AIR_QUALITY_MODE,
    INT_TO_SLEEP,
    INT_TO_STAGE,
    INT_TO_SYSTEM_TYPE,
    INT_TO_THERMOSTAT_RADIO,
    INT_TO_THERMOSTAT_TYPE,
    INT_TO_UNITS,
    INT_TO_ZONE_MODE,
    STRING_TO_ECO_ADAPT,
)

if TYPE_CHECKING:
    from typing import Self

# ---------------------------------------------------------------------------
# Wire TypedDicts matching the JSON bodies exposed by the bridge
# ---------------------------------------------------------------------------


class ErrorEntry(TypedDict, total=False):
    """One entry of an ``errors`` list; carries either key, rarely none."""

    system: str
    zone: str


class _HvacZoneRequired(TypedDict):
    systemID: int
    zoneID: int


class HvacZone(_HvacZoneRequired, total=False):
    """A zone object from ``{"systems": [{"data": [...]}]}``.

    Only the ids are guaranteed; firmware versions differ in which of the
    optional keys they send.
    """

    name: str
    thermos_type: int
    thermos_firmware: str
    thermos_radio: int
    on: int
    double_sp: int
    coolsetpoint: float
    coolmaxtemp: float
    coolmintemp: float
    heatsetpoint: float
    heatmaxtemp: float
    heatmintemp: float
    maxTemp: float
    minTemp: float
    setpoint: float
    roomTemp: float
    humidity: float
    sleep: int
    temp_step: float
    modes: list[int]
    mode: int
    speeds: int
    speed: int
    coldStage: int
    heatStage: int
    coldStages: int
    heatStages: int
    units: int
    errors: list[ErrorEntry]
    air_demand: int
    floor_demand: int
    cold_demand: int
    heat_demand: int
    aq_mode: int
    aq_quality: int
    aq_thrlow: float
    aq_thrhigh: float
    master_zoneID: int
    slats_vswing: int
    slats_hswing: int
    slats_vertical: int
    slats_horizontal: int
    eco_adapt: str
    antifreeze: int


class HvacSystem(TypedDict):
    """One system of the all-zones poll response."""

    data: list[HvacZone]


class HvacZonesResponse(TypedDict):
    """Response to ``{"systemID": 0, "zoneID": 0}``."""

    systems: list[HvacSystem]


class _HvacSystemInfoRequired(TypedDict):
    systemID: int


class HvacSystemInfo(_HvacSystemInfoRequired, total=False):
    """A system object from the all-systems poll response."""

    mc_connected: int
    power: float
    system_firmware: str
    system_type: int
    manufacturer: str
    errors: list[ErrorEntry]


class HvacSystemsResponse(TypedDict):
    """Response to ``{"systemID": 127}``."""

    systems: list[HvacSystemInfo]


class WebServerResponse(TypedDict, total=False):
    """Response of the ``webserver`` resource."""

    mac: str
    wifi_channel: int
    wifi_quality: int
    wifi_rssi: int
    interface: str
    ws_firmware: str
    ws_type: str


class VersionResponse(TypedDict):
    """Response of the ``version`` resource."""

    version: str


# ---------------------------------------------------------------------------
# Typed snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ZoneError:
    """An error reported by the bridge, raised either by a system or a zone."""

    system: str | None = None
    zone: str | None = None

    @property
    def origin(self) -> str:
        """Return "System", "Zone" or "unknown"."""
        if self.system is not None:
            return "System"
        if self.zone is not None:
            return "Zone"
        return "unknown"

    @property
    def code(self) -> str:
        """Return the raw error code."""
        if self.system is not None:
            return self.system
        if self.zone is not None:
            return self.zone
        return "unexpected"


@dataclass(frozen=True)
class ZoneSnapshot:
    """Last known state of one zone.

    Snapshots are rebuilt on every poll; two polls never share instances.
    Enumerated values keep their wire codes, the ``*_name`` properties give
    the human-readable value or ``None`` for an unknown code.
    """

    system_id: int
    zone_id: int
    name: str = ""
    thermostat_type: int = 0
    thermostat_firmware: str = ""
    thermostat_radio: int = 0
    on: bool = False
    double_setpoint: bool = False
    cool_setpoint: float = 0.0
    heat_setpoint: float = 0.0
    setpoint: float = 0.0
    room_temperature: float = 0.0
    humidity: float = 0.0
    sleep: int = 0
    temperature_step: float = 0.0
    mode: int = 0
    modes: tuple[int, ...] = ()
    speed: int = 0
    speeds: int = 0
    cold_stage: int = 0
    heat_stage: int = 0
    cold_stages: int = 0
    heat_stages: int = 0
    units: int = 0
    errors: tuple[ZoneError, ...] = ()
    cool_max_temperature: float | None = None
    cool_min_temperature: float | None = None
    heat_max_temperature: float | None = None
    heat_min_temperature: float | None = None
    max_temperature: float | None = None
    min_temperature: float | None = None
    air_demand: bool | None = None
    floor_demand: bool | None = None
    cold_demand: bool | None = None
    heat_demand: bool | None = None
    air_quality_mode: int | None = None
    air_quality: int | None = None
    air_quality_threshold_low: float | None = None
    air_quality_threshold_high: float | None = None
    master_zone_id: int | None = None
    slats_vertical_swing: bool | None = None
    slats_horizontal_swing: bool | None = None
    slats_vertical_position: int | None = None
    slats_horizontal_position: int | None = None
    eco_adapt: str | None = None
    anti_freeze: bool | None = None

    @property
    def key(self) -> tuple[int, int]:
        """Return the (system_id, zone_id) identity of the zone."""
        return (self.system_id, self.zone_id)

    @property
    def is_master_zone(self) -> bool:
        """
        Return True if this zone may change the system-wide mode.

        Firmware that predates ``master_zoneID`` gets the legacy rule: the
        master zone is the one that lists allowed modes. That rule is not
        guaranteed to single out one zone.
        """
        if self.master_zone_id is not None:
            return self.master_zone_id == self.zone_id
        return len(self.modes) > 0

    @property
    def allowed_speeds(self) -> range:
        """Return the accepted fan speeds, 0 through ``speeds``."""
        return range(self.speeds + 1)

    @property
    def mode_name(self) -> str | None:
        return INT_TO_ZONE_MODE.get(self.mode)

    @property
    def allowed_mode_names(self) -> list[str | None]:
        return [INT_TO_ZONE_MODE.get(mode) for mode in self.modes]

    @property
    def cold_stage_name(self) -> str | None:
        return INT_TO_STAGE.get(self.cold_stage)

    @property
    def heat_stage_name(self) -> str | None:
        return INT_TO_STAGE.get(self.heat_stage)

    @property
    def sleep_name(self) -> str | None:
        return INT_TO_SLEEP.get(self.sleep)

    @property
    def units_name(self) -> str | None:
        return INT_TO_UNITS.get(self.units)

    @property
    def air_quality_mode_name(self) -> str | None:
        if self.air_quality_mode is None:
            return None
        return INT_TO_AIR_QUALITY_MODE.get(self.air_quality_mode)

    @property
    def air_quality_name(self) -> str | None:
        if self.air_quality is None:
            return None
        return INT_TO_AIR_QUALITY.get(self.air_quality)

    @property
    def eco_adapt_name(self) -> str | None:
        if self.eco_adapt is None:
            return None
        return STRING_TO_ECO_ADAPT.get(self.eco_adapt)

    @property
    def thermostat_type_name(self) -> str:
        return INT_TO_THERMOSTAT_TYPE.get(
            self.thermostat_type,
            f"Unknown thermostat type: {self.thermostat_type}",
        )

    @property
    def thermostat_radio_name(self) -> str:
        return INT_TO_THERMOSTAT_RADIO.get(
            self.thermostat_radio,
            f"Unknown thermostat radio: {self.thermostat_radio}",
        )


@dataclass(frozen=True)
class SystemInfo:
    """Metadata of one HVAC system."""

    system_id: int
    meter_connected: bool = False
    power: float | None = None
    firmware: str = ""
    system_type: int = 0
    manufacturer: str = ""
    errors: tuple[ZoneError, ...] = ()

    @property
    def system_type_name(self) -> str:
        return INT_TO_SYSTEM_TYPE.get(
            self.system_type, f"Unknown system type: {self.system_type}"
        )


@dataclass(frozen=True)
class ServerProperties:
    """Network and firmware metadata of the bridge web server."""

    mac: str = ""
    wifi_channel: int = 0
    wifi_quality: int = 0
    wifi_rssi: int = 0
    interface: str = ""
    firmware: str = ""
    type: str = ""


@dataclass(frozen=True)
class PutRequestTarget:
    """Addressing pair of a PUT request; zone 0 targets every zone."""

    system_id: int
    zone_id: int = field(default=ALL_ZONES_ID)

    @property
    def is_all_zones(self) -> bool:
        return self.zone_id == ALL_ZONES_ID

    @classmethod
    def for_zone(cls, zone: ZoneSnapshot) -> Self:
        """Return the target addressing a single zone."""
        return cls(zone.system_id, zone.zone_id)

    @classmethod
    def all_zones(cls, system_id: int) -> Self:
        """Return the target addressing every zone of a system."""
        return cls(system_id, ALL_ZONES_ID)

