"""Cache of the latest zone and system snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .const import ZONE_KEY_FACTOR

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .models import SystemInfo, ZoneSnapshot


def zone_key(system_id: int, zone_id: int) -> int:
    """Return the cache key of a zone, e.g. 1003 for zone 3 of system 1."""
    return ZONE_KEY_FACTOR * system_id + zone_id


@dataclass(frozen=True)
class Snapshot:
    """Zones and systems from one successful poll."""

    zones: Mapping[int, ZoneSnapshot] = field(
        default_factory=lambda: MappingProxyType({})
    )
    systems: Mapping[int, SystemInfo] = field(
        default_factory=lambda: MappingProxyType({})
    )


class SnapshotCache:
    """
    Hold the most recent Snapshot.

    ``replace`` builds a new immutable Snapshot and swaps it in with a single
    assignment, so readers see either the old poll or the new one.
    """

    def __init__(self) -> None:
        self._snapshot: Snapshot | None = None

    @property
    def populated(self) -> bool:
        """Return True once a poll has been stored."""
        return self._snapshot is not None

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot or Snapshot()

    def replace(
        self, zones: Iterable[ZoneSnapshot], systems: Iterable[SystemInfo]
    ) -> None:
        """Replace the cached zones and systems wholesale."""
        self._snapshot = Snapshot(
            zones=MappingProxyType(
                {zone_key(z.system_id, z.zone_id): z for z in zones}
            ),
            systems=MappingProxyType({s.system_id: s for s in systems}),
        )

    def clear(self) -> None:
        self._snapshot = None

    def get_zone(self, system_id: int, zone_id: int) -> ZoneSnapshot | None:
        return self.snapshot.zones.get(zone_key(system_id, zone_id))

    def get_system(self, system_id: int) -> SystemInfo | None:
        return self.snapshot.systems.get(system_id)

    def get_master_zone(self, system_id: int) -> ZoneSnapshot | None:
        """
        Return the master zone of a system, or None.

        Zones are scanned by ascending zone id and the first one satisfying
        ZoneSnapshot.is_master_zone wins, which settles ties of the legacy
        "zone with modes" rule in favour of the lowest zone id.
        """
        for zone in self.zones(system_id):
            if zone.is_master_zone:
                return zone
        return None

    def zones(self, system_id: int | None = None) -> list[ZoneSnapshot]:
        """Return cached zones sorted by (system id, zone id)."""
        zones: Iterable[ZoneSnapshot] = self.snapshot.zones.values()
        if system_id is not None:
            zones = [z for z in zones if z.system_id == system_id]
        return sorted(zones, key=lambda z: z.key)

    def systems(self) -> list[SystemInfo]:
        """Return cached systems sorted by id."""
        return sorted(self.snapshot.systems.values(), key=lambda s: s.system_id)
