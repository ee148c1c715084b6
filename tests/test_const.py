"""Tests for constants and enums."""

from __future__ import annotations

from airzone_local.const import (
    ALL_SYSTEMS_ID,
    ALL_ZONES_ID,
    API_PATH,
    BACKOFF_FACTOR,
    DEFAULT_PORT,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    POLL_BACKOFF_MAX,
    REQUEST_SPACING,
    AirQuality,
    AirQualityMode,
    SleepTimer,
    Stage,
    Units,
    ZoneMode,
)


def test_zone_mode_values() -> None:
    assert ZoneMode.STOP == 1
    assert ZoneMode.COOLING == 2
    assert ZoneMode.HEATING == 3
    assert ZoneMode.FAN == 4
    assert ZoneMode.DRY == 5
    assert ZoneMode.AUTO == 7
    assert 6 not in {mode.value for mode in ZoneMode}


def test_stage_values() -> None:
    assert Stage.AIR == 1
    assert Stage.RADIANT == 2
    assert Stage.COMBINED == 3


def test_sleep_timer_values() -> None:
    assert [timer.value for timer in SleepTimer] == [0, 30, 60, 90]


def test_air_quality_values() -> None:
    assert AirQualityMode.OFF == 0
    assert AirQualityMode.ON == 1
    assert AirQualityMode.AUTO == 2
    assert AirQuality.GOOD == 1
    assert AirQuality.MEDIUM == 2
    assert AirQuality.LOW == 3


def test_units_values() -> None:
    assert Units.CELSIUS == 0
    assert Units.FAHRENHEIT == 1


def test_default_constants() -> None:
    assert API_PATH == "/api/v1/"
    assert ALL_ZONES_ID == 0
    assert ALL_SYSTEMS_ID == 127
    assert DEFAULT_PORT == 3000
    assert DEFAULT_TIMEOUT == 1.0
    assert DEFAULT_RETRIES == 5
    assert DEFAULT_REFRESH_INTERVAL == 10.0
    assert REQUEST_SPACING == 3.0
    assert BACKOFF_FACTOR == 2
    assert POLL_BACKOFF_MAX == 300
