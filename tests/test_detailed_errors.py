"""Tests for error code descriptions."""

from __future__ import annotations

from airzone_local.detailed_errors import (
    DEFAULT_TRANSLATIONS,
    KNOWN_ERROR_CODES,
    describe,
    format_error,
    format_errors,
)
from airzone_local.models import ZoneError


def test_every_known_code_has_a_text() -> None:
    assert len(KNOWN_ERROR_CODES) == 19
    for key in KNOWN_ERROR_CODES.values():
        assert DEFAULT_TRANSLATIONS[key]


def test_describe_known_code() -> None:
    assert describe("Error 3") == "Motorized grille or damper not connected"
    assert describe("Error IAQ4") == "Air quality sensor requires maintenance"


def test_describe_unknown_code() -> None:
    assert describe("Error 99") is None
    assert describe(None) is None


def test_describe_with_translations() -> None:
    translations = {"error.error3.description": "Rejilla no conectada"}
    assert describe("Error 3", translations) == "Rejilla no conectada"
    assert describe("Error 4", translations) is None


def test_format_error() -> None:
    assert (
        format_error(ZoneError(zone="Error 5"))
        == "Zone: Error 5 - Temperature probe open circuit"
    )
    assert format_error(ZoneError(system="Error 99")) == "System: Error 99"
    assert format_error(ZoneError()) == "unknown: unexpected"


def test_format_errors() -> None:
    errors = [ZoneError(system="Error C02"), ZoneError(zone="Error 42")]
    assert format_errors(errors) == [
        "System: Error C02 - Communication error with the heat pump",
        "Zone: Error 42",
    ]
    assert format_errors([]) == []
