"""Descriptions of the error codes documented for AirZone bridges."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .models import ZoneError

KNOWN_ERROR_CODES: dict[str, str] = {
    "Error 3": "error.error3.description",
    "Error 4": "error.error4.description",
    "Error 5": "error.error5.description",
    "Error 6": "error.error6.description",
    "Error 7": "error.error7.description",
    "Error 8": "error.error8.description",
    "Error 9": "error.error9.description",
    "Error 11": "error.error11.description",
    "Error 13": "error.error13.description",
    "Error 14": "error.error14.description",
    "Error 15": "error.error15.description",
    "Error 16": "error.error16.description",
    "Error C02": "error.errorC02.description",
    "Error C09": "error.errorC09.description",
    "Error C11": "error.errorC11.description",
    "Error IAQ1": "error.errorIAQ1.description",
    "Error IAQ2": "error.errorIAQ2.description",
    "Error IAQ3": "error.errorIAQ3.description",
    "Error IAQ4": "error.errorIAQ4.description",
}

# Bundled English texts, keyed like KNOWN_ERROR_CODES values.
DEFAULT_TRANSLATIONS: dict[str, str] = {
    "error.error3.description": "Motorized grille or damper not connected",
    "error.error4.description": "Motorized grille or damper blocked",
    "error.error5.description": "Temperature probe open circuit",
    "error.error6.description": "Temperature probe short circuit",
    "error.error7.description": "Radiant element communication error",
    "error.error8.description": "Lite thermostat not connected",
    "error.error9.description": "Communication error between gateway and system",
    "error.error11.description": (
        "Communication error between gateway and indoor unit"
    ),
    "error.error13.description": (
        "Communication error with the production control module"
    ),
    "error.error14.description": "Communication error with the metering module",
    "error.error15.description": "Communication error with the energy meter",
    "error.error16.description": "Communication error with the zone module",
    "error.errorC02.description": "Communication error with the heat pump",
    "error.errorC09.description": (
        "Communication error between gateway and control board"
    ),
    "error.errorC11.description": "Indoor unit reports an internal error",
    "error.errorIAQ1.description": "Communication error with the air quality sensor",
    "error.errorIAQ2.description": "Air quality sensor ionizer failure",
    "error.errorIAQ3.description": "Air quality sensor measurement failure",
    "error.errorIAQ4.description": "Air quality sensor requires maintenance",
}


def describe(
    error_code: str | None, translations: Mapping[str, str] | None = None
) -> str | None:
    """
    Return the description of an error code, if it is a known one.

    Args:
        error_code: Raw code as sent by the bridge, e.g. "Error 3".
        translations: Localization key to text mapping. Defaults to the
            bundled English texts; keys missing from it resolve to None.

    """
    if error_code is None:
        return None
    key = KNOWN_ERROR_CODES.get(error_code)
    if key is None:
        return None
    return (translations or DEFAULT_TRANSLATIONS).get(key)


def format_error(
    error: ZoneError, translations: Mapping[str, str] | None = None
) -> str:
    """Return "<origin>: <code>" followed by the description when known."""
    message = f"{error.origin}: {error.code}"
    detail = describe(error.code, translations)
    if detail is not None:
        message += f" - {detail}"
    return message


def format_errors(
    errors: Iterable[ZoneError], translations: Mapping[str, str] | None = None
) -> list[str]:
    return [format_error(error, translations) for error in errors]
