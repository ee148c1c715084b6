"""Tests for exception hierarchy."""

from __future__ import annotations

import pytest

from airzone_local.exceptions import (
    AirzoneConnectionError,
    AirzoneDecodeError,
    AirzoneError,
    CommandError,
    ConfigError,
)


def test_exception_hierarchy() -> None:
    assert issubclass(AirzoneConnectionError, AirzoneError)
    assert issubclass(AirzoneDecodeError, AirzoneError)
    assert issubclass(CommandError, AirzoneError)
    assert issubclass(ConfigError, AirzoneError)
    assert issubclass(AirzoneError, Exception)


@pytest.mark.parametrize(
    "exc_class",
    [AirzoneConnectionError, AirzoneDecodeError, CommandError, ConfigError],
)
def test_exceptions_are_catchable(exc_class: type[AirzoneError]) -> None:
    with pytest.raises(AirzoneError):
        raise exc_class("test")
