"""Tests for BridgeConfig."""

from __future__ import annotations

import pytest

from airzone_local.config import BridgeConfig
from airzone_local.exceptions import ConfigError


def test_defaults() -> None:
    config = BridgeConfig("192.168.1.50")
    assert config.port == 3000
    assert config.timeout == 1.0
    assert config.retries == 5
    assert config.refresh_interval == 10.0
    assert config.request_spacing == 3.0
    assert config.base_url == "http://192.168.1.50:3000/api/v1/"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"ip_address": ""},
        {"port": 0},
        {"port": 70000},
        {"timeout": 0},
        {"retries": -1},
        {"refresh_interval": 0},
        {"request_spacing": -0.5},
    ],
)
def test_invalid_values(kwargs: dict[str, object]) -> None:
    params: dict[str, object] = {"ip_address": "192.168.1.50"} | kwargs
    with pytest.raises(ConfigError):
        BridgeConfig(**params)  # type: ignore[arg-type]


def test_zero_spacing_allowed() -> None:
    assert BridgeConfig("airzone.local", request_spacing=0).request_spacing == 0
