"""Connection settings of one bridge."""

from __future__ import annotations

from dataclasses import dataclass

from .const import (
    API_PATH,
    DEFAULT_PORT,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    REQUEST_SPACING,
)
from .exceptions import ConfigError

_MAX_PORT = 65535


@dataclass(frozen=True)
class BridgeConfig:
    """
    Settings supplied by the caller for one bridge.

    ip_address: Host name or IP address of the bridge.
    port: TCP port of the local API.
    timeout: Per-request timeout, in seconds.
    retries: Extra probe attempts made by AirzoneApiManager.connect().
    refresh_interval: Delay between two polls, in seconds.
    request_spacing: Minimum delay between two requests, in seconds.
    """

    ip_address: str
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    request_spacing: float = REQUEST_SPACING

    def __post_init__(self) -> None:
        if not self.ip_address:
            raise ConfigError("ip_address must not be empty")
        if not 0 < self.port <= _MAX_PORT:
            raise ConfigError(f"Invalid port {self.port}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.retries < 0:
            raise ConfigError(f"retries must not be negative, got {self.retries}")
        if self.refresh_interval <= 0:
            raise ConfigError(
                f"refresh_interval must be positive, got {self.refresh_interval}"
            )
        if self.request_spacing < 0:
            raise ConfigError(
                f"request_spacing must not be negative, got {self.request_spacing}"
            )

    @property
    def base_url(self) -> str:
        return f"http://{self.ip_address}:{self.port}{API_PATH}"
