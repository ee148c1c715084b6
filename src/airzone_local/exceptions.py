"""Exception classes for airzone_local."""


class AirzoneError(Exception):
    """Base exception for airzone_local."""


class AirzoneConnectionError(AirzoneError):
    """A request to the bridge failed, timed out or returned an error status."""


class AirzoneDecodeError(AirzoneError):
    """A response body could not be decoded."""


class CommandError(AirzoneError):
    """A command was rejected before being sent to the bridge."""


class ConfigError(AirzoneError):
    """The bridge configuration is invalid."""
