from __future__ import annotations


class ParseError(RuntimeError):
    """Raised when a coverage profile is unreadable or malformed."""


class ConfigError(ValueError):
    """Raised when CLI/env configuration values are invalid."""


class InvalidArgumentError(ConfigError):
    """Raised for an unrecognized sort key or sort order."""
