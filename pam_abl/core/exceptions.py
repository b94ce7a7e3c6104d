"""
Exception hierarchy for configuration parsing.

All errors derive from ConfigError (a ValueError) so callers that only care
about "the configuration is unusable" can catch a single type, while the
API layer and diagnostics can tell the individual failures apart.
"""
from typing import Optional


class ConfigError(ValueError):
    """Base class for every configuration parsing failure."""


class CommandSyntaxError(ConfigError):
    """Malformed bracket directive (nested open, unterminated field, dangling escape)."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at position {position})")
        self.message = message
        self.position = position


class UnknownOptionError(ConfigError):
    """A module argument that matches no known keyword."""

    def __init__(self, option: str):
        super().__init__(f"Unknown module option: {option!r}")
        self.option = option


class ResourceError(ConfigError):
    """The resource named by a config= argument could not be used."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot use configuration file {path!r}: {reason}")
        self.path = path
        self.reason = reason


class RuleSyntaxError(ConfigError):
    """Malformed rule, duration or limits value."""


class ConfigFileError(ConfigError):
    """Malformed line in a pam_abl configuration file."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            super().__init__(f"Line {line_number}: {message}")
        else:
            super().__init__(message)
        self.message = message
        self.line_number = line_number
