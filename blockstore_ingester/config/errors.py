"""
Configuration Loading Errors

Exception types raised while reading and parsing the configuration file.

Author: Blockstore Ingester Project
License: MIT
"""

from enum import Enum
from typing import Optional


class LoadErrorKind(Enum):
    """Stage of config loading that failed."""
    READ_FAILURE = "read_failure"
    PARSE_FAILURE = "parse_failure"


class ConfigLoadError(Exception):
    """Base exception for configuration load failures."""

    kind: LoadErrorKind = LoadErrorKind.PARSE_FAILURE
    default_message = "Error loading config file"

    def __init__(self, path: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.path = path
        self.cause = cause
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self):
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class ConfigReadError(ConfigLoadError):
    """Raised when the config file is missing or unreadable."""

    kind = LoadErrorKind.READ_FAILURE
    default_message = "Error reading config file"


class ConfigParseError(ConfigLoadError):
    """Raised when the config file is not valid YAML or does not match the schema."""

    kind = LoadErrorKind.PARSE_FAILURE
    default_message = "Error parsing config file"
