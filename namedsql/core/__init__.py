"""
Shared plumbing: settings, exceptions, logging setup.
"""

from .config import Settings, settings
from .exceptions import (
    NamedSQLError,
    StatementDiscoveryError,
    StatementNameError,
    StatementNotFoundError,
    StatementParseError,
)
from .log import configure_logging

__all__ = [
    "Settings",
    "settings",
    "configure_logging",
    "NamedSQLError",
    "StatementDiscoveryError",
    "StatementNameError",
    "StatementNotFoundError",
    "StatementParseError",
]
