"""Testkit Core -- errors, argument guards, logging and settings.

Architecture::

    errors.py          Structured error hierarchy (TestkitError, EventsMismatchError)
    preconditions.py   Argument guards raising PreconditionViolationError
    logging.py         structlog configuration + get_logger
    settings.py        TestkitSettings (pydantic-settings) + get_settings
"""

from testkit.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    EventsMismatchError,
    ExecutionsAssertionError,
    PreconditionViolationError,
    ReconstructionError,
    TestkitAssertionError,
    TestkitError,
)
from testkit.core.settings import MissingStartPolicy, TestkitSettings, get_settings

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "EventsMismatchError",
    "ExecutionsAssertionError",
    "PreconditionViolationError",
    "ReconstructionError",
    "TestkitAssertionError",
    "TestkitError",
    "MissingStartPolicy",
    "TestkitSettings",
    "get_settings",
]
