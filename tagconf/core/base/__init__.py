"""
Base exceptions and value types with minimal dependencies.

This module provides the foundational components that other modules build upon.
"""

from .exceptions import (
    TagConfError,
    ConversionError,
    UnsupportedTypeError,
    MissingPropertyError,
    ConfigurationError,
    StoreInitializationError,
    LoggingError,
)
from .types import (
    Entry,
    Locale,
)

__all__ = [
    # Exceptions
    "TagConfError",
    "ConversionError",
    "UnsupportedTypeError",
    "MissingPropertyError",
    "ConfigurationError",
    "StoreInitializationError",
    "LoggingError",
    # Value types
    "Entry",
    "Locale",
]
