"""
Core of TagConf: converters, stores, the merge engine and typed access.
"""

from .base import (
    TagConfError,
    ConversionError,
    UnsupportedTypeError,
    MissingPropertyError,
    ConfigurationError,
    StoreInitializationError,
    LoggingError,
    Entry,
    Locale,
)
from .configuration import Configuration
from .provider import ConfigurationProvider
from .resolver import (
    ConfigurationContextResolver,
    DefaultConfigurationContextResolver,
    StaticContextResolver,
)

__all__ = [
    "TagConfError",
    "ConversionError",
    "UnsupportedTypeError",
    "MissingPropertyError",
    "ConfigurationError",
    "StoreInitializationError",
    "LoggingError",
    "Entry",
    "Locale",
    "Configuration",
    "ConfigurationProvider",
    "ConfigurationContextResolver",
    "DefaultConfigurationContextResolver",
    "StaticContextResolver",
]
