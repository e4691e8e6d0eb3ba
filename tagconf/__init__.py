"""
TagConf: tag-aware configuration aggregation with typed access.

Configuration is collected from several stores (environment, properties,
encrypted properties, INI, YAML/JSON/TOML files, in-memory objects), merged
by an ordered list of environment tags, and read through typed accessors.
"""

__version__ = "0.1.0"

from tagconf.core.base.exceptions import (
    TagConfError,
    ConversionError,
    UnsupportedTypeError,
    MissingPropertyError,
    ConfigurationError,
    StoreInitializationError,
    LoggingError,
)
from tagconf.core.base.types import Entry, Locale
from tagconf.core.config.settings import (
    TagConfSettings,
    get_settings,
    set_settings,
    reset_settings,
    update_settings,
    load_settings_from_env,
)
from tagconf.core.converters import (
    ValueConverter,
    ValueConverterRegistry,
    get_global_registry,
    register_custom_converter,
    reset_global_registry,
)
from tagconf.core.stores import (
    ConfigurationStore,
    InMemoryStore,
    SystemPropertiesStore,
    PropertiesStore,
    EncryptedPropertiesStore,
    IniFileConfigurationStore,
    StructuredFileStore,
    ObjectConfigurationStore,
    configuration_source,
    encrypt_value,
)
from tagconf.core.provider import ConfigurationProvider
from tagconf.core.configuration import Configuration
from tagconf.core.resolver import (
    ConfigurationContextResolver,
    DefaultConfigurationContextResolver,
    StaticContextResolver,
)
from tagconf.core.log_manager import configure_logging
from tagconf.builder import ConfigurationBuilder

# Public API
__all__ = [
    "__version__",
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
    # Settings
    "TagConfSettings",
    "get_settings",
    "set_settings",
    "reset_settings",
    "update_settings",
    "load_settings_from_env",
    # Conversion
    "ValueConverter",
    "ValueConverterRegistry",
    "get_global_registry",
    "register_custom_converter",
    "reset_global_registry",
    # Stores
    "ConfigurationStore",
    "InMemoryStore",
    "SystemPropertiesStore",
    "PropertiesStore",
    "EncryptedPropertiesStore",
    "IniFileConfigurationStore",
    "StructuredFileStore",
    "ObjectConfigurationStore",
    "configuration_source",
    "encrypt_value",
    # Resolution and access
    "ConfigurationProvider",
    "Configuration",
    "ConfigurationContextResolver",
    "DefaultConfigurationContextResolver",
    "StaticContextResolver",
    "ConfigurationBuilder",
    "configure_logging",
]


def get_version():
    """Get the version string."""
    return __version__
