"""
Configuration stores: ordered sources of tagged entries.
"""

from .base import ConfigurationStore, FileResourceStore, split_tagged_key
from .memory import InMemoryStore
from .system import SystemPropertiesStore
from .properties import PropertiesStore, parse_properties
from .encrypted import EncryptedPropertiesStore, encrypt_value
from .ini import IniFileConfigurationStore
from .structured import StructuredFileStore, flatten
from .objects import ObjectConfigurationStore, configuration_source

__all__ = [
    "ConfigurationStore",
    "FileResourceStore",
    "split_tagged_key",
    "InMemoryStore",
    "SystemPropertiesStore",
    "PropertiesStore",
    "parse_properties",
    "EncryptedPropertiesStore",
    "encrypt_value",
    "IniFileConfigurationStore",
    "StructuredFileStore",
    "flatten",
    "ObjectConfigurationStore",
    "configuration_source",
]
