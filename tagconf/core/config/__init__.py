"""
Library settings and configuration file loaders.

Settings carry the conventions TagConf uses when reading sources (tag
prefixes, default INI section, encrypted value markers) plus its logging
defaults. Loaders read JSON, YAML, TOML and INI files into raw mappings.
"""

from .settings import (
    TagConfSettings,
    get_settings,
    set_settings,
    reset_settings,
    update_settings,
    load_settings_from_env,
)
from .loader import (
    ConfigLoader,
    JSONConfigLoader,
    YAMLConfigLoader,
    TOMLConfigLoader,
    INIConfigLoader,
    get_config_loader,
    supported_extensions,
)

__all__ = [
    # Settings
    "TagConfSettings",
    "get_settings",
    "set_settings",
    "reset_settings",
    "update_settings",
    "load_settings_from_env",
    # Loader classes
    "ConfigLoader",
    "JSONConfigLoader",
    "YAMLConfigLoader",
    "TOMLConfigLoader",
    "INIConfigLoader",
    "get_config_loader",
    "supported_extensions",
]
