"""
Library-level settings for TagConf.

These settings govern how TagConf itself behaves: which environment variable
carries the active tags, how tagged keys and sections are spelled in source
files, how encrypted values are marked, and how the library logs. They use a
dataclass with validation and environment variable overrides.
"""

import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
from pathlib import Path
import logging

from ..base.exceptions import ConfigurationError


# Global settings instance
_global_settings: Optional["TagConfSettings"] = None

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class TagConfSettings:
    """Settings that shape store parsing, tag resolution and logging."""

    # Tag resolution
    tags_variable: str = "TAGCONF_TAGS"
    tag_separator: str = ","

    # Source file conventions
    tag_prefix: str = "@"
    default_section: str = "default"
    encrypted_prefix: str = "ENC("
    encrypted_suffix: str = ")"
    file_encoding: str = "utf-8"

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    log_format: str = "standard"

    def __post_init__(self):
        """Post-initialization validation and setup."""
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        self.validate()

    def validate(self) -> None:
        """Validate settings.

        Raises
        ------
        ConfigurationError
            If any setting is invalid
        """
        errors = []

        if not self.tags_variable:
            errors.append("tags_variable must not be empty")
        if not self.tag_separator:
            errors.append("tag_separator must not be empty")
        if not self.tag_prefix:
            errors.append("tag_prefix must not be empty")
        if not self.default_section:
            errors.append("default_section must not be empty")
        if not self.encrypted_prefix or not self.encrypted_suffix:
            errors.append("encrypted_prefix and encrypted_suffix must not be empty")
        if self.log_level.upper() not in _LOG_LEVELS:
            errors.append(f"log_level must be one of {list(_LOG_LEVELS)}")
        if self.log_format not in ('standard', 'detailed', 'json'):
            errors.append("log_format must be 'standard', 'detailed' or 'json'")

        if errors:
            raise ConfigurationError(f"Invalid TagConf settings: {'; '.join(errors)}")

    def update(self, **kwargs) -> None:
        """Update settings in place and re-validate.

        Raises
        ------
        ConfigurationError
            If an unknown setting is given or the result is invalid
        """
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise ConfigurationError(f"Unknown setting: {key}", parameter=key)
            setattr(self, key, value)

        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        self.validate()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data['log_file'] is not None:
            data['log_file'] = str(data['log_file'])
        return data


def get_settings() -> TagConfSettings:
    """Get the global settings instance.

    Returns
    -------
    TagConfSettings
        Global settings instance
    """
    global _global_settings
    if _global_settings is None:
        _global_settings = TagConfSettings()
    return _global_settings


def set_settings(settings: TagConfSettings) -> None:
    """Set the global settings instance.

    Raises
    ------
    TypeError
        If settings is not a TagConfSettings instance
    """
    global _global_settings
    if not isinstance(settings, TagConfSettings):
        raise TypeError("settings must be a TagConfSettings instance")
    settings.validate()
    _global_settings = settings


def reset_settings() -> None:
    """Reset settings to defaults."""
    global _global_settings
    _global_settings = TagConfSettings()


def update_settings(**kwargs) -> None:
    """Update global settings in place."""
    get_settings().update(**kwargs)


def load_settings_from_env(environ: Optional[Dict[str, str]] = None) -> TagConfSettings:
    """Load settings from environment variables.

    Parameters
    ----------
    environ : dict, optional
        Mapping to read instead of ``os.environ``

    Returns
    -------
    TagConfSettings
        Settings with environment overrides applied
    """
    environ = os.environ if environ is None else environ
    settings = TagConfSettings()

    env_mapping = {
        'TAGCONF_TAGS_VARIABLE': 'tags_variable',
        'TAGCONF_TAG_SEPARATOR': 'tag_separator',
        'TAGCONF_DEFAULT_SECTION': 'default_section',
        'TAGCONF_FILE_ENCODING': 'file_encoding',
        'TAGCONF_LOG_LEVEL': 'log_level',
        'TAGCONF_LOG_FILE': 'log_file',
        'TAGCONF_LOG_FORMAT': 'log_format',
    }

    updates = {}
    for env_var, attr_name in env_mapping.items():
        if env_var in environ:
            value = environ[env_var]
            if attr_name == 'log_file':
                updates[attr_name] = Path(value) if value else None
            elif attr_name == 'log_level':
                updates[attr_name] = value.upper()
            else:
                updates[attr_name] = value

    if updates:
        settings.update(**updates)
        logging.getLogger(__name__).info(f"Updated settings from environment variables: {list(updates.keys())}")

    return settings
