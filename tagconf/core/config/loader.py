"""
Configuration file loaders for different file formats.

This module provides loaders for YAML, JSON, TOML, and INI files. Loaders
only read: they hand the raw mapping to a configuration store, which turns
it into tagged entries.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Type, Union, List
import configparser
import json
import logging

import toml
import yaml

from ..base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigLoader(ABC):
    """Abstract base class for configuration loaders.

    This class defines the interface that all configuration loaders must implement,
    ensuring consistent behavior across different file formats.
    """

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    @abstractmethod
    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from file.

        Parameters
        ----------
        path : str or Path
            Path to configuration file

        Returns
        -------
        dict
            Configuration data

        Raises
        ------
        ConfigurationError
            If loading fails
        """
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> List[str]:
        """List of supported file extensions, including the dot."""
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable format name."""
        pass

    def _read_text(self, path: Path) -> str:
        try:
            with open(path, 'r', encoding=self.encoding) as f:
                return f.read()
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {path}", config_file=str(path))
        except PermissionError:
            raise ConfigurationError(f"Permission denied reading {path}", config_file=str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read {self.format_name} config from {path}: {e}",
                                     config_file=str(path), cause=e) from e

    def _require_mapping(self, data: Any, path: Path) -> Dict[str, Any]:
        # Handle empty files
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self.format_name} file must contain a mapping, got {type(data).__name__}",
                config_file=str(path),
            )
        return data


class JSONConfigLoader(ConfigLoader):
    """JSON configuration loader."""

    @property
    def supported_extensions(self) -> List[str]:
        return ['.json']

    @property
    def format_name(self) -> str:
        return "JSON"

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(path)
        text = self._read_text(path)

        try:
            data = json.loads(text) if text.strip() else None
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}", config_file=str(path), cause=e) from e

        logger.debug(f"Successfully loaded JSON config from {path}")
        return self._require_mapping(data, path)


class YAMLConfigLoader(ConfigLoader):
    """YAML configuration loader, using ``yaml.safe_load``."""

    @property
    def supported_extensions(self) -> List[str]:
        return ['.yaml', '.yml']

    @property
    def format_name(self) -> str:
        return "YAML"

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(path)
        text = self._read_text(path)

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}", config_file=str(path), cause=e) from e

        logger.debug(f"Successfully loaded YAML config from {path}")
        return self._require_mapping(data, path)


class TOMLConfigLoader(ConfigLoader):
    """TOML configuration loader."""

    @property
    def supported_extensions(self) -> List[str]:
        return ['.toml']

    @property
    def format_name(self) -> str:
        return "TOML"

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(path)
        text = self._read_text(path)

        try:
            data = toml.loads(text)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}", config_file=str(path), cause=e) from e

        logger.debug(f"Successfully loaded TOML config from {path}")
        return self._require_mapping(data, path)


class INIConfigLoader(ConfigLoader):
    """INI configuration loader.

    Returns ``{section: {key: raw string}}``. Key case is preserved and
    interpolation is disabled, so values reach the converters untouched.
    No section is merged into the others: ``[DEFAULT]`` is read like any
    other section.
    """

    _NO_DEFAULT_SECTION = '\x00'

    @property
    def supported_extensions(self) -> List[str]:
        return ['.ini', '.cfg']

    @property
    def format_name(self) -> str:
        return "INI"

    def load(self, path: Union[str, Path]) -> Dict[str, Dict[str, str]]:
        path = Path(path)
        text = self._read_text(path)

        parser = configparser.ConfigParser(interpolation=None, default_section=self._NO_DEFAULT_SECTION)
        parser.optionxform = str

        try:
            parser.read_string(text, source=str(path))
        except configparser.Error as e:
            raise ConfigurationError(f"Invalid INI format in {path}: {e}", config_file=str(path), cause=e) from e

        result = {
            section_name: dict(parser.items(section_name))
            for section_name in parser.sections()
        }

        logger.debug(f"Successfully loaded INI config from {path}")
        return result


_LOADERS: Dict[str, Type[ConfigLoader]] = {
    '.json': JSONConfigLoader,
    '.yaml': YAMLConfigLoader,
    '.yml': YAMLConfigLoader,
    '.toml': TOMLConfigLoader,
    '.ini': INIConfigLoader,
    '.cfg': INIConfigLoader,
}


def get_config_loader(file_path: Union[str, Path], encoding: str = 'utf-8') -> ConfigLoader:
    """Get appropriate config loader for file extension.

    Parameters
    ----------
    file_path : str or Path
        Path to configuration file
    encoding : str
        Text encoding the loader reads with

    Returns
    -------
    ConfigLoader
        Appropriate loader for the file format

    Raises
    ------
    ConfigurationError
        If file format is not supported
    """
    suffix = Path(file_path).suffix.lower()

    if suffix not in _LOADERS:
        available = sorted(_LOADERS)
        raise ConfigurationError(
            f"Unsupported configuration file format: {suffix}. Available: {available}",
            config_file=str(file_path),
        )

    return _LOADERS[suffix](encoding=encoding)


def supported_extensions() -> List[str]:
    """All file extensions a loader exists for."""
    return sorted(_LOADERS)
