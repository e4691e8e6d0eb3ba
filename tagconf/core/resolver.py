"""
Resolvers for the initial list of active tags.

The merge engine never reads the environment itself; a resolver is asked
once, when a configuration is being built, for the ordered tag list.
"""

import os
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Mapping, Optional

from .config.settings import get_settings


class ConfigurationContextResolver(ABC):
    """Source of the active tags, most specific first."""

    @abstractmethod
    def get_tags(self) -> List[str]:
        pass


class StaticContextResolver(ConfigurationContextResolver):
    """Resolver returning a fixed tag list."""

    def __init__(self, tags: Iterable[str] = ()):
        self._tags = list(tags)

    def get_tags(self) -> List[str]:
        return list(self._tags)


class DefaultConfigurationContextResolver(ConfigurationContextResolver):
    """Reads comma-separated tags from an environment variable.

    Parameters
    ----------
    variable : str, optional
        Variable name; defaults to ``TagConfSettings.tags_variable``
    environ : Mapping[str, str], optional
        Mapping to read instead of ``os.environ``
    """

    def __init__(self, variable: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        settings = get_settings()
        self.variable = variable or settings.tags_variable
        self.separator = settings.tag_separator
        self._environ = environ
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_tags(self) -> List[str]:
        environ = os.environ if self._environ is None else self._environ
        raw = environ.get(self.variable, '')
        tags = [tag.strip() for tag in raw.split(self.separator) if tag.strip()]
        if tags:
            self._logger.debug(f"Active tags from {self.variable}: {tags}")
        return tags
