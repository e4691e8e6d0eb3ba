"""
Configuration provider: the tag-ordered merge engine.

Resolution for a key scans tags in order (most specific first) and, for
each tag, stores in registration order; the first entry carrying both the
key and the tag wins. If no tagged entry matches, the first untagged entry
across stores wins. Tag specificity therefore dominates store order, and
store order decides among equally specific entries.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from .base.exceptions import MissingPropertyError
from .converters.registry import ValueConverterRegistry, get_global_registry
from .stores.base import ConfigurationStore


def iter_matches(key: str, tags: Sequence[str], stores: Sequence[ConfigurationStore]) -> Iterator[str]:
    """Yield every value for ``key`` in priority order.

    Tagged matches come first, by tag order and then store order; untagged
    matches follow in store order. A tag listed twice is scanned only at
    its first position, so its entries are yielded once.
    """
    seen = set()
    for tag in tags:
        if tag in seen:
            continue
        seen.add(tag)
        for store in stores:
            for entry in store.entries():
                if entry.key == key and entry.tag == tag:
                    yield entry.value

    for store in stores:
        for entry in store.entries():
            if entry.key == key and entry.tag is None:
                yield entry.value


def resolve_value(key: str, tags: Sequence[str], stores: Sequence[ConfigurationStore]) -> str:
    """The winning raw value for ``key``.

    Raises
    ------
    MissingPropertyError
        If no store holds the key under an active tag or untagged
    """
    for value in iter_matches(key, tags, stores):
        return value
    raise MissingPropertyError(f"Property '{key}' not found", key=key, tags=tags)


class ConfigurationProvider:
    """Mutable holder of active tags and stores.

    Tags and stores are collected while a configuration is assembled;
    ``get_configuration`` freezes them into an immutable Configuration.

    Parameters
    ----------
    registry : ValueConverterRegistry, optional
        Registry the built configuration converts with; defaults to the
        process-wide registry
    """

    def __init__(self, registry: Optional[ValueConverterRegistry] = None):
        self._tags: List[str] = []
        self._stores: List[ConfigurationStore] = []
        self._registry = registry
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    @property
    def stores(self) -> List[ConfigurationStore]:
        return list(self._stores)

    @property
    def registry(self) -> ValueConverterRegistry:
        return self._registry if self._registry is not None else get_global_registry()

    def add_tag(self, tag: str) -> None:
        """Append a tag; later tags are less specific."""
        if not isinstance(tag, str) or not tag:
            raise ValueError(f"tag must be a non-empty string, got {tag!r}")
        self._tags.append(tag)
        self._logger.debug(f"Added tag: {tag}")

    def add_store(self, store: ConfigurationStore) -> None:
        """Append a store; later stores lose ties."""
        if not isinstance(store, ConfigurationStore):
            raise TypeError(f"store must be a ConfigurationStore, got {type(store).__name__}")
        self._stores.append(store)
        self._logger.debug(f"Added store: {store.name}")

    def resolve(self, key: str) -> str:
        """Winning raw value for ``key`` under the current tags.

        Raises
        ------
        MissingPropertyError
            If the key is not found
        """
        return resolve_value(key, self._tags, self._stores)

    def resolve_all(self, key: str) -> List[str]:
        """Every value for ``key`` in priority order; empty if none.

        A tag added more than once contributes its values once, at its
        first position.
        """
        return list(iter_matches(key, self._tags, self._stores))

    def has_value(self, key: str) -> bool:
        return next(iter_matches(key, self._tags, self._stores), None) is not None

    def get_configuration(self) -> "Configuration":
        """Load every store and freeze tags and stores into a Configuration.

        Raises
        ------
        StoreInitializationError
            If any store fails to populate
        """
        from .configuration import Configuration

        for store in self._stores:
            store.load()

        configuration = Configuration(self._tags, self._stores, registry=self._registry)
        self._logger.info(
            f"Built configuration with tags {self._tags} and {len(self._stores)} stores"
        )
        return configuration
