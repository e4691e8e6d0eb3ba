"""
Base classes for configuration stores.

A store is an ordered source of entries. Stores differ only in how they
populate that sequence, so the merge engine never special-cases a store
kind. Population happens at most once per store instance.
"""

import threading
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..base.exceptions import ConfigurationError, StoreInitializationError
from ..base.types import Entry
from ..config.settings import get_settings


def split_tagged_key(key: str, tag_prefix: Optional[str] = None) -> Tuple[Optional[str], str]:
    """Split ``@tag.key`` into ``(tag, key)``.

    Keys without the tag prefix, or with a prefix but no dot, are untagged.

    Examples
    --------
    >>> split_tagged_key("@production.db.url")
    ('production', 'db.url')
    >>> split_tagged_key("db.url")
    (None, 'db.url')
    """
    prefix = tag_prefix if tag_prefix is not None else get_settings().tag_prefix
    if key.startswith(prefix):
        tag, sep, rest = key[len(prefix):].partition('.')
        if sep and tag and rest:
            return tag, rest
    return None, key


class ConfigurationStore(ABC):
    """Abstract source of configuration entries.

    Subclasses implement ``_load_entries``. The first call to ``load`` or
    ``entries`` runs it under a lock; later calls reuse the result. A failed
    load is not cached, so the same failure is reported on every attempt.
    """

    def __init__(self):
        self._entries: Optional[Tuple[Entry, ...]] = None
        self._load_lock = threading.Lock()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def _load_entries(self) -> Iterable[Entry]:
        """Produce the store's entries in order.

        Raises
        ------
        Exception
            Any failure; ``load`` reports it as StoreInitializationError
        """
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    def load(self) -> None:
        """Populate entries if that has not happened yet.

        Raises
        ------
        StoreInitializationError
            If the underlying source cannot be read or parsed
        """
        if self._entries is not None:
            return

        with self._load_lock:
            if self._entries is not None:
                return

            try:
                entries = tuple(self._load_entries())
            except StoreInitializationError:
                raise
            except Exception as e:
                config_file = e.config_file if isinstance(e, ConfigurationError) else None
                raise StoreInitializationError(
                    f"Failed to initialize {self.name}: {getattr(e, 'message', e)}",
                    store=self.name, config_file=config_file, cause=e,
                ) from e

            self._entries = entries
            self._logger.debug(f"Loaded {len(entries)} entries")

    def _ensure_not_loaded(self, what: str = "entries") -> None:
        if self.is_loaded:
            raise ConfigurationError(f"Cannot add {what} to {self.name} after it has been loaded")

    def entries(self) -> Tuple[Entry, ...]:
        """All entries of this store, loading them on first access."""
        self.load()
        return self._entries

    def __repr__(self) -> str:
        state = f"{len(self._entries)} entries" if self._entries is not None else "not loaded"
        return f"{self.name}({state})"


class FileResourceStore(ConfigurationStore):
    """Store reading its entries from a list of file resources.

    Resources are read in the order they were added. A resource added with
    ``optional=True`` is skipped when the file does not exist; any other
    missing resource fails the load.
    """

    def __init__(self, encoding: Optional[str] = None):
        super().__init__()
        self.encoding = encoding or get_settings().file_encoding
        self._resources: List[Tuple[Path, bool]] = []

    def add_resource(self, path: Union[str, Path], optional: bool = False) -> "FileResourceStore":
        """Add a file to read.

        Parameters
        ----------
        path : str or Path
            File path
        optional : bool
            Skip the resource if the file does not exist

        Returns
        -------
        FileResourceStore
            Self for method chaining
        """
        self._ensure_not_loaded("resources")
        self._resources.append((Path(path), optional))
        return self

    @property
    def resources(self) -> List[Path]:
        return [path for path, _ in self._resources]

    def _load_entries(self) -> Iterable[Entry]:
        for path, optional in self._resources:
            if optional and not path.exists():
                self._logger.debug(f"Skipping missing optional resource {path}")
                continue
            yield from self._read_resource(path)

    @abstractmethod
    def _read_resource(self, path: Path) -> Iterable[Entry]:
        """Read the entries of one resource."""
        pass
