"""
In-memory configuration store.
"""

from typing import Iterable, List, Mapping, Optional

from ..base.types import Entry
from .base import ConfigurationStore


class InMemoryStore(ConfigurationStore):
    """Store holding entries given directly in code.

    Parameters
    ----------
    values : Mapping[str, str], optional
        Initial key/value pairs
    tag : str, optional
        Tag applied to ``values``

    Examples
    --------
    >>> store = InMemoryStore({"db.url": "localhost"})
    >>> store.add("db.url", "prod-db", tag="production")
    InMemoryStore(not loaded)
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None, tag: Optional[str] = None):
        super().__init__()
        self._pending: List[Entry] = []
        if values:
            self.add_all(values, tag=tag)

    def add(self, key: str, value: str, tag: Optional[str] = None) -> "InMemoryStore":
        self._ensure_not_loaded()
        self._pending.append(Entry(key, str(value), tag))
        return self

    def add_all(self, values: Mapping[str, str], tag: Optional[str] = None) -> "InMemoryStore":
        for key, value in values.items():
            self.add(key, value, tag=tag)
        return self

    def add_entries(self, entries: Iterable[Entry]) -> "InMemoryStore":
        self._ensure_not_loaded()
        self._pending.extend(entries)
        return self

    def _load_entries(self) -> Iterable[Entry]:
        return list(self._pending)
