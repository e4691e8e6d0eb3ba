"""
Store exposing process-level properties.

The process environment plays the role of system properties: a snapshot of
``os.environ`` is taken when the store loads.
"""

import os
from typing import Iterable, Mapping, Optional

from ..base.types import Entry
from .base import ConfigurationStore, split_tagged_key


class SystemPropertiesStore(ConfigurationStore):
    """Configuration store backed by environment variables.

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Mapping to read instead of ``os.environ``
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        super().__init__()
        self._environ = environ

    def _load_entries(self) -> Iterable[Entry]:
        environ = os.environ if self._environ is None else self._environ
        entries = []
        for key, value in dict(environ).items():
            tag, key = split_tagged_key(key)
            entries.append(Entry(key, value, tag))
        return entries
