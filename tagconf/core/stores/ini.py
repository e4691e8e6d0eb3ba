"""
Store for INI files.

Each section name is a tag, except the default section (``[default]``
unless configured otherwise), whose keys are untagged.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from ..base.types import Entry
from ..config.loader import INIConfigLoader
from ..config.settings import get_settings
from .base import FileResourceStore


class IniFileConfigurationStore(FileResourceStore):
    """Configuration store backed by INI files.

    Examples
    --------
    An INI file such as::

        [default]
        db.url = localhost

        [production]
        db.url = prod-db

    yields ``db.url`` untagged and ``db.url`` tagged ``production``.
    """

    def __init__(self, default_section: Optional[str] = None, encoding: Optional[str] = None):
        super().__init__(encoding=encoding)
        self.default_section = default_section or get_settings().default_section
        self._loader = INIConfigLoader(encoding=self.encoding)

    def _read_resource(self, path: Path) -> Iterable[Entry]:
        sections = self._loader.load(path)

        entries: List[Entry] = []
        for section_name, values in sections.items():
            tag = None if section_name == self.default_section else section_name
            entries.extend(Entry(key, value, tag) for key, value in values.items())

        self._logger.debug(f"Read {len(entries)} entries from {len(sections)} sections in {path}")
        return entries
