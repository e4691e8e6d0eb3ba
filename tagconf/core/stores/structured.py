"""
Store for structured YAML, JSON and TOML files.

Nested mappings flatten to dotted keys. Top-level keys starting with the tag
prefix hold tagged sections::

    db:
      url: localhost
    "@production":
      db:
        url: prod-db

gives ``db.url`` untagged and ``db.url`` tagged ``production``.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from ..base.exceptions import ConfigurationError
from ..base.types import Entry
from ..config.loader import get_config_loader
from ..config.settings import get_settings
from .base import FileResourceStore


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ','.join(_render(item) for item in value)
    return str(value)


def flatten(data: Dict[str, Any], prefix: str = '') -> Iterator[Tuple[str, str]]:
    """Flatten nested mappings into ``(dotted.key, raw string)`` pairs.

    Booleans render as ``true``/``false`` and lists as comma-joined values;
    ``None`` values are skipped.
    """
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            yield from flatten(value, prefix=f"{full_key}.")
        elif value is not None:
            yield full_key, _render(value)


class StructuredFileStore(FileResourceStore):
    """Configuration store backed by YAML, JSON or TOML files.

    The format of each resource is chosen from its file extension.
    """

    def _read_resource(self, path: Path) -> Iterable[Entry]:
        loader = get_config_loader(path, encoding=self.encoding)
        data = loader.load(path)
        tag_prefix = get_settings().tag_prefix

        entries: List[Entry] = []
        tagged: List[Entry] = []
        for key, value in data.items():
            if isinstance(key, str) and key.startswith(tag_prefix) and len(key) > len(tag_prefix):
                if not isinstance(value, dict):
                    raise ConfigurationError(
                        f"Tagged section '{key}' in {path} must be a mapping",
                        config_file=str(path), parameter=key,
                    )
                tag = key[len(tag_prefix):]
                tagged.extend(Entry(k, v, tag) for k, v in flatten(value))
            elif isinstance(value, dict):
                entries.extend(Entry(k, v) for k, v in flatten(value, prefix=f"{key}."))
            elif value is not None:
                entries.append(Entry(str(key), _render(value)))

        self._logger.debug(f"Read {len(entries) + len(tagged)} entries from {loader.format_name} file {path}")
        return entries + tagged
