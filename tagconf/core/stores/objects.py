"""
Store reading configuration from plain Python objects.

Public, non-callable attributes become entries. A class decorated with
``configuration_source`` contributes its attributes under a base path and,
optionally, a tag.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

from ..base.exceptions import UnsupportedTypeError
from ..base.types import Entry
from ..converters.registry import ValueConverterRegistry, get_global_registry
from .base import ConfigurationStore

C = TypeVar('C', bound=type)

_SOURCE_ATTRIBUTE = '__tagconf_source__'


def configuration_source(base_path: str = '', tag: Optional[str] = None) -> Callable[[C], C]:
    """Class decorator marking where an object's attributes live.

    Parameters
    ----------
    base_path : str
        Prefix joined to every attribute name with a dot
    tag : str, optional
        Tag for every entry the object contributes

    Examples
    --------
    >>> @configuration_source(base_path="db", tag="production")
    ... class ProductionDatabase:
    ...     url = "prod-db"
    """
    def decorator(cls: C) -> C:
        setattr(cls, _SOURCE_ATTRIBUTE, (base_path, tag))
        return cls
    return decorator


def _source_of(obj: Any) -> Tuple[str, Optional[str]]:
    return getattr(type(obj), _SOURCE_ATTRIBUTE, None) or getattr(obj, _SOURCE_ATTRIBUTE, ('', None))


class ObjectConfigurationStore(ConfigurationStore):
    """Configuration store backed by in-memory objects.

    Values are rendered with the converter registry when it has a converter
    for the value's type, and with ``str()`` otherwise. ``None`` values are
    skipped.

    Parameters
    ----------
    registry : ValueConverterRegistry, optional
        Registry used to render values; defaults to the global registry
    """

    def __init__(self, registry: Optional[ValueConverterRegistry] = None):
        super().__init__()
        self._registry = registry
        self._objects: List[Any] = []

    def add_object(self, obj: Any) -> "ObjectConfigurationStore":
        """Add an object whose attributes become entries.

        Returns
        -------
        ObjectConfigurationStore
            Self for method chaining
        """
        self._ensure_not_loaded("objects")
        self._objects.append(obj)
        return self

    def _render(self, value: Any) -> str:
        registry = self._registry if self._registry is not None else get_global_registry()
        try:
            return registry.serialize(value)
        except UnsupportedTypeError:
            return str(value)

    def _load_entries(self) -> Iterable[Entry]:
        entries = []
        for obj in self._objects:
            base_path, tag = _source_of(obj)
            for name in sorted(dir(obj)):
                if name.startswith('_'):
                    continue
                value = getattr(obj, name)
                if value is None or callable(value):
                    continue
                key = f"{base_path}.{name}" if base_path else name
                entries.append(Entry(key, self._render(value), tag))
        return entries
