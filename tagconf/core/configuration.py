"""
Typed access to merged configuration.

A Configuration is an immutable view over the tags and stores collected by
a ConfigurationProvider. Lookups resolve the raw string through the merge
engine and convert it with the converter registry.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

import numpy as np

from .base.exceptions import ConversionError, MissingPropertyError
from .base.types import Locale
from .converters.registry import ValueConverterRegistry, get_global_registry
from .provider import iter_matches, resolve_value
from .stores.base import ConfigurationStore

T = TypeVar('T')

_MISSING = object()


class Configuration:
    """Immutable, typed view of merged configuration.

    Parameters
    ----------
    tags : Iterable[str]
        Active tags, most specific first
    stores : Iterable[ConfigurationStore]
        Stores in priority order
    registry : ValueConverterRegistry, optional
        Registry to convert with. When omitted the process-wide registry is
        looked up on every conversion, so converters registered later are
        picked up.

    Examples
    --------
    >>> config = ConfigurationBuilder().create_system_properties_store().get_configuration()
    >>> config.evaluate_to_int("server.port", default=8080)
    8080
    """

    def __init__(self, tags: Iterable[str], stores: Iterable[ConfigurationStore],
                 registry: Optional[ValueConverterRegistry] = None):
        self._tags: Tuple[str, ...] = tuple(tags)
        self._stores: Tuple[ConfigurationStore, ...] = tuple(stores)
        self._registry = registry
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def tags(self) -> Tuple[str, ...]:
        return self._tags

    @property
    def stores(self) -> Tuple[ConfigurationStore, ...]:
        return self._stores

    @property
    def registry(self) -> ValueConverterRegistry:
        return self._registry if self._registry is not None else get_global_registry()

    # Raw resolution

    def resolve(self, key: str) -> str:
        """Winning raw string for ``key``.

        Raises
        ------
        MissingPropertyError
            If no store holds the key under an active tag or untagged
        """
        return resolve_value(key, self._tags, self._stores)

    def resolve_all(self, key: str) -> List[str]:
        """Every raw value for ``key`` in priority order; empty if none.

        A tag listed more than once contributes its values once, at its
        first position.
        """
        return list(iter_matches(key, self._tags, self._stores))

    def has_value(self, key: str) -> bool:
        return next(iter_matches(key, self._tags, self._stores), None) is not None

    def __contains__(self, key: str) -> bool:
        return self.has_value(key)

    def keys(self) -> List[str]:
        """Keys visible under the active tags, in first-seen order."""
        active = set(self._tags)
        keys: Dict[str, None] = {}
        for store in self._stores:
            for entry in store.entries():
                if entry.tag is None or entry.tag in active:
                    keys.setdefault(entry.key, None)
        return list(keys)

    def as_dict(self) -> Dict[str, str]:
        """Winning raw value of every visible key."""
        return {key: self.resolve(key) for key in self.keys()}

    # Typed evaluation

    def _convert(self, target_type: Type[T], key: str, raw: str) -> T:
        try:
            return self.registry.convert(target_type, raw)
        except ConversionError as e:
            self._logger.debug(f"Conversion of '{key}' to {getattr(target_type, '__name__', target_type)} failed")
            raise e.with_key(key)

    def evaluate_to(self, target_type: Type[T], key: str) -> T:
        """Resolve ``key`` and convert it to ``target_type``.

        Parameters
        ----------
        target_type : type
            Type with a registered converter, or an enum
        key : str
            Configuration key

        Returns
        -------
        T
            Converted value

        Raises
        ------
        MissingPropertyError
            If the key is not found
        ConversionError
            If the raw value is not valid for ``target_type``
        UnsupportedTypeError
            If no converter exists for ``target_type``
        """
        return self._convert(target_type, key, self.resolve(key))

    def evaluate_to_with_default(self, target_type: Type[T], key: str, default: Any) -> T:
        """Like ``evaluate_to`` but return ``default`` when the key is absent.

        Conversion failures still propagate.
        """
        try:
            raw = self.resolve(key)
        except MissingPropertyError:
            return default
        return self._convert(target_type, key, raw)

    def evaluate_all(self, target_type: Type[T], key: str) -> List[T]:
        """Convert every value of ``key`` in priority order; empty if none."""
        return [self._convert(target_type, key, raw) for raw in self.resolve_all(key)]

    def _evaluate(self, target_type: type, key: str, default: Any) -> Any:
        if default is _MISSING:
            return self.evaluate_to(target_type, key)
        return self.evaluate_to_with_default(target_type, key, default)

    def _evaluate_native(self, target_type: type, native: type, key: str, default: Any) -> Any:
        value = self._evaluate(target_type, key, default)
        if default is not _MISSING and value is default:
            return value
        return native(value)

    def evaluate_to_boolean(self, key: str, default: Any = _MISSING) -> bool:
        return self._evaluate(bool, key, default)

    def evaluate_to_byte(self, key: str, default: Any = _MISSING) -> int:
        """Integer in the 8-bit signed range."""
        return self._evaluate_native(np.int8, int, key, default)

    def evaluate_to_short(self, key: str, default: Any = _MISSING) -> int:
        """Integer in the 16-bit signed range."""
        return self._evaluate_native(np.int16, int, key, default)

    def evaluate_to_int(self, key: str, default: Any = _MISSING) -> int:
        """Integer in the 32-bit signed range."""
        return self._evaluate_native(np.int32, int, key, default)

    def evaluate_to_long(self, key: str, default: Any = _MISSING) -> int:
        """Integer in the 64-bit signed range."""
        return self._evaluate_native(np.int64, int, key, default)

    def evaluate_to_float(self, key: str, default: Any = _MISSING) -> float:
        """Number rounded to single precision."""
        return self._evaluate_native(np.float32, float, key, default)

    def evaluate_to_double(self, key: str, default: Any = _MISSING) -> float:
        return self._evaluate_native(np.float64, float, key, default)

    def evaluate_to_string(self, key: str, default: Any = _MISSING) -> str:
        return self._evaluate(str, key, default)

    def evaluate_to_locale(self, key: str, default: Any = _MISSING) -> Locale:
        return self._evaluate(Locale, key, default)

    def __repr__(self) -> str:
        return f"Configuration(tags={list(self._tags)}, stores={[store.name for store in self._stores]})"
