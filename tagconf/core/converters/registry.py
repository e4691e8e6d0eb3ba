"""
Registry mapping target types to value converters.

The registry is keyed by exact type. A configuration keeps a reference to
the registry it converts with, which is the process-wide instance unless a
private one is passed in, so converters registered globally are visible to
configurations that were built before the registration.
"""

import threading
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Type

import numpy as np

from ..base.exceptions import ConversionError, UnsupportedTypeError
from ..base.types import Locale
from .base import ValueConverter
from .builtin import (
    BooleanValueConverter,
    IntegerValueConverter,
    FloatValueConverter,
    StringValueConverter,
    LocaleValueConverter,
    EnumValueConverter,
)


def default_converters() -> Dict[type, ValueConverter]:
    """Fresh instances of the built-in converters keyed by target type."""
    return {
        bool: BooleanValueConverter(),
        np.int8: IntegerValueConverter(np.int8),
        np.int16: IntegerValueConverter(np.int16),
        np.int32: IntegerValueConverter(np.int32),
        np.int64: IntegerValueConverter(np.int64),
        int: IntegerValueConverter(),
        np.float32: FloatValueConverter(np.float32),
        np.float64: FloatValueConverter(np.float64),
        float: FloatValueConverter(np.float64, native=True),
        str: StringValueConverter(),
        Locale: LocaleValueConverter(),
    }


def _is_enum_type(target_type: Any) -> bool:
    return isinstance(target_type, type) and issubclass(target_type, Enum)


class ValueConverterRegistry:
    """Thread-safe mapping from target type to converter.

    Resolution order is exact type match, then a derived converter for
    unregistered enum types, then failure. Supertypes are never consulted,
    so ``bool`` and ``IntEnum`` subclasses never fall through to ``int``.

    Parameters
    ----------
    include_defaults : bool
        Whether to start with the built-in converters registered
    """

    def __init__(self, include_defaults: bool = True):
        self._converters: Dict[type, ValueConverter] = default_converters() if include_defaults else {}
        self._lock = threading.RLock()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def register(self, target_type: type, converter: ValueConverter) -> None:
        """Register or replace the converter for a type.

        Parameters
        ----------
        target_type : type
            Exact type the converter produces
        converter : ValueConverter
            Converter instance
        """
        if not isinstance(converter, ValueConverter):
            raise TypeError(f"converter must be a ValueConverter, got {type(converter).__name__}")

        with self._lock:
            replaced = target_type in self._converters
            self._converters[target_type] = converter

        action = "Replaced" if replaced else "Registered"
        self._logger.debug(f"{action} converter for {getattr(target_type, '__name__', target_type)}: {converter!r}")

    def unregister(self, target_type: type) -> None:
        """Remove the converter for a type if one is registered."""
        with self._lock:
            removed = self._converters.pop(target_type, None)
        if removed is not None:
            self._logger.debug(f"Unregistered converter for {getattr(target_type, '__name__', target_type)}")

    def is_registered(self, target_type: type) -> bool:
        with self._lock:
            return target_type in self._converters

    def registered_types(self) -> List[type]:
        with self._lock:
            return list(self._converters)

    def resolve(self, target_type: type) -> ValueConverter:
        """Find the converter for a type.

        Parameters
        ----------
        target_type : type
            Requested target type

        Returns
        -------
        ValueConverter
            Registered converter, or a derived enum converter

        Raises
        ------
        UnsupportedTypeError
            If nothing is registered and the type is not an enum
        """
        with self._lock:
            converter = self._converters.get(target_type)

        if converter is not None:
            return converter

        if _is_enum_type(target_type):
            return EnumValueConverter(target_type)

        name = getattr(target_type, '__name__', repr(target_type))
        raise UnsupportedTypeError(
            f"No converter registered for {name}",
            target_type=target_type,
        )

    def convert(self, target_type: Type[Any], value: str) -> Any:
        """Convert a raw string with the converter for ``target_type``.

        Exceptions other than ConversionError raised by a custom converter
        are wrapped in ConversionError.
        """
        converter = self.resolve(target_type)
        try:
            return converter.from_string(value)
        except ConversionError:
            raise
        except (ValueError, TypeError, ArithmeticError, LookupError) as e:
            raise ConversionError(
                f"{converter.name} failed to convert value",
                value=value, target_type=target_type, cause=e,
            ) from e

    def serialize(self, value: Any, target_type: Optional[type] = None) -> str:
        """Render a typed value to its raw string form.

        Parameters
        ----------
        value : Any
            Value to render
        target_type : type, optional
            Converter to use; defaults to the exact type of ``value``
        """
        converter = self.resolve(target_type if target_type is not None else type(value))
        return converter.to_string(value)

    def reset(self) -> None:
        """Drop custom converters and restore the built-ins."""
        with self._lock:
            self._converters = default_converters()
        self._logger.debug("Converter registry reset to built-in converters")

    def __contains__(self, target_type: type) -> bool:
        return self.is_registered(target_type)

    def __len__(self) -> int:
        with self._lock:
            return len(self._converters)


# Global converter registry instance
_global_registry = ValueConverterRegistry()


def get_global_registry() -> ValueConverterRegistry:
    """Get the process-wide converter registry.

    Returns
    -------
    ValueConverterRegistry
        Global registry instance
    """
    return _global_registry


def register_custom_converter(target_type: type, converter: ValueConverter) -> None:
    """Register a converter on the process-wide registry.

    The registration is visible to every configuration that converts
    through the global registry, including ones already built.
    """
    _global_registry.register(target_type, converter)


def reset_global_registry() -> None:
    """Restore the process-wide registry to the built-in converters."""
    _global_registry.reset()
