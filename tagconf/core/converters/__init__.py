"""
Value conversion from raw configuration strings to typed values.
"""

from .base import ValueConverter
from .builtin import (
    BooleanValueConverter,
    IntegerValueConverter,
    FloatValueConverter,
    StringValueConverter,
    LocaleValueConverter,
    EnumValueConverter,
)
from .registry import (
    ValueConverterRegistry,
    default_converters,
    get_global_registry,
    register_custom_converter,
    reset_global_registry,
)

__all__ = [
    "ValueConverter",
    "BooleanValueConverter",
    "IntegerValueConverter",
    "FloatValueConverter",
    "StringValueConverter",
    "LocaleValueConverter",
    "EnumValueConverter",
    "ValueConverterRegistry",
    "default_converters",
    "get_global_registry",
    "register_custom_converter",
    "reset_global_registry",
]
