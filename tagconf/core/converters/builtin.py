"""
Built-in value converters.

One converter per supported target type. Fixed-width integer and floating
point types are keyed by their numpy scalar types so that byte, short, int
and long keep their two's complement ranges, and single precision floats
round the way IEEE-754 binary32 does.
"""

import locale as _locale
import re
from enum import Enum
from typing import Optional, Type, Union

import numpy as np

from ..base.exceptions import ConversionError
from ..base.types import Locale
from .base import ValueConverter, describe


_INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
_FLOAT_PATTERN = re.compile(
    r'(?P<special>[+-]?(?:NaN|Infinity))'
    r'|(?P<number>[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)[fFdD]?'
)
_LOCALE_PATTERN = re.compile(r'(?P<language>[A-Za-z]{2,3})(?:_(?P<country>[A-Za-z]{2}))?')


class BooleanValueConverter(ValueConverter[bool]):
    """Case-insensitive ``true``/``false`` literals, nothing else."""

    def from_string(self, value: str) -> bool:
        literal = value.lower() if isinstance(value, str) else None
        if literal == 'true':
            return True
        if literal == 'false':
            return False
        raise ConversionError(
            f"Cannot convert {describe(value)} to boolean, expected 'true' or 'false'",
            value=value, target_type=bool,
        )

    def to_string(self, value: bool) -> str:
        return 'true' if value else 'false'


class IntegerValueConverter(ValueConverter[int]):
    """Locale-independent base-10 integer parsing.

    Parameters
    ----------
    dtype : numpy integer type, optional
        Fixed width to range-check against and to return. ``None`` parses
        unbounded Python integers.
    """

    def __init__(self, dtype: Optional[Type[np.integer]] = None):
        self.dtype = dtype
        if dtype is not None:
            info = np.iinfo(dtype)
            self.min_value, self.max_value = int(info.min), int(info.max)
        else:
            self.min_value = self.max_value = None

    @property
    def target_type(self) -> type:
        return self.dtype if self.dtype is not None else int

    def from_string(self, value: str) -> Union[int, np.integer]:
        if not isinstance(value, str) or not _INTEGER_PATTERN.fullmatch(value):
            raise ConversionError(
                f"Cannot convert {describe(value)} to {self.target_type.__name__}, not a base-10 integer",
                value=value, target_type=self.target_type,
            )

        number = int(value)
        if self.dtype is None:
            return number

        if not self.min_value <= number <= self.max_value:
            raise ConversionError(
                f"Value {value} out of range for {self.dtype.__name__} "
                f"[{self.min_value}, {self.max_value}]",
                value=value, target_type=self.dtype,
            )
        return self.dtype(number)

    def to_string(self, value: Union[int, np.integer]) -> str:
        return str(int(value))

    def __repr__(self) -> str:
        return f"IntegerValueConverter(dtype={self.target_type.__name__})"


class FloatValueConverter(ValueConverter[float]):
    """IEEE-754 textual floating point parsing.

    Accepts decimal and exponent notation with an optional trailing type
    suffix (``f``, ``F``, ``d``, ``D``), plus ``NaN`` and ``Infinity``.
    Magnitudes beyond the type's range round to infinity.

    Parameters
    ----------
    dtype : numpy floating type
        Precision to round to
    native : bool
        Return a Python ``float`` instead of a numpy scalar
    """

    def __init__(self, dtype: Type[np.floating] = np.float64, native: bool = False):
        self.dtype = dtype
        self.native = native

    @property
    def target_type(self) -> type:
        return float if self.native else self.dtype

    def from_string(self, value: str) -> Union[float, np.floating]:
        match = _FLOAT_PATTERN.fullmatch(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise ConversionError(
                f"Cannot convert {describe(value)} to {self.target_type.__name__}, not a floating point number",
                value=value, target_type=self.target_type,
            )

        text = match.group('special') or match.group('number')
        with np.errstate(over='ignore'):
            number = self.dtype(float(text))
        return float(number) if self.native else number

    def to_string(self, value: Union[float, np.floating]) -> str:
        number = self.dtype(value)
        if np.isnan(number):
            return 'NaN'
        if np.isinf(number):
            return 'Infinity' if number > 0 else '-Infinity'
        # numpy's str() is the shortest text that round-trips at this precision
        return str(number)

    def __repr__(self) -> str:
        return f"FloatValueConverter(dtype={self.dtype.__name__}, native={self.native})"


class StringValueConverter(ValueConverter[str]):
    """Identity conversion."""

    def from_string(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return value


class LocaleValueConverter(ValueConverter[Locale]):
    """Parses ``language`` or ``language_COUNTRY`` identifiers.

    The identifier must be known to the platform locale alias table, so
    ``en_US`` parses while ``no_PO`` is rejected.
    """

    def from_string(self, value: str) -> Locale:
        match = _LOCALE_PATTERN.fullmatch(value) if isinstance(value, str) else None
        if match is None:
            raise ConversionError(
                f"Cannot convert {describe(value)} to locale, expected language_COUNTRY",
                value=value, target_type=Locale,
            )

        language = match.group('language').lower()
        country = (match.group('country') or '').upper()
        identifier = f"{language}_{country}" if country else language

        if identifier.lower() not in _locale.locale_alias:
            raise ConversionError(
                f"Unknown locale {identifier}",
                value=value, target_type=Locale,
            )
        return Locale(language, country)

    def to_string(self, value: Locale) -> str:
        return str(value)


class EnumValueConverter(ValueConverter[Enum]):
    """Maps a string to the enum member with exactly that name."""

    def __init__(self, enum_type: Type[Enum]):
        self.enum_type = enum_type

    def from_string(self, value: str) -> Enum:
        try:
            return self.enum_type[value]
        except KeyError:
            names = [member.name for member in self.enum_type]
            raise ConversionError(
                f"No {self.enum_type.__name__} member named {describe(value)}; expected one of {names}",
                value=value, target_type=self.enum_type,
            ) from None

    def to_string(self, value: Enum) -> str:
        return value.name

    def __repr__(self) -> str:
        return f"EnumValueConverter({self.enum_type.__name__})"
