"""
Base interface for value converters.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class ValueConverter(ABC, Generic[T]):
    """Strategy converting raw configuration strings to one target type.

    Converters are stateless and may be shared between registries and
    threads. ``from_string`` and ``to_string`` are inverses for every
    representable value.
    """

    @abstractmethod
    def from_string(self, value: str) -> T:
        """Parse a raw configuration value.

        Parameters
        ----------
        value : str
            Raw string as resolved from a store

        Returns
        -------
        T
            Typed value

        Raises
        ------
        ConversionError
            If the string is not a valid representation
        """
        pass

    @abstractmethod
    def to_string(self, value: T) -> str:
        """Render a typed value back to its raw string form.

        Parameters
        ----------
        value : T
            Typed value

        Returns
        -------
        str
            String that ``from_string`` maps back to ``value``
        """
        pass

    @property
    def name(self) -> str:
        """Human-readable converter name for logs and errors."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def describe(value: Any) -> str:
    """Short repr of a raw value for error messages."""
    text = repr(value)
    return text if len(text) <= 60 else text[:57] + "..."
