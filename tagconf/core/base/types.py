"""
Value types shared by stores, converters and the merge engine.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Entry:
    """A single configuration fact contributed by a store.

    Attributes:
        key: Property name
        value: Raw string value
        tag: Environment tag, or None for an untagged entry
    """
    key: str
    value: str
    tag: Optional[str] = None

    @property
    def is_tagged(self) -> bool:
        return self.tag is not None

    def matches(self, key: str, tag: Optional[str]) -> bool:
        """True if this entry carries ``key`` under exactly ``tag``."""
        return self.key == key and self.tag == tag


@dataclass(frozen=True)
class Locale:
    """Language plus optional country, rendered as ``language_COUNTRY``."""
    language: str
    country: str = ""

    def __str__(self) -> str:
        if self.country:
            return f"{self.language}_{self.country}"
        return self.language
