"""
Store for Java-style ``.properties`` files.

Keys written as ``@tag.key`` become entries tagged ``tag``; all other keys
are untagged.
"""

from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from ..base.exceptions import ConfigurationError
from ..base.types import Entry
from .base import FileResourceStore, split_tagged_key


_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}
_SEPARATORS = '=:'
_WHITESPACE = ' \t\f'


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Join continuation lines and drop blanks and comments.

    Yields ``(line_number, logical_line)`` pairs, numbered by the natural
    line the logical line starts on.
    """
    lines = text.splitlines()
    index = 0
    while index < len(lines):
        start = index
        line = lines[index].lstrip(_WHITESPACE)
        index += 1

        if not line or line[0] in '#!':
            continue

        # An odd number of trailing backslashes continues onto the next line
        while (len(line) - len(line.rstrip('\\'))) % 2 == 1:
            line = line[:-1]
            if index >= len(lines):
                break
            line += lines[index].lstrip(_WHITESPACE)
            index += 1

        yield start + 1, line


def _unescape(text: str, line_number: int) -> str:
    chars: List[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != '\\' or i + 1 >= len(text):
            chars.append(char)
            i += 1
            continue

        code = text[i + 1]
        if code == 'u':
            digits = text[i + 2:i + 6]
            try:
                if len(digits) != 4:
                    raise ValueError(digits)
                chars.append(chr(int(digits, 16)))
            except ValueError:
                raise ConfigurationError(f"Malformed \\uxxxx escape on line {line_number}") from None
            i += 6
        else:
            chars.append(_ESCAPES.get(code, code))
            i += 2
    return ''.join(chars)


def _split_key_value(line: str) -> Tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    i = 0
    while i < len(line):
        char = line[i]
        if char == '\\':
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> List[Tuple[str, str]]:
    """Parse ``.properties`` text into ``(key, value)`` pairs in file order.

    Supports ``#`` and ``!`` comments, ``=``, ``:`` and whitespace
    separators, backslash line continuations and the ``\\t \\n \\r \\f``
    and ``\\uXXXX`` escapes.

    Raises
    ------
    ConfigurationError
        If a unicode escape is malformed
    """
    pairs = []
    for line_number, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        pairs.append((_unescape(raw_key, line_number), _unescape(raw_value, line_number)))
    return pairs


class PropertiesStore(FileResourceStore):
    """Configuration store backed by ``.properties`` files.

    Examples
    --------
    >>> store = PropertiesStore().add_resource("app.properties")
    """

    def _read_resource(self, path: Path) -> Iterable[Entry]:
        try:
            text = path.read_text(encoding=self.encoding)
        except OSError as e:
            raise ConfigurationError(f"Cannot read properties file {path}: {e}",
                                     config_file=str(path), cause=e) from e

        try:
            pairs = parse_properties(text)
        except ConfigurationError as e:
            e.config_file = str(path)
            e.add_detail('config_file', str(path))
            raise

        self._logger.debug(f"Read {len(pairs)} properties from {path}")
        return [self._make_entry(key, value) for key, value in pairs]

    def _make_entry(self, key: str, value: str) -> Entry:
        tag, key = split_tagged_key(key)
        return Entry(key, value, tag)
