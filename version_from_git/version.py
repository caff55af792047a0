"""
Version value type.

Parses tag names such as "1.2.3", "v1.2.3" or "1.2.3-SNAPSHOT" into an
ordered, immutable value and renders them back to their canonical text.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import VersionParseError

RELEASE_SUFFIX = 'RELEASE'
SNAPSHOT_SUFFIX = 'SNAPSHOT'

_WHITESPACE = ' \t\r\n'
_DIGITS = '0123456789'


@dataclass(frozen=True, eq=False)
class Version:
    """
    Parsed version: numeric parts, optional suffix and optional "v" prefix.

    Equality is defined on the canonical text, so "1.2.3" and "v1.2.3" are
    not equal even though neither one is greater than the other.
    """

    parts: Tuple[int, ...] = ()
    suffix: Optional[str] = None
    prefix: Optional[str] = None
    text: str = field(init=False, repr=False)

    def __post_init__(self):
        text = (self.prefix or '') + '.'.join(str(part) for part in self.parts)
        if self.suffix is not None:
            text += f'-{self.suffix}'
        object.__setattr__(self, 'text', text)

    @classmethod
    def parse(cls, version: Optional[str]) -> 'Version':
        """
        Parse version text.

        Args:
            version: Text like "1.2.3", "v1.2.3-SNAPSHOT" or "" (empty value)

        Returns:
            Version: The parsed value

        Raises:
            VersionParseError: If an unexpected character or an empty numeric
                component is found
        """
        if version is None or not version.strip():
            return cls()

        if version[0] in _WHITESPACE or version[-1] in _WHITESPACE:
            return cls.parse(version.strip())

        has_prefix = version[0] == 'v'
        i = 1 if has_prefix else 0
        start = i
        parts = []
        suffix = None

        while i < len(version):
            char = version[i]
            if char not in _DIGITS:
                # Component must not be empty
                if i == start:
                    raise VersionParseError(char, i)
                parts.append(int(version[start:i]))
                start = i + 1
                if char == '-':
                    break
                if char != '.':
                    raise VersionParseError(char, i)
            i += 1

        if start < i:
            parts.append(int(version[start:i]))
        if i + 1 < len(version):
            suffix = version[i + 1:]

        return cls(tuple(parts), suffix, 'v' if has_prefix else None)

    @property
    def is_empty(self) -> bool:
        """True for the value parsed from blank text."""
        return not self.text

    @property
    def is_snapshot(self) -> bool:
        return self.suffix == SNAPSHOT_SUFFIX

    def compare(self, other: 'Version') -> int:
        """
        Compare two versions.

        Numeric parts are compared position by position, then the number of
        parts, then suffixes: "RELEASE" beats everything, no suffix beats any
        other suffix, remaining suffixes compare as text.

        Returns:
            int: -1, 0 or 1
        """
        if self == other:
            return 0

        for mine, theirs in zip(self.parts, other.parts):
            if mine != theirs:
                return -1 if mine < theirs else 1

        if len(self.parts) != len(other.parts):
            return -1 if len(self.parts) < len(other.parts) else 1

        if self.suffix == other.suffix:
            return 0
        if self.suffix == RELEASE_SUFFIX:
            return 1
        if other.suffix == RELEASE_SUFFIX:
            return -1
        if self.suffix is None:
            return 1
        if other.suffix is None:
            return -1
        return -1 if self.suffix < other.suffix else 1

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.text == other.text

    def __hash__(self):
        return hash(self.text)

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self):
        return self.text
