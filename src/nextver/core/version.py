"""Semantic version arithmetic and bump resolution.

Versions are plain ``MAJOR.MINOR.PATCH`` triples. Parsing is lenient:
each dot-separated component contributes its leading decimal digits,
anything else counts as zero, so parsing never fails. Prerelease and
build suffixes are not carried through.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


class BumpType(str, Enum):
    """Magnitude of a version increment, ordered ``none < patch < minor < major``."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    def __str__(self) -> str:
        return self.value


_PRECEDENCE = {
    BumpType.NONE: 0,
    BumpType.PATCH: 1,
    BumpType.MINOR: 2,
    BumpType.MAJOR: 3,
}


def resolve_bump(signals: Iterable[BumpType]) -> BumpType:
    """Fold bump signals into the single highest-priority bump.

    The reduction is a maximum over a total order, so the result does not
    depend on the order of ``signals``.

    Args:
        signals: Bump signals, one per classified commit

    Returns:
        The strongest bump, or ``BumpType.NONE`` for an empty sequence
    """
    return max(signals, key=lambda signal: signal.precedence, default=BumpType.NONE)


def _parse_component(component: str) -> int:
    match = _LEADING_DIGITS.match(component)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` version."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a dot-delimited version string.

        Missing or non-numeric components become 0:

        >>> Version.parse("1")
        Version(major=1, minor=0, patch=0)
        >>> Version.parse("a.b.c")
        Version(major=0, minor=0, patch=0)
        """
        parts = [_parse_component(part) for part in value.split(".")[:3]]
        parts.extend([0] * (3 - len(parts)))
        return cls(*parts)

    def bump(self, bump_type: BumpType) -> Version:
        """Return the version that follows this one for ``bump_type``.

        Raises:
            ValueError: If ``bump_type`` is ``BumpType.NONE``
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        raise ValueError(f"Cannot bump a version by {bump_type!s}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump_version(base: str, bump_type: BumpType) -> str:
    """Bump a version string, parsing it leniently."""
    return str(Version.parse(base).bump(bump_type))
