"""
Canonical version value type for upstream-version.

A :class:`Version` is the normalized ``major.minor.patch`` triple plus an
optional pre-release identifier list. Build metadata is never retained.
Ordering follows semantic versioning precedence and is delegated to the
``semver`` library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Iterable, Tuple, Union

import semver

Identifier = Union[int, str]


def parse_identifiers(prerelease: str) -> Tuple[Identifier, ...]:
    """Split a dotted pre-release string into typed identifiers.

    Purely numeric identifiers become ``int``; everything else stays ``str``.

    Examples:
        >>> parse_identifiers("rc.1")
        ('rc', 1)
        >>> parse_identifiers("")
        ()
    """
    if not prerelease:
        return ()
    return tuple(
        int(part) if part.isdigit() else part for part in prerelease.split(".")
    )


@total_ordering
@dataclass(frozen=True)
class Version:
    """
    Normalized version: ``major.minor.patch`` with optional pre-release.

    Attributes:
        major: Major component (non-negative).
        minor: Minor component (non-negative).
        patch: Patch component (non-negative).
        prerelease: Pre-release identifiers; empty for a final release.
    """

    major: int
    minor: int
    patch: int
    prerelease: Tuple[Identifier, ...] = field(default=())

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        # Accept any iterable of identifiers but store a tuple
        object.__setattr__(self, "prerelease", tuple(self.prerelease))

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + self.prerelease_string
        return text

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def core(self) -> Tuple[int, int, int]:
        """The ``(major, minor, patch)`` triple."""
        return self.major, self.minor, self.patch

    @property
    def is_prerelease(self) -> bool:
        """``True`` when the version carries pre-release identifiers."""
        return bool(self.prerelease)

    @property
    def prerelease_string(self) -> str:
        """Pre-release identifiers joined with dots (empty if none)."""
        return ".".join(str(part) for part in self.prerelease)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def to_semver(self) -> semver.Version:
        """Convert to a :class:`semver.Version` for precedence checks."""
        return semver.Version(
            self.major,
            self.minor,
            self.patch,
            prerelease=self.prerelease_string or None,
        )

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 following semantic versioning precedence."""
        return self.to_semver().compare(other.to_semver())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def bump_prerelease(self) -> Version:
        """Return a copy with the pre-release counter incremented.

        The right-most numeric identifier is increased by one. When the
        pre-release has no numeric identifier, ``0`` is appended; a final
        release becomes ``major.minor.patch-0``.

        Examples:
            >>> str(Version(3, 4, 5, (7,)).bump_prerelease())
            '3.4.5-8'
            >>> str(Version(3, 4, 5, ("beta",)).bump_prerelease())
            '3.4.5-beta.0'
        """
        identifiers = list(self.prerelease)
        for index in range(len(identifiers) - 1, -1, -1):
            if isinstance(identifiers[index], int):
                identifiers[index] += 1
                break
        else:
            identifiers.append(0)
        return self.with_prerelease(identifiers)

    def with_prerelease(self, prerelease: Iterable[Identifier]) -> Version:
        """Return the same numeric core with different pre-release identifiers."""
        return Version(self.major, self.minor, self.patch, tuple(prerelease))

    def with_revision(self, revision: int) -> Version:
        """Return ``major.minor.patch-revision`` for this numeric core."""
        return self.with_prerelease((revision,))

    @classmethod
    def from_semver(cls, value: semver.Version) -> Version:
        """Build a Version from a parsed :class:`semver.Version`."""
        return cls(
            value.major,
            value.minor,
            value.patch,
            parse_identifiers(value.prerelease or ""),
        )
