"""
Version normalization for upstream-version.

Turns an arbitrary string into a canonical :class:`Version` in two tiers:

1. **Strict parse**: the string already is a well-formed semantic version
   (``major.minor.patch[-prerelease][+build]``, no leading zeros). Parsing
   is delegated to the ``semver`` library.
2. **Coercion**: otherwise the first plausible ``major[.minor[.patch]]``
   numeric run is pulled out of the text (missing components become ``0``)
   together with an optional ``-prerelease`` suffix that directly follows it.
   Only ASCII digits count, and a suffix that is not a valid pre-release
   makes the whole value unparseable rather than being dropped.

Only when neither tier yields a version is
:class:`~upstream_version.exceptions.UnparseableVersionError` raised.

Examples::

    normalize("1.2.3-rc.1")         # 1.2.3-rc.1  (strict)
    normalize("v2")                 # 2.0.0       (coerced)
    normalize("2.3")                # 2.3.0       (coerced)
    normalize("libfoo 4.1.7-beta")  # 4.1.7-beta  (coerced)
"""

from __future__ import annotations

import re
from typing import Optional

import semver

from upstream_version.models.version import Version
from upstream_version.utils.logger import get_logger
from upstream_version.exceptions import UnparseableVersionError

logger = get_logger("core.normalizer")

# Components longer than 16 digits are not considered plausible version numbers.
# Only ASCII digits count.
_COMPONENT = r"[0-9]{1,16}"

COERCE_PATTERN = re.compile(
    rf"(?<![0-9])"
    rf"(?P<major>{_COMPONENT})"
    rf"(?:\.(?P<minor>{_COMPONENT}))?"
    rf"(?:\.(?P<patch>{_COMPONENT}))?"
    rf"(?![0-9])",
    re.ASCII,
)

# Everything after the hyphen up to whitespace or a delimiter is the suffix
SUFFIX_PATTERN = re.compile(r"-(?P<prerelease>[^\s\"'`,;:()\[\]{}<>]+)")

_STRICT_PREFIX = re.compile(r"^[=v]")


def parse_strict(value: str) -> Optional[Version]:
    """Parse a strictly well-formed semantic version.

    Surrounding whitespace and a single leading ``v`` or ``=`` are
    tolerated. Build metadata is accepted but discarded. Non-ASCII
    characters, including non-ASCII digits, make the value non-strict.

    Args:
        value: Candidate version string.

    Returns:
        The parsed :class:`Version`, or ``None`` if ``value`` is not a
        strict semantic version.
    """
    candidate = _STRICT_PREFIX.sub("", value.strip(), count=1)
    if not candidate.isascii():
        return None
    try:
        parsed = semver.Version.parse(candidate)
    except (ValueError, TypeError):
        return None
    return Version.from_semver(parsed)


def coerce(value: str) -> Optional[Version]:
    """Extract the first plausible version embedded in ``value``.

    A ``-suffix`` directly after the numeric run is kept as the
    pre-release; a trailing sentence period is ignored.

    Args:
        value: Arbitrary text, e.g. ``"release v1.2"``.

    Returns:
        The coerced :class:`Version`, or ``None`` when ``value`` contains no
        numeric run at all.

    Raises:
        UnparseableVersionError: The suffix is not a valid pre-release,
            e.g. ``"1.2.3-01"``.
    """
    match = COERCE_PATTERN.search(value)
    if match is None:
        return None

    major, minor, patch = (
        int(match.group(name) or 0) for name in ("major", "minor", "patch")
    )
    coerced = Version(major, minor, patch)

    suffix = SUFFIX_PATTERN.match(value, match.end())
    if suffix is None:
        return coerced

    prerelease = suffix.group("prerelease").rstrip(".")
    retained = parse_strict(f"{coerced}-{prerelease}") if prerelease else None
    if retained is None:
        raise UnparseableVersionError(value)
    return retained


def normalize(value: str) -> Version:
    """Normalize ``value`` into a canonical :class:`Version`.

    Strict parsing is attempted first; coercion is the fallback.

    Raises:
        UnparseableVersionError: ``value`` contains no plausible version,
            or its pre-release suffix is malformed.
    """
    strict = parse_strict(value)
    if strict is not None:
        logger.debug("Parsed %r strictly as %s", value, strict)
        return strict

    coerced = coerce(value)
    if coerced is None:
        raise UnparseableVersionError(value)

    logger.debug("Coerced %r to %s", value, coerced)
    return coerced
