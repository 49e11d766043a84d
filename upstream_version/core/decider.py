"""
Increment decision for upstream-version.

Given the latest released version and the contents of the upstream version
file, this module decides which version to release next:

- The upstream file names a final release, e.g. ``3.4.5``.
- If the latest release already is a pre-release of exactly that version
  (``3.4.5-7``), the pre-release counter is bumped (``3.4.5-8``).
- In every other case a new release line starts at
  ``<upstream>-<default_revision>`` (``3.4.5-1``).

Typical usage::

    config = load_config().merged(version_file="zlib.h")
    next_version = resolve_next_version("1.3.0-2", config)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Pattern

from upstream_version.models.version import Version
from upstream_version.core.normalizer import normalize
from upstream_version.config import UpstreamVersionConfig
from upstream_version.constants import VERSION_GROUP
from upstream_version.utils.filesystem import read_text_file
from upstream_version.utils.logger import get_logger
from upstream_version.exceptions import (
    ConfigError,
    MissingCaptureGroupError,
    PatternNotFoundError,
    UpstreamPrereleaseError,
)

logger = get_logger("core.decider")

# JavaScript-style named groups and backreferences, as found in configs
# shared with Node tooling: (?<name>...) and \k<name>
_JS_NAMED_GROUP = re.compile(r"\(\?<(?![=!])(\w+)>")
_JS_BACKREFERENCE = re.compile(r"\\k<(\w+)>")


class DiffClass(str, Enum):
    """Relationship between the latest and the upstream version."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    NONE = "none"


def classify_difference(latest: Version, upstream: Version) -> DiffClass:
    """Classify how ``latest`` differs from ``upstream``.

    Returns:
        - ``NONE``       : versions are fully equal
        - ``MAJOR``      : major components differ
        - ``MINOR``      : minor components differ
        - ``PATCH``      : patch components differ, or the cores are equal
          and the pre-releases differ in any other way
        - ``PRERELEASE`` : equal cores and ``latest`` is a pre-release

    Examples:
        >>> classify_difference(Version(3, 3, 0), Version(3, 4, 5))
        <DiffClass.MINOR: 'minor'>
        >>> classify_difference(Version(3, 4, 5, (7,)), Version(3, 4, 5))
        <DiffClass.PRERELEASE: 'prerelease'>
    """
    if latest == upstream:
        return DiffClass.NONE

    if latest.major != upstream.major:
        return DiffClass.MAJOR

    if latest.minor != upstream.minor:
        return DiffClass.MINOR

    if latest.patch != upstream.patch:
        return DiffClass.PATCH

    if latest.is_prerelease:
        return DiffClass.PRERELEASE

    return DiffClass.PATCH


def compile_version_pattern(pattern: str) -> Pattern[str]:
    """Compile a version pattern in multi-line mode.

    JavaScript named group syntax is translated to Python's.

    Raises:
        ConfigError: The pattern is not a valid regular expression.
    """
    source = _JS_NAMED_GROUP.sub(r"(?P<\1>", pattern)
    source = _JS_BACKREFERENCE.sub(r"(?P=\1)", source)
    try:
        return re.compile(source, re.MULTILINE)
    except re.error as exc:
        raise ConfigError(
            f"Invalid version pattern: {exc}",
            option="version_pattern",
        ) from exc


def extract_upstream_version(
    contents: str,
    pattern: str,
    *,
    version_file: Optional[str] = None,
) -> str:
    """Return the text captured by group ``version`` in the first match.

    Args:
        contents: Full text of the version file.
        pattern: Regular expression source with a named group ``version``.
        version_file: File the contents came from, for error reporting.

    Raises:
        ConfigError: ``pattern`` does not compile.
        PatternNotFoundError: ``pattern`` does not match ``contents``.
        MissingCaptureGroupError: The match has no (non-empty) ``version`` group.
    """
    regex = compile_version_pattern(pattern)

    match = regex.search(contents)
    if match is None:
        raise PatternNotFoundError(pattern, version_file=version_file)

    if VERSION_GROUP not in regex.groupindex or not match.group(VERSION_GROUP):
        raise MissingCaptureGroupError(pattern)

    return match.group(VERSION_GROUP)


def compute_next_version(
    latest_version: str,
    config: UpstreamVersionConfig,
    contents: str,
) -> str:
    """Compute the next release version.

    Args:
        latest_version: Latest released version (any format accepted by
            :func:`~upstream_version.core.normalizer.normalize`).
        config: Validated configuration.
        contents: Contents of ``config.version_file``.

    Returns:
        The next version, always ``major.minor.patch-prerelease``.

    Raises:
        UnparseableVersionError: Either version cannot be normalized.
        UpstreamPrereleaseError: The upstream version is a pre-release.
        PatternNotFoundError, MissingCaptureGroupError: Extraction failed.
    """
    config.validate()
    return _decide(latest_version, config, contents)


def _decide(latest_version: str, config: UpstreamVersionConfig, contents: str) -> str:
    latest = normalize(latest_version)
    logger.info("Normalized latest version %s to %s", latest_version, latest)

    upstream_raw = extract_upstream_version(
        contents,
        config.version_pattern,
        version_file=str(config.version_file),
    )
    logger.info("Extracted upstream version from source file: %s", upstream_raw)

    upstream = normalize(upstream_raw)
    logger.info("Normalized upstream version %s to %s", upstream_raw, upstream)

    if upstream.is_prerelease:
        raise UpstreamPrereleaseError(upstream)

    diff = classify_difference(latest, upstream)
    if diff is DiffClass.PRERELEASE:
        next_version = latest.bump_prerelease()
    else:
        # Same upstream version re-seeds as well (DiffClass.NONE)
        next_version = upstream.with_revision(config.default_revision)

    logger.info(
        "Determined increment version (%s), bumping from %s to %s",
        diff.value,
        latest,
        next_version,
    )
    return str(next_version)


def resolve_upstream_version(config: UpstreamVersionConfig) -> Version:
    """Read the version file and return its normalized upstream version.

    Raises:
        OSError: The version file cannot be read.
    """
    config.validate()
    contents = read_text_file(config.version_file)
    upstream_raw = extract_upstream_version(
        contents,
        config.version_pattern,
        version_file=str(config.version_file),
    )
    logger.info("Extracted upstream version from source file: %s", upstream_raw)
    return normalize(upstream_raw)


def resolve_next_version(latest_version: str, config: UpstreamVersionConfig) -> str:
    """Read the version file and compute the next release version.

    Raises:
        MissingConfigurationError: Version file or pattern is unset.
        OSError: The version file cannot be read.
    """
    config.validate()
    contents = read_text_file(config.version_file)
    return _decide(latest_version, config, contents)
