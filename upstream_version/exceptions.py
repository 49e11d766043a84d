"""
Custom exception hierarchy for upstream-version.

This module defines structured exception types used across upstream-version.
All exceptions inherit from :class:`UpstreamVersionError`, carry the
``[upstream-version]`` component tag in their string form, and support
optional structured metadata via the ``details`` attribute to improve
diagnostics and logging.

Failures while reading the version file are not wrapped: the ``OSError``
raised by the read propagates to the caller unchanged.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional

from upstream_version.constants import COMPONENT_TAG


class UpstreamVersionError(Exception):
    """Base exception for all upstream-version errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        text = f"{COMPONENT_TAG} {self.message}"
        if not self.details:
            return text
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{text} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ConfigError(UpstreamVersionError):
    """Raised when configuration cannot be loaded or is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file involved.
        option: Name of the offending configuration option.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class MissingConfigurationError(ConfigError):
    """Raised when a required option (version file or pattern) is unset."""

    __slots__ = ()

    def __init__(self, option: str, *, description: str) -> None:
        super().__init__(
            f"{description} must be specified as '{option}'",
            option=option,
        )


class PatternNotFoundError(UpstreamVersionError):
    """Raised when the version pattern does not match the version file.

    Args:
        pattern: Regular expression source that was searched for.
        version_file: Path of the file that was searched.
    """

    __slots__ = ("pattern", "version_file")

    def __init__(self, pattern: str, *, version_file: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "file", version_file)
        details["pattern"] = pattern

        super().__init__("Could not find version pattern in source file", details)

        self.pattern = pattern
        self.version_file = version_file


class MissingCaptureGroupError(UpstreamVersionError):
    """Raised when a match carries no named capture group ``version``."""

    __slots__ = ("pattern",)

    def __init__(self, pattern: str) -> None:
        super().__init__(
            "Could not find named capture group 'version' in pattern",
            {"pattern": pattern},
        )
        self.pattern = pattern


class UnparseableVersionError(UpstreamVersionError):
    """Raised when no version can be derived from a string at all."""

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        super().__init__(
            "Unable to derive a version from string",
            {"value": _truncate(repr(value))},
        )
        self.value = value


class UpstreamPrereleaseError(UpstreamVersionError):
    """Raised when the upstream version carries a pre-release specifier.

    The upstream artifact anchors a new release line and must therefore
    name a final release.
    """

    __slots__ = ("version",)

    def __init__(self, version: Any) -> None:
        super().__init__(
            "Unable to use upstream version with pre-release specifier for versioning",
            {"version": str(version)},
        )
        self.version = version
