"""
Data model exports for upstream-version.

Example:
    >>> from upstream_version.models import Version
"""

from __future__ import annotations

from upstream_version.models.version import Identifier, Version, parse_identifiers

__all__ = [
    "Identifier",
    "Version",
    "parse_identifiers",
]
