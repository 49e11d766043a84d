"""
Core functionality exports for upstream-version.

    from upstream_version.core import normalize, resolve_next_version
"""

from __future__ import annotations

from upstream_version.core.normalizer import coerce, normalize, parse_strict
from upstream_version.core.decider import (
    DiffClass,
    classify_difference,
    compute_next_version,
    extract_upstream_version,
    resolve_next_version,
    resolve_upstream_version,
)

__all__ = [
    "coerce",
    "normalize",
    "parse_strict",
    "DiffClass",
    "classify_difference",
    "compute_next_version",
    "extract_upstream_version",
    "resolve_next_version",
    "resolve_upstream_version",
]
