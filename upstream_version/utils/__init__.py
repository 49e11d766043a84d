"""
Utility helpers for upstream-version.

This package provides reusable utilities used across upstream-version:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Version file reading

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from upstream_version.utils.filesystem import read_text_file

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from upstream_version.utils.logger import (
    get_logger,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from upstream_version.utils.console import (
    get_raw_console,
    print_error,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    # Logging
    "get_logger",
    "setup_logging",
    # Filesystem
    "read_text_file",
]
