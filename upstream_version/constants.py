"""
Centralized constants for upstream-version.

This module defines immutable values used across upstream-version,
including configuration defaults, configuration file discovery names,
and logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Mapping

# ---------------------------------------------------------------------------
# Error reporting
# ---------------------------------------------------------------------------

#: Tag prefixed to every error message raised by upstream-version.
COMPONENT_TAG: Final[str] = "[upstream-version]"

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

#: Revision appended to an upstream version that starts a new release line.
DEFAULT_REVISION: Final[int] = 1

#: Name of the dedicated configuration file (settings under ``[upstream-version]``).
CONFIG_FILE_NAME: Final[str] = "upstream-version.toml"

#: Name of the table holding settings in either configuration file.
CONFIG_SECTION: Final[str] = "upstream-version"

#: Accepted camelCase spellings of configuration keys.
CONFIG_KEY_ALIASES: Final[Mapping[str, str]] = {
    "versionFile": "version_file",
    "versionPattern": "version_pattern",
    "defaultRevision": "default_revision",
}

#: Name of the regex group holding the upstream version.
VERSION_GROUP: Final[str] = "version"

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
