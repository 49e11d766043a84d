"""Configuration file loader for upstream-version.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``upstream-version.toml``: settings under ``[upstream-version]`` table
- ``pyproject.toml``: settings under ``[tool.upstream-version]`` table

Discovery order:

1. Explicit path from ``--config`` or ``UPSTREAM_VERSION_CONFIG``
2. ``upstream-version.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.upstream-version]`` section

Configuration precedence: defaults < config file < environment < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path
    config = config.merged(default_revision=3)

Example (``upstream-version.toml``)::

    [upstream-version]
    version_file = "vendor/zlib/zlib.h"
    version_pattern = '#define ZLIB_VERSION "(?P<version>[^"]+)"'
    default_revision = 1
"""

from __future__ import annotations

import re
import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, replace

from upstream_version.utils.logger import get_logger
from upstream_version.exceptions import ConfigError, MissingConfigurationError
from upstream_version.constants import (
    CONFIG_FILE_NAME,
    CONFIG_KEY_ALIASES,
    CONFIG_SECTION,
    DEFAULT_REVISION,
)

logger = get_logger("config")

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class UpstreamVersionConfig:
    """Parsed upstream-version configuration.

    All fields have defaults so that empty config files are valid; the two
    required options are only enforced by :meth:`validate`, once command
    line overrides have been applied.

    Attributes:
        version_file: File containing the upstream version.
        version_pattern: Regular expression with a named group ``version``.
        default_revision: Revision used when a new upstream version is adopted.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    version_file: Optional[Path] = None
    version_pattern: Optional[str] = None
    default_revision: int = DEFAULT_REVISION

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "version_file": str(self.version_file) if self.version_file else None,
            "version_pattern": self.version_pattern,
            "default_revision": self.default_revision,
        }

    def merged(self, **overrides: Any) -> UpstreamVersionConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "version_file" in changes:
            changes["version_file"] = Path(changes["version_file"])
        if "default_revision" in changes:
            changes["default_revision"] = parse_revision(changes["default_revision"])
        return replace(self, **changes)

    def validate(self) -> None:
        """Ensure the options needed to compute a version are present.

        Raises:
            MissingConfigurationError: Version file or pattern is unset.
        """
        if not self.version_file or not str(self.version_file):
            raise MissingConfigurationError(
                "version_file", description="Version file for extraction"
            )
        if not self.version_pattern:
            raise MissingConfigurationError(
                "version_pattern", description="Version pattern for extraction"
            )


def parse_revision(value: Any, *, config_path: Optional[str] = None) -> int:
    """Interpret a ``default_revision`` value.

    Integers are used as-is. Strings contribute their leading integer
    (``"7"`` and ``"7th"`` both give ``7``); anything without one, including
    ``None``, falls back to :data:`DEFAULT_REVISION`.

    Raises:
        ConfigError: Value is negative, a boolean, or of an unsupported type.
    """
    if value is None:
        return DEFAULT_REVISION

    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(
            f"default_revision must be an integer, got {type(value).__name__}",
            config_path=config_path,
            option="default_revision",
        )

    if isinstance(value, str):
        match = _LEADING_INTEGER.match(value)
        if match is None:
            logger.debug(
                "default_revision %r is not numeric, using %d", value, DEFAULT_REVISION
            )
            return DEFAULT_REVISION
        value = int(match.group(1))

    if value < 0:
        raise ConfigError(
            f"default_revision must not be negative, got {value}",
            config_path=config_path,
            option="default_revision",
        )
    return value


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``UPSTREAM_VERSION_CONFIG``)
    2. ``upstream-version.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.upstream-version]`` section

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    dedicated = cwd / CONFIG_FILE_NAME
    if dedicated.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, dedicated)
        return dedicated

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.%s] in pyproject.toml: %s", CONFIG_SECTION, pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if pyproject.toml contains a ``[tool.upstream-version]`` section.

    Parse errors count as "no section" so discovery can fall through.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return CONFIG_SECTION in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> UpstreamVersionConfig:
    """Load upstream-version configuration.

    Discovers the config file (or uses the provided path), parses and type
    checks it. Returns defaults if no file is found. Required options are
    not enforced here; see :meth:`UpstreamVersionConfig.validate`.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return UpstreamVersionConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get(CONFIG_SECTION, {})
    else:
        section = raw.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("Config file found but no %s section, using defaults", CONFIG_SECTION)
        return UpstreamVersionConfig(source_path=resolved)

    config = _parse_section(section, config_path=resolved)
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: Path,
) -> UpstreamVersionConfig:
    """Parse and validate an ``upstream-version`` configuration table.

    camelCase keys (``versionFile``...) are accepted as aliases. A relative
    ``version_file`` is resolved against the directory of the config file.

    Raises:
        ConfigError: Unknown or duplicated keys, or incorrect types.
    """
    path_str = str(config_path)
    options: Dict[str, Any] = {}

    for key, value in section.items():
        name = CONFIG_KEY_ALIASES.get(key, key)
        if name not in CONFIG_KEY_ALIASES.values():
            raise ConfigError(f"Unknown configuration key: {key}", config_path=path_str)
        if name in options:
            raise ConfigError(
                f"Configuration option given twice: {name}",
                config_path=path_str,
                option=name,
            )
        options[name] = value

    config = UpstreamVersionConfig()

    for name in ("version_file", "version_pattern"):
        if name not in options:
            continue
        val = options[name]
        if not isinstance(val, str):
            raise ConfigError(
                f"{name} must be a string, got {type(val).__name__}",
                config_path=path_str,
                option=name,
            )
        setattr(config, name, val or None)

    if config.version_file is not None:
        version_file = Path(config.version_file)
        if not version_file.is_absolute():
            version_file = config_path.parent / version_file
        config.version_file = version_file

    if "default_revision" in options:
        config.default_revision = parse_revision(
            options["default_revision"], config_path=path_str
        )

    return config
