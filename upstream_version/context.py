"""
Shared context object for upstream-version CLI commands.

This module defines the Click context object used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from upstream_version.config import UpstreamVersionConfig


class UpstreamVersionContext:
    """Global context object for upstream-version CLI commands.

    Attributes:
        config_path: Path to the configuration file, if one was loaded.
        config: Configuration loaded from file (before command overrides).
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
    """

    __slots__ = ("config_path", "config", "verbose", "color")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.config: Optional[UpstreamVersionConfig] = None
        self.verbose: int = 0
        self.color: bool = True

    def effective_config(self, **overrides: object) -> UpstreamVersionConfig:
        """Return the loaded configuration with command options applied."""
        base = self.config or UpstreamVersionConfig()
        return base.merged(**overrides)


#: Click decorator for injecting :class:`UpstreamVersionContext` into commands.
pass_context = click.make_pass_decorator(UpstreamVersionContext, ensure=True)
