"""
CLI subcommands for upstream-version.

Options shared by several commands live here so that every command reads
the version source the same way.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, NoReturn

import click

from upstream_version.constants import COMPONENT_TAG
from upstream_version.utils import get_logger, print_error

logger = get_logger("commands")


def version_source_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach ``--version-file`` and ``--version-pattern`` to a command."""
    func = click.option(
        "--version-pattern",
        "-p",
        envvar="UPSTREAM_VERSION_PATTERN",
        help="Regular expression with a named group 'version'.",
    )(func)
    func = click.option(
        "--version-file",
        "-f",
        type=click.Path(dir_okay=False, path_type=Path),
        envvar="UPSTREAM_VERSION_FILE",
        help="File containing the upstream version.",
    )(func)
    return func


def fail_read(path: Any, exc: OSError) -> NoReturn:
    """Report a version file read failure and exit with status 1."""
    print_error(f"{COMPONENT_TAG} Cannot read version file {path}: {exc}")
    logger.debug("Read failure", exc_info=True)
    sys.exit(1)
