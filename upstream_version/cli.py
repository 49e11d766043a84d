"""
Command-line interface for upstream-version.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from upstream_version.config import load_config
from upstream_version.__version__ import VERSION_STRING, __version__
from upstream_version.context import UpstreamVersionContext
from upstream_version.exceptions import ConfigError, UpstreamVersionError
from upstream_version.utils.logger import get_logger, setup_logging
from upstream_version.utils.console import print_error, print_warning

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="UPSTREAM_VERSION_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="UPSTREAM_VERSION_COLOR",
)
@click.version_option(version=__version__, message=VERSION_STRING)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """upstream-version: next release versions from an upstream version file.

    \b
    Available commands:
      upstream-version next        Print the next release version
      upstream-version extract     Print the upstream version

    \b
    Examples:
      upstream-version next --latest 3.4.5-7
      upstream-version -v next --latest 3.3.0 -f foo.h -p 'v(?P<version>\\S+)'
      upstream-version extract

    Use ``upstream-version COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    app_ctx = UpstreamVersionContext()
    app_ctx.config_path = config or loaded_config.source_path
    app_ctx.color = color
    app_ctx.verbose = verbose
    app_ctx.config = loaded_config
    ctx.obj = app_ctx

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"

    logger.debug("upstream-version v%s", __version__)
    logger.debug("Config path: %s", app_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from upstream_version.commands.extract import extract  # noqa: E402
from upstream_version.commands.next_version import next_version  # noqa: E402

cli.add_command(next_version)
cli.add_command(extract)


def main() -> int:
    """Main entry point for the upstream-version CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("Operation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except UpstreamVersionError as exc:
        print_error(str(exc))
        logger.debug(
            "UpstreamVersionError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
