"""Next command implementation for upstream-version.

Prints the version the next release should carry, derived from the latest
released version and the upstream version file. Intended to be captured by
release scripts::

    $ upstream-version next --latest "$(git describe --tags --abbrev=0)"
    3.4.5-1

    # Override configuration from the command line
    $ upstream-version next --latest 3.4.5-7 \\
        --version-file include/foo.h \\
        --version-pattern '#define FOO_VERSION "(?P<version>[^"]+)"'
    3.4.5-8
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from upstream_version.commands import fail_read, version_source_options
from upstream_version.context import pass_context, UpstreamVersionContext
from upstream_version.core import resolve_next_version
from upstream_version.exceptions import UpstreamVersionError
from upstream_version.utils import get_logger, print_error

logger = get_logger("commands.next")


@click.command(name="next")
@click.option(
    "--latest",
    "-l",
    "latest_version",
    required=True,
    envvar="UPSTREAM_VERSION_LATEST",
    help="Latest released version of this project.",
)
@version_source_options
@click.option(
    "--default-revision",
    "-r",
    envvar="UPSTREAM_VERSION_DEFAULT_REVISION",
    help=(
        "Revision used when a new upstream version is adopted (default: 1). "
        "Read by its leading integer, like the config file value."
    ),
)
@pass_context
def next_version(
    ctx: UpstreamVersionContext,
    latest_version: str,
    version_file: Optional[Path],
    version_pattern: Optional[str],
    default_revision: Optional[str],
) -> None:
    """Print the next release version.

    When the latest release is already a pre-release of the upstream
    version, its counter is incremented (3.4.5-7 -> 3.4.5-8). Otherwise a
    new release line starts at UPSTREAM-REVISION (3.4.5-1).

    Exits:
        0 on success, 1 if the version could not be determined.
    """
    try:
        config = ctx.effective_config(
            version_file=version_file,
            version_pattern=version_pattern,
            default_revision=default_revision,
        )
        logger.debug("Effective configuration: %s", config.to_log_dict())
        result = resolve_next_version(latest_version, config)
    except UpstreamVersionError as exc:
        print_error(str(exc))
        sys.exit(1)
    except OSError as exc:
        fail_read(config.version_file, exc)

    click.echo(result)
