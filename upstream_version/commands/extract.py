"""Extract command implementation for upstream-version.

Prints the normalized version found in the upstream version file. Useful
to check a ``version_pattern`` before wiring it into a release::

    $ upstream-version extract -f zlib.h -p 'ZLIB_VERSION "(?P<version>[^"]+)"'
    1.3.1
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from upstream_version.commands import fail_read, version_source_options
from upstream_version.context import pass_context, UpstreamVersionContext
from upstream_version.core import resolve_upstream_version
from upstream_version.exceptions import UpstreamVersionError
from upstream_version.utils import get_logger, print_error, print_warning

logger = get_logger("commands.extract")


@click.command()
@version_source_options
@pass_context
def extract(
    ctx: UpstreamVersionContext,
    version_file: Optional[Path],
    version_pattern: Optional[str],
) -> None:
    """Print the upstream version found in the version file.

    Exits:
        0 on success, 1 if no version could be extracted.
    """
    config = ctx.effective_config(
        version_file=version_file,
        version_pattern=version_pattern,
    )

    try:
        upstream = resolve_upstream_version(config)
    except UpstreamVersionError as exc:
        print_error(str(exc))
        sys.exit(1)
    except OSError as exc:
        fail_read(config.version_file, exc)

    if upstream.is_prerelease:
        print_warning(
            f"Upstream version {upstream} is a pre-release and cannot anchor a release"
        )

    click.echo(str(upstream))
