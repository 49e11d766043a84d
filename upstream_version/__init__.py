"""
upstream-version: next release versions anchored on an upstream source

upstream-version derives the next release version of a downstream package
(a vendored library, a distribution package, a wrapper) from the version
string embedded in an upstream artifact such as a header file, changelog
or manifest:

    • Extraction of the upstream version through a user-supplied pattern
    • Tolerant normalization of loosely formatted version strings
    • Revision numbering per upstream release (3.4.5-1, 3.4.5-2, ...)

Library usage::

    from upstream_version import UpstreamVersionConfig, resolve_next_version

    config = UpstreamVersionConfig(
        version_file=Path("zlib.h"),
        version_pattern=r'#define ZLIB_VERSION "(?P<version>[^"]+)"',
    )
    resolve_next_version("1.3.0-2", config)
"""

from __future__ import annotations

from upstream_version.__version__ import __version__
from upstream_version.config import UpstreamVersionConfig, load_config
from upstream_version.models import Version
from upstream_version.core import (
    DiffClass,
    classify_difference,
    compute_next_version,
    normalize,
    resolve_next_version,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "upstream-version Contributors"
__license__ = "Apache-2.0"
__description__ = "Next release versions derived from an upstream version file."

__all__ = [
    "__version__",
    "DiffClass",
    "UpstreamVersionConfig",
    "Version",
    "classify_difference",
    "compute_next_version",
    "load_config",
    "normalize",
    "resolve_next_version",
]
