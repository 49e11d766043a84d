"""
Filesystem helpers for upstream-version.

The version file is read in full, exactly once per invocation. Read
failures are deliberately left as the ``OSError`` raised by the operating
system so callers see the original cause.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from upstream_version.utils.logger import get_logger

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def read_text_file(file_path: PathLike, *, encoding: str = "utf-8") -> str:
    """Read a text file in full.

    Undecodable bytes are replaced rather than rejected; version files are
    expected to be ASCII-compatible text.

    Args:
        file_path: Path to the file.
        encoding: Text encoding.

    Returns:
        File contents as a string.

    Raises:
        OSError: The file does not exist or cannot be read.
    """
    path = Path(file_path)
    logger.debug("Reading %s", path)
    with open(path, "r", encoding=encoding, errors="replace") as fh:
        return fh.read()
