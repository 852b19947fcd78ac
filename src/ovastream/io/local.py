"""Local filesystem access."""

import logging
import os
from pathlib import Path
from typing import Union

from ..core.model import NotFoundError
from .base import OpenResult

logger = logging.getLogger(__name__)


def canonical_path(path: Union[Path, str]) -> str:
    """Resolve symlinks, '.' and '..' in `path`."""
    return os.path.realpath(os.fspath(path))


def open_local(path: Union[Path, str]) -> OpenResult:
    """Open a local file for reading and return (file, size)."""
    resolved = canonical_path(path)
    logger.debug("Opening local file %s", resolved)
    try:
        f = open(resolved, "rb")
    except FileNotFoundError as e:
        raise NotFoundError(e.errno, e.strerror, os.fspath(path)) from e

    try:
        size = os.fstat(f.fileno()).st_size
    except OSError:
        f.close()
        raise
    return f, size
