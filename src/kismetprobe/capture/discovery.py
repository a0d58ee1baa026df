"""Find capture files under a directory tree."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def _log_walk_error(err: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror)


def iter_capture_files(root: str | Path, extension: str = ".kismet") -> Iterator[Path]:
    """Lazily yield files under ``root`` whose suffix is ``extension``.

    Directories are walked in sorted order so results are stable between runs.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.suffix == extension and path.is_file():
                yield path
