"""Filesystem helpers."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def atomic_write(path: Union[str, Path], data: bytes) -> None:
    """
    Replace a file's content so readers never see a partial write.

    The data goes to a temporary file in the target's own directory, is
    flushed to disk, and is then renamed over the target in one step.

    Args:
        path: File to write
        data: Complete new content
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise

    logger.debug("Wrote %s (%d bytes)", path, len(data))


def atomic_write_text(path: Union[str, Path], text: str) -> None:
    atomic_write(path, text.encode('utf-8'))


def to_posix(path: str) -> str:
    """Normalize a relative path to forward slashes."""
    return path.replace('\\', '/')
