"""
Atomic file output.

Data is written to a temporary file next to the destination and renamed over
it only after the write fully succeeded, so a failed conversion never leaves
a loadable partial file under the final name.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Union

from ..errors import MapWriteError

logger = logging.getLogger(__name__)


def atomic_write(destination: Union[str, Path], writer: Callable[[BinaryIO], object]) -> Path:
    """Run ``writer`` against a temp file and move it to ``destination``.

    Args:
        destination: Final output path
        writer: Callable receiving a binary file object

    Returns:
        The destination path

    Raises:
        MapWriteError: If the directory or file cannot be written
    """
    path = Path(destination)
    parent = path.parent if str(path.parent) else Path(".")

    try:
        parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=parent)
    except OSError as e:
        raise MapWriteError(path, str(e)) from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            writer(f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        _discard(tmp_path)
        raise MapWriteError(path, str(e)) from e
    except BaseException:
        _discard(tmp_path)
        raise

    logger.debug(f"Wrote {path}")
    return path


def atomic_write_bytes(destination: Union[str, Path], data: bytes) -> Path:
    """Write ``data`` to ``destination`` atomically."""
    return atomic_write(destination, lambda f: f.write(data))


def _discard(tmp_path: Path) -> None:
    try:
        tmp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {tmp_path}: {e}")
