"""
Temporary file helpers for the encode pipeline.

Each request owns its temporary files exclusively. A file is created by one
stage, handed by path to the next one and removed exactly once when its owner
is done with it. Removal is best-effort: a failure to delete is logged and
never replaces the outcome of the request.
"""

import os
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from loguru import logger

from ..config.common import TEMP_FILE_PREFIX


def resolve_temp_dir(temp_dir: Optional[Path] = None) -> Path:
    """Returns `temp_dir` (created if needed), or the platform temp directory."""
    if temp_dir is None:
        return Path(tempfile.gettempdir())
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def create_temp_file(suffix: str, temp_dir: Optional[Path] = None) -> Path:
    """
    Creates a new, empty, uniquely named file and returns its path.

    The file exists on return; the caller owns it and must remove it.
    """
    fd, name = tempfile.mkstemp(suffix=suffix, prefix=TEMP_FILE_PREFIX, dir=resolve_temp_dir(temp_dir))
    os.close(fd)
    return Path(name)


def reserve_temp_path(suffix: str, temp_dir: Optional[Path] = None) -> Path:
    """
    Returns a unique path for a file that does not exist yet.

    Used when an external tool creates the file itself and refuses to (or
    should not) overwrite an existing one.
    """
    return resolve_temp_dir(temp_dir) / f"{TEMP_FILE_PREFIX}{uuid.uuid4().hex}{suffix}"


def remove_temp_file(path: Optional[Union[str, Path]], description: str = "temporary file") -> bool:
    """
    Deletes `path` if it exists.

    Returns:
        True if the file is gone afterwards (deleted or never existed),
        False if deletion failed. Failures are logged, never raised.
    """
    if not path:
        return True
    path = Path(path)
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Unable to delete {description} {path}. Error message: {e}")
        return False
    logger.trace(f"Deleted {description} {path}")
    return True


@contextmanager
def owned_temp_file(path: Path, description: str = "temporary file") -> Iterator[Path]:
    """
    Scopes ownership of an existing temporary file to a `with` block.

    The file is removed when the block exits, whether it completed, returned
    early or raised.

    Example:
        with owned_temp_file(fetcher.fetch(url), "downloaded file") as source:
            output = transcoder.transcode(source)
    """
    try:
        yield path
    finally:
        remove_temp_file(path, description)
