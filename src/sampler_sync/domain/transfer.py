"""
Single-file byte copy with progress reporting.

The destination's parent directory must already exist. The destination is
truncated and written in place: after a failure it holds whatever was
written so far, and no cleanup is attempted.
"""

from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from ..core.exceptions import (
    DestinationUnwritableError,
    SourceNotFoundError,
    SourceUnreadableError,
    TransferError,
)

CHUNK_SIZE = 64 * 1024

# (bytes_transferred, total_bytes, done)
CopyProgressCallback = Callable[[int, int, bool], None]


def copy_file(
    source: Path,
    target: Path,
    progress: Optional[CopyProgressCallback] = None,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Copy source's bytes to target.

    ``progress`` is called with a growing byte count after every chunk and
    once more with ``done=True`` when the whole file has landed.

    Args:
        source: File to read
        target: File to create or truncate
        progress: Optional progress callback
        chunk_size: Bytes read per step

    Returns:
        Number of bytes copied

    Raises:
        SourceNotFoundError: If source does not exist
        SourceUnreadableError: If source cannot be opened or is not a file
        DestinationUnwritableError: If target cannot be created
        TransferError: If reading or writing fails mid-copy
    """
    source = Path(source)
    target = Path(target)

    try:
        src = open(source, "rb")
    except FileNotFoundError as e:
        raise SourceNotFoundError(source) from e
    except OSError as e:
        raise SourceUnreadableError(source, target, f"Cannot read {source}: {e}") from e

    with src:
        try:
            total = src.seek(0, 2)
            src.seek(0)
        except OSError as e:
            raise SourceUnreadableError(
                source, target, f"Cannot size {source}: {e}"
            ) from e

        try:
            dst = open(target, "wb")
        except OSError as e:
            raise DestinationUnwritableError(
                source, target, f"Cannot write {target}: {e}"
            ) from e

        logger.debug(f"Copying {source} -> {target} ({total} bytes)")
        transferred = 0
        try:
            with dst:
                while True:
                    chunk = src.read(chunk_size)
                    if not chunk:
                        break
                    dst.write(chunk)
                    transferred += len(chunk)
                    if progress:
                        progress(transferred, total, False)
        except OSError as e:
            raise TransferError(
                source,
                target,
                f"Copy {source} -> {target} failed after {transferred} bytes: {e}",
            ) from e

    if progress:
        progress(transferred, total, True)
    return transferred
