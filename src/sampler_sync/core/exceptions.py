"""Exceptions raised by sampler-sync operations."""

from pathlib import Path
from typing import Optional, Sequence


class SamplerSyncError(Exception):
    """Base exception for device and library operations."""

    pass


class StructureInvalidError(SamplerSyncError):
    """Raised when a root is readable but does not have the required shape."""

    def __init__(self, root: Path, missing: Sequence[str]):
        self.root = Path(root)
        self.missing = list(missing)
        super().__init__(
            f"{self.root} is missing required entries: {', '.join(self.missing)}"
        )


class NotFoundError(SamplerSyncError):
    """Raised when an expected file or directory is absent."""

    def __init__(self, path: Path, message: Optional[str] = None):
        self.path = Path(path)
        super().__init__(message or f"Not found: {self.path}")


class RootNotFoundError(NotFoundError):
    """Raised when a root directory does not exist or is not a directory."""

    pass


class InaccessibleError(SamplerSyncError):
    """Raised when a root exists but cannot be listed."""

    def __init__(self, path: Path, message: Optional[str] = None):
        self.path = Path(path)
        super().__init__(message or f"Cannot read directory: {self.path}")


class SourceNotFoundError(NotFoundError):
    """Raised when a copy source does not exist."""

    pass


class TransferError(SamplerSyncError):
    """Raised when reading or writing fails during a copy."""

    def __init__(self, source: Path, target: Path, message: str):
        self.source = Path(source)
        self.target = Path(target)
        super().__init__(message)


class SourceUnreadableError(TransferError):
    """Raised when a copy source exists but cannot be opened for reading."""

    pass


class DestinationUnwritableError(TransferError):
    """Raised when a copy destination cannot be created or truncated."""

    pass


class TapeWriteError(SamplerSyncError):
    """Raised when writing a tape onto the device stops at a track."""

    def __init__(self, track_number: int, message: str):
        self.track_number = track_number
        super().__init__(f"track_{track_number}: {message}")


class CollaboratorError(SamplerSyncError):
    """Raised when an external tool fails or cannot be started."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class EncodeError(CollaboratorError):
    """Raised when the encoder does not produce an mp3."""

    pass


class TagWriteError(CollaboratorError):
    """Raised when tags cannot be written to an mp3."""

    pass


class PublishError(CollaboratorError):
    """Raised when the remote sync tool fails."""

    pass


class PreviewError(CollaboratorError):
    """Raised when the preview player cannot be started."""

    pass
