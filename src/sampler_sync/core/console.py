"""Centralized Rich Console management.

Provides the shared Console instance plus the byte-progress bars used while
files are copied between the device and the library.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)

_console: Console | None = None


def get_console() -> Console:
    """Get or create the global Rich Console instance.

    Returns:
        Console: The global Rich Console instance
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def make_transfer_progress() -> Progress:
    """Create a progress display sized in bytes.

    Returns:
        Progress: Unstarted progress display bound to the global console
    """
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=get_console(),
        transient=False,
    )


class TransferReporter:
    """Feeds copy progress callbacks into a rich Progress display.

    Call ``label`` before each copy; the first progress callback of that
    copy creates its bar.
    """

    def __init__(self, progress: Progress):
        self.progress = progress
        self._label = "copying"
        self._task = None

    def label(self, description: str) -> None:
        self._label = description
        self._task = None

    def __call__(self, transferred: int, total: int, done: bool) -> None:
        if self._task is None:
            self._task = self.progress.add_task(self._label, total=total)
        self.progress.update(self._task, completed=transferred)
        if done:
            self._task = None
