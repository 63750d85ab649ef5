"""
The mounted sampler.

A Device only exists once its mount path has passed structure validation;
``Device.open`` is the one way to get one. To revalidate, open it again.
"""

from pathlib import Path
from typing import Callable, Optional, Sequence

from loguru import logger

from ..core.exceptions import SamplerSyncError, StructureInvalidError, TapeWriteError
from .models import Album, Side, SideSlot, Tape, Track, TrackNumber
from .structure import DeviceLayout, find_missing
from .transfer import CopyProgressCallback, copy_file


class Device:
    """A validated sampler mount with its fixed album and tape assets.

    Build one with ``Device.open``; the constructor does no validation and
    is only called from there.
    """

    __slots__ = ("_mount_path", "_layout", "_album", "_tape")

    def __init__(self, mount_path: Path, layout: DeviceLayout, album: Album, tape: Tape):
        self._mount_path = mount_path
        self._layout = layout
        self._album = album
        self._tape = tape

    @classmethod
    def open(cls, mount_path: Path, layout: Optional[DeviceLayout] = None) -> "Device":
        """Validate a mount path and resolve its assets.

        Args:
            mount_path: Root of the sampler's storage
            layout: Expected directory names (default layout if omitted)

        Returns:
            Ready device

        Raises:
            RootNotFoundError: If the mount path is not a directory
            InaccessibleError: If the mount path cannot be listed
            StructureInvalidError: If any required entry is missing
        """
        mount_path = Path(mount_path)
        layout = layout or DeviceLayout()

        missing = find_missing(mount_path, layout.shape())
        if missing:
            logger.warning(f"Rejected device at {mount_path}: missing {missing}")
            raise StructureInvalidError(mount_path, missing)

        album = Album(
            side_a=Side(SideSlot.A, mount_path / layout.side_path(SideSlot.A.value)),
            side_b=Side(SideSlot.B, mount_path / layout.side_path(SideSlot.B.value)),
        )
        tape = Tape.from_paths(
            [mount_path / layout.track_path(number) for number in TrackNumber]
        )
        logger.info(f"Opened device at {mount_path}")
        return cls(mount_path, layout, album, tape)

    @property
    def mount_path(self) -> Path:
        return self._mount_path

    @property
    def layout(self) -> DeviceLayout:
        return self._layout

    @property
    def album(self) -> Album:
        return self._album

    @property
    def tape(self) -> Tape:
        return self._tape

    def write_tape(
        self,
        source_paths: Sequence[Path],
        progress: Optional[CopyProgressCallback] = None,
        on_track: Optional[Callable[[Track], None]] = None,
    ) -> None:
        """Copy four source files onto the device's tape, track 1 first.

        Tracks written before a failure stay overwritten on the device.

        Args:
            source_paths: One source per track, in track order
            progress: Byte progress callback passed to each copy
            on_track: Called with each Track before it is written

        Raises:
            TapeWriteError: Naming the first track that could not be written,
                including a missing source when fewer than four are given
        """
        if len(source_paths) < len(TrackNumber):
            missing = TrackNumber(len(source_paths) + 1)
            raise TapeWriteError(
                missing,
                f"no source given ({len(source_paths)} of {len(TrackNumber)} tracks supplied)",
            )

        for track, source in zip(self._tape.tracks(), source_paths):
            if on_track:
                on_track(track)
            logger.info(f"Writing {track} to device from {source}")
            try:
                copy_file(Path(source), track.path, progress=progress)
            except SamplerSyncError as e:
                logger.error(f"Writing {track} failed: {e}")
                raise TapeWriteError(track.number, str(e)) from e

    def __repr__(self) -> str:
        return f"Device({str(self._mount_path)!r})"
