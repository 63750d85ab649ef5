"""Multi-step flows between the device and the library.

Each flow runs its steps in order and stops at the first failure; whatever
was already written stays on disk.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from .core.output import log
from .domain.device import Device
from .domain.library import Library
from .domain.models import Side, SideSlot, Song, Track
from .domain.transfer import CopyProgressCallback

# Called with a short label before each copy (e.g. "side_a", "track_3")
StepCallback = Callable[[str], None]


@dataclass
class SaveOptions:
    """Which steps of the save chain to run after copying the album side."""

    with_tape: bool = False
    encode: bool = True
    tag: bool = True
    publish: bool = False


@dataclass
class SaveResult:
    """Paths produced by a save; unset fields are steps that did not run."""

    song: Song
    aif: Optional[Path] = None
    tape_tracks: list[Path] = field(default_factory=list)
    mp3: Optional[Path] = None
    remote: Optional[str] = None


def save_song(
    device: Device,
    library: Library,
    side: Side,
    name: str,
    artist: str,
    options: Optional[SaveOptions] = None,
    progress: Optional[CopyProgressCallback] = None,
    on_step: Optional[StepCallback] = None,
) -> SaveResult:
    """
    Save an album side (and optionally the tape) as a library song.

    Runs album copy -> tape copy -> encode -> tag -> publish, skipping the
    steps disabled in ``options``. Encoding is required for tagging and
    publishing; if it is skipped, those steps act on whatever mp3 is
    already in the song directory.

    Args:
        device: Opened device
        library: Opened library
        side: Album side to save; NO_SIDE is rejected
        name: Human-entered song name, slugified for paths
        artist: Artist for the mp3 tag
        options: Steps to run
        progress: Byte progress callback for every copy
        on_step: Called with a label before each copy

    Returns:
        SaveResult with every path written

    Raises:
        ValueError: If no side was picked or the name has no usable slug
        SamplerSyncError: From the first step that fails
    """
    if side.slot is SideSlot.NEITHER or side.path is None:
        raise ValueError("No album side selected")

    options = options or SaveOptions()
    song = Song.create(name, artist)
    result = SaveResult(song=song)

    def announce(label: str) -> None:
        if on_step:
            on_step(label)

    log(f"Copying {side} to {song.slug}")
    announce(side.name)
    result.aif = library.save_album(song, side.path, progress=progress)

    if options.with_tape:
        log("Copying tape")

        def on_track(track: Track) -> None:
            announce(track.name)

        result.tape_tracks = library.save_tape(
            song, device.tape.tracks(), progress=progress, on_track=on_track
        )

    if options.encode:
        log("Creating mp3")
        result.mp3 = library.encode(song)

    if options.tag:
        log("Tagging mp3")
        result.mp3 = library.tag(song)

    if options.publish:
        log("Uploading mp3")
        result.remote = library.publish(song)

    logger.info(f"Saved {song.display_name} ({song.slug})")
    return result


def load_tape(
    device: Device,
    library: Library,
    slug: str,
    progress: Optional[CopyProgressCallback] = None,
    on_step: Optional[StepCallback] = None,
) -> list[Path]:
    """
    Write a saved tape from the library back onto the device.

    Returns:
        Library track paths that were written, in track order

    Raises:
        TapeWriteError: Naming the first track that failed
    """
    sources = library.load_tape_track_paths(slug)

    def on_track(track: Track) -> None:
        log(f"Writing {track} to device")
        if on_step:
            on_step(track.name)

    device.write_tape(sources, progress=progress, on_track=on_track)
    logger.info(f"Loaded tape {slug} onto {device.mount_path}")
    return sources
