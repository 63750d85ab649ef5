"""Device and library domain.

This domain handles:
- Slugs and library path layout
- Directory shape validation
- Byte copies with progress
- The sampler device and the local library
- Hand-off to external encoder, tagger, publisher and player
"""

from .paths import LibraryPaths, library_paths, slugify
from .models import (
    NO_SIDE,
    Album,
    Side,
    SideSlot,
    Song,
    Tape,
    Track,
    TrackNumber,
)
from .structure import (
    LIBRARY_SHAPE,
    DeviceLayout,
    Entry,
    check_structure,
    find_missing,
)
from .transfer import CopyProgressCallback, copy_file
from .collaborators import Encoder, Previewer, Publisher, TagWriter
from .device import Device
from .library import Library

__all__ = [
    # Paths
    "LibraryPaths",
    "library_paths",
    "slugify",
    # Models
    "NO_SIDE",
    "Album",
    "Side",
    "SideSlot",
    "Song",
    "Tape",
    "Track",
    "TrackNumber",
    # Structure
    "LIBRARY_SHAPE",
    "DeviceLayout",
    "Entry",
    "check_structure",
    "find_missing",
    # Transfer
    "CopyProgressCallback",
    "copy_file",
    # Collaborators
    "Encoder",
    "Previewer",
    "Publisher",
    "TagWriter",
    # Device / library
    "Device",
    "Library",
]
