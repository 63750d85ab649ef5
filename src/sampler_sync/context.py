"""Application context for explicit state passing.

Bundles the loaded configuration with the library and (when mounted) the
device, so command handlers receive everything they need as one value.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from .core.config import Config
from .domain.collaborators import Encoder, Previewer, Publisher, TagWriter
from .domain.device import Device
from .domain.library import Library
from .domain.structure import DeviceLayout


def open_library(config: Config) -> Library:
    """Open the configured library with collaborators built from config."""
    return Library.open(
        Path(config.library.root),
        encoder=Encoder.from_config(config.encoder),
        tagger=TagWriter.from_config(config.tagging),
        publisher=Publisher.from_config(config.publish),
    )


def open_device(config: Config) -> Device:
    """Validate and open the configured device mount."""
    return Device.open(
        Path(config.device.mount_path), DeviceLayout.from_config(config.device)
    )


@dataclass(frozen=True)
class AppContext:
    """Everything a command needs.

    Attributes:
        config: Application configuration
        library: Opened library
        device: Opened device, or None for commands that do not touch it
        console: Rich Console for formatted output
    """

    config: Config
    library: Library
    device: Optional[Device] = None
    console: Optional[Console] = None

    @classmethod
    def create(
        cls, config: Config, with_device: bool = True, console: Optional[Console] = None
    ) -> "AppContext":
        """Open the library, and the device when ``with_device`` is set.

        Raises:
            SamplerSyncError: If either root fails validation
        """
        library = open_library(config)
        device = open_device(config) if with_device else None
        return cls(config=config, library=library, device=device, console=console)

    @property
    def artist(self) -> str:
        return self.config.library.artist

    def previewer(self) -> Previewer:
        return Previewer.from_config(self.config.preview)
