"""
Configuration management for sampler-sync
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger


@dataclass
class DeviceConfig:
    """Configuration for the mounted sampler."""

    mount_path: str = "/media/op1"
    album_dir: str = "album"
    tape_dir: str = "tape"
    required_dirs: List[str] = field(default_factory=lambda: ["drum", "synth"])
    extension: str = ".aif"


@dataclass
class LibraryConfig:
    """Configuration for the local song archive."""

    root: str = str(Path.home() / "Music" / "sampler")
    artist: str = "Unknown Artist"


@dataclass
class EncoderConfig:
    """Configuration for aif -> mp3 encoding."""

    binary: str = "ffmpeg"
    bitrate: str = "320k"


@dataclass
class TaggingConfig:
    """Configuration for mp3 tag writing."""

    comment: str = "large rabbit"


@dataclass
class PublishConfig:
    """Configuration for remote sync of encoded songs."""

    binary: str = "rsync"
    args: List[str] = field(default_factory=lambda: ["-av"])
    destination: str = "snoot:music"


@dataclass
class PreviewConfig:
    """Configuration for audio preview."""

    binary: str = "mpv"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/sampler-sync/sampler-sync.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    device: DeviceConfig = field(default_factory=DeviceConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    encoder: EncoderConfig = field(default_factory=EncoderConfig)
    tagging: TaggingConfig = field(default_factory=TaggingConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "sampler-sync"
    return Path.home() / ".config" / "sampler-sync"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/sampler-sync (or ~/.config/sampler-sync)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "sampler-sync"
    return Path.home() / ".local" / "share" / "sampler-sync"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# sampler-sync configuration

[device]
# Where the sampler's storage is mounted
mount_path = "/media/op1"

# Directory names the device must expose
album_dir = "album"
tape_dir = "tape"
required_dirs = ["drum", "synth"]

# Extension of the album sides and tape tracks
extension = ".aif"

[library]
# Local archive; must contain a songs/ directory
root = "~/Music/sampler"

# Artist written into mp3 tags
artist = "Unknown Artist"

[encoder]
binary = "ffmpeg"
bitrate = "320k"

[tagging]
# Comment frame written into every mp3
comment = "large rabbit"

[publish]
binary = "rsync"
args = ["-av"]
# Remote directory handed to rsync
destination = "snoot:music"

[preview]
binary = "mpv"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/sampler-sync/sampler-sync.log)
# log_file = "/path/to/custom/sampler-sync.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def _expand(path: str) -> str:
    return str(Path(path).expanduser())


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML, falling back to defaults per key."""
    config = Config()

    if "device" in toml_data:
        device_data = toml_data["device"]
        config.device = DeviceConfig(
            mount_path=_expand(
                device_data.get("mount_path", config.device.mount_path)
            ),
            album_dir=device_data.get("album_dir", config.device.album_dir),
            tape_dir=device_data.get("tape_dir", config.device.tape_dir),
            required_dirs=list(
                device_data.get("required_dirs", config.device.required_dirs)
            ),
            extension=device_data.get("extension", config.device.extension),
        )

    if "library" in toml_data:
        library_data = toml_data["library"]
        config.library = LibraryConfig(
            root=_expand(library_data.get("root", config.library.root)),
            artist=library_data.get("artist", config.library.artist),
        )

    if "encoder" in toml_data:
        encoder_data = toml_data["encoder"]
        config.encoder = EncoderConfig(
            binary=encoder_data.get("binary", config.encoder.binary),
            bitrate=encoder_data.get("bitrate", config.encoder.bitrate),
        )

    if "tagging" in toml_data:
        config.tagging = TaggingConfig(
            comment=toml_data["tagging"].get("comment", config.tagging.comment),
        )

    if "publish" in toml_data:
        publish_data = toml_data["publish"]
        config.publish = PublishConfig(
            binary=publish_data.get("binary", config.publish.binary),
            args=list(publish_data.get("args", config.publish.args)),
            destination=publish_data.get(
                "destination", config.publish.destination
            ),
        )

    if "preview" in toml_data:
        config.preview = PreviewConfig(
            binary=toml_data["preview"].get("binary", config.preview.binary),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = _expand(log_file)
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config


def apply_env_overrides(config: Config) -> Config:
    """Override roots and artist from the environment.

    - SAMPLER_SYNC_DEVICE
    - SAMPLER_SYNC_LIBRARY
    - SAMPLER_SYNC_ARTIST
    """
    device_path = os.environ.get("SAMPLER_SYNC_DEVICE")
    library_root = os.environ.get("SAMPLER_SYNC_LIBRARY")
    artist = os.environ.get("SAMPLER_SYNC_ARTIST")

    if device_path:
        config.device.mount_path = _expand(device_path)
    if library_root:
        config.library.root = _expand(library_root)
    if artist:
        config.library.artist = artist

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables (optionally from a .env file in the config
    directory) override TOML values.
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        logger.info(f"Created default configuration at: {config_path}")
        return apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        return apply_env_overrides(Config())

    return apply_env_overrides(parse_config(toml_data))

