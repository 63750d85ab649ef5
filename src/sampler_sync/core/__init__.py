"""Core infrastructure layer - no domain dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console management (Rich)
- Exception taxonomy
"""

# Configuration
from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
)

# Console
from .console import get_console, make_transfer_progress

# Output
from .output import log, setup_loguru, setup_from_config

# Exceptions
from .exceptions import (
    SamplerSyncError,
    StructureInvalidError,
    NotFoundError,
    RootNotFoundError,
    InaccessibleError,
    SourceNotFoundError,
    TransferError,
    SourceUnreadableError,
    DestinationUnwritableError,
    TapeWriteError,
    CollaboratorError,
    EncodeError,
    TagWriteError,
    PublishError,
    PreviewError,
)
