"""Towboat - A cross-platform dotfile manager with build tags.

Packages of dotfiles are projected into a target directory as symlinks, or as
processed copies when a file carries build-tag blocks for the active tag.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Core API
from .api.runner import run_towboat
from .core.tag_processor import TagProcessor, process
from .core.manifest_resolver import find_manifest, parse_manifest
from .core.file_discoverer import discover, DiscoveredItem
from .services.config_service import ConfigService
from .services.remove_service import Remover

# Data models
from .models import Manifest, CacheEntry, RunConfig, RunResult, ItemResult, ItemState

# Exceptions
from .api.exceptions import (
    TowboatError,
    ConfigurationError,
    MissingSourceError,
    TargetExistsError,
    ManualModificationError,
    IoError,
    PathError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Core API functions
    "run_towboat",
    "process",
    "discover",
    "find_manifest",
    "parse_manifest",

    # Main classes
    "TagProcessor",
    "ConfigService",
    "Remover",
    "DiscoveredItem",

    # Data models
    "Manifest",
    "CacheEntry",
    "RunConfig",
    "RunResult",
    "ItemResult",
    "ItemState",

    # Exceptions
    "TowboatError",
    "ConfigurationError",
    "MissingSourceError",
    "TargetExistsError",
    "ManualModificationError",
    "IoError",
    "PathError",
]
