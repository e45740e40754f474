# towboat/api/__init__.py
"""API layer for towboat"""

from .exceptions import (
    TowboatError,
    ConfigurationError,
    MissingSourceError,
    TargetExistsError,
    ManualModificationError,
    IoError,
    PathError,
)
from .runner import run_towboat

__all__ = [
    "run_towboat",

    # Exceptions
    "TowboatError",
    "ConfigurationError",
    "MissingSourceError",
    "TargetExistsError",
    "ManualModificationError",
    "IoError",
    "PathError",
]
