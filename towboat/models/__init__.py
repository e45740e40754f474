"""Data models for towboat"""

from .manifest import Manifest, TargetRule, DefaultPolicy, Resolution
from .cache import CacheEntry
from .config import RunConfig
from .result import OperationStatus, ItemState, Strategy, DeployAction, ItemResult, RunResult

__all__ = [
    # Manifest models
    "Manifest",
    "TargetRule",
    "DefaultPolicy",
    "Resolution",

    # Cache models
    "CacheEntry",

    # Config models
    "RunConfig",

    # Result models
    "OperationStatus",
    "ItemState",
    "Strategy",
    "DeployAction",
    "ItemResult",
    "RunResult",
]
