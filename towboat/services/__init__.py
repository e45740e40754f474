# towboat/services/__init__.py
"""Business logic services for towboat"""

from .cache_service import Cache, CacheStore
from .config_service import ConfigService
from .conflict_resolver import ConflictResolver
from .deploy_service import DeployService, DeploymentPlanner
from .remove_service import Remover, RemoveService

__all__ = [
    "Cache",
    "CacheStore",
    "ConfigService",
    "ConflictResolver",
    "DeployService",
    "DeploymentPlanner",
    "Remover",
    "RemoveService",
]
