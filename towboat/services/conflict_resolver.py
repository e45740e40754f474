# towboat/services/conflict_resolver.py
"""Conflict resolution for targets that already exist"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..api.exceptions import IoError
from ..core.path_resolver import canonical_path, canonical_location
from ..models.result import ItemState, Strategy
from ..utils.file_utils import path_lexists
from ..utils.hash_utils import calculate_sha256
from .cache_service import Cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Decision taken for an existing target

    ``state`` is set when the item stops here; otherwise deployment proceeds
    and ``replace_existing`` tells whether the current target must go first.
    """
    state: Optional[ItemState] = None
    replace_existing: bool = False
    drift: bool = False

    @property
    def proceeds(self) -> bool:
        return self.state is None


class ConflictResolver:
    """Decides what to do with a target that is already present"""

    def __init__(self, cache: Cache, force: bool = False):
        """Initialize conflict resolver

        Args:
            cache: Deployment cache used to detect drift
            force: Overwrite conflicting targets
        """
        self.cache = cache
        self.force = force

    def resolve(self,
                source: Path,
                target: Path,
                strategy: Strategy,
                deployed_hash: Optional[str] = None) -> Resolution:
        """
        Resolve an existing target against the intended deployment

        Args:
            source: Source file
            target: Absolute target path
            strategy: Strategy chosen for the source
            deployed_hash: Hash of the processed output (processed strategy)

        Returns:
            Resolution for the target
        """
        if not path_lexists(target):
            return Resolution()

        is_link = target.is_symlink()

        if is_link and canonical_path(target) == canonical_path(source):
            return Resolution(ItemState.ALREADY_CORRECT)

        if target.is_dir() and not is_link:
            # Directories are never replaced, even with force
            logger.debug("Target %s is a directory", target)
            return Resolution(ItemState.BLOCKED_TARGET_EXISTS)

        conflict = True
        drift = False

        if strategy == Strategy.PROCESSED and not is_link:
            entry = self.cache.get(canonical_location(target))
            if entry is not None:
                live_hash = self._live_hash(target)
                if live_hash != entry.deployed_hash:
                    drift = True
                    if not self.force:
                        return Resolution(ItemState.BLOCKED_MANUAL_MODIFICATION, drift=True)
                    logger.warning("Overwriting manual modifications of %s (--force)", target)
                elif live_hash == deployed_hash:
                    return Resolution(ItemState.ALREADY_CORRECT)
                else:
                    # Deployed by us and untouched, only outdated
                    conflict = False

        if conflict and not self.force:
            return Resolution(ItemState.BLOCKED_TARGET_EXISTS)

        return Resolution(replace_existing=True, drift=drift)

    @staticmethod
    def _live_hash(target: Path) -> str:
        """Hash the current content of a target"""
        try:
            return calculate_sha256(target)
        except OSError as e:
            raise IoError(f"Failed to read target {target}: {e}", target) from e
