"""Removal of deployed artifacts"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..api.exceptions import IoError
from ..constants import MSG_REMOVED, MSG_WOULD_REMOVE
from ..core.file_discoverer import DiscoveredItem
from ..core.path_resolver import find_linked_ancestor
from ..models.result import ItemResult, ItemState
from ..utils.file_utils import path_lexists, prune_empty_parents, remove_path

logger = logging.getLogger(__name__)


class Remover:
    """Deletes a deployed path and prunes the directories it leaves empty"""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def remove(self, target: Path) -> ItemState:
        """
        Remove a deployed target

        No-op when the target is absent. Otherwise the file or symlink (or
        directory tree) is deleted, then every ancestor directory that is now
        empty is deleted too, up to the first non-empty one.

        Args:
            target: Absolute target path

        Returns:
            ItemState.REMOVED or ItemState.ABSENT

        Raises:
            IoError: If deletion fails
        """
        if not path_lexists(target):
            return ItemState.ABSENT

        if self.dry_run:
            return ItemState.REMOVED

        try:
            remove_path(target)
            pruned = prune_empty_parents(target)
        except OSError as e:
            raise IoError(f"Failed to remove {target}: {e}", target) from e

        if pruned:
            logger.info("Pruned %d empty directories above %s", len(pruned), target)
        return ItemState.REMOVED


class RemoveService:
    """Removes every deployed item of a package from the target directory"""

    def __init__(self, target_dir: Path, package_root: Path, dry_run: bool = False,
                 reporter: Optional[Callable[[ItemResult], None]] = None):
        """Initialize remove service

        Args:
            target_dir: Target directory of the deployment
            package_root: Root directory of the package being removed
            dry_run: Report without deleting
            reporter: Called with each item's outcome as it happens
        """
        self.target_dir = Path(target_dir)
        self.package_root = Path(package_root)
        self.dry_run = dry_run
        self.reporter = reporter
        self.remover = Remover(dry_run=dry_run)

    def remove(self, items: Iterable[DiscoveredItem]) -> List[ItemResult]:
        """Remove items sequentially, aborting on the first failure"""
        results = []
        for item in items:
            target = self.target_dir / item.target

            via = find_linked_ancestor(target, item.source, self.package_root)
            if via is not None:
                # Deleting through the linked ancestor would delete the source
                state = ItemState.SKIPPED
                message = f"Skipped {target}: provided by linked directory {via}"
            else:
                state = self.remover.remove(target)
                if state == ItemState.ABSENT:
                    message = f"Not deployed: {target}"
                elif self.dry_run:
                    message = MSG_WOULD_REMOVE.format(target=target)
                else:
                    message = MSG_REMOVED.format(target=target)

            result = ItemResult(item.source, target, state, message, dry_run=self.dry_run)
            results.append(result)
            if self.reporter:
                self.reporter(result)
        return results
