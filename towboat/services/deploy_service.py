"""Deploy service: per-item planning and application

Planning decides what happens to an item from the current filesystem state
without changing anything; applying performs the decided action. A dry run
plans every item and only describes what applying would do.
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..api.exceptions import (
    IoError,
    MissingSourceError,
    TargetExistsError,
    ManualModificationError,
)
from ..constants import (
    MSG_ADOPTED,
    MSG_ALREADY_CORRECT,
    MSG_DRIFT_OVERWRITTEN,
    MSG_MATERIALIZED,
    MSG_SYMLINKED,
    MSG_WOULD_ADOPT,
    MSG_WOULD_CREATE_DIR,
    MSG_WOULD_MATERIALIZE,
    MSG_WOULD_SYMLINK,
)
from ..core.file_discoverer import DiscoveredItem
from ..core.path_resolver import (
    canonical_location,
    canonical_path,
    find_linked_ancestor,
)
from ..core.tag_processor import TagProcessor
from ..models.cache import CacheEntry
from ..models.config import RunConfig
from ..models.result import DeployAction, ItemResult, ItemState, Strategy
from ..utils.file_utils import copy_file, remove_path
from ..utils.hash_utils import calculate_content_hash
from .cache_service import Cache
from .conflict_resolver import ConflictResolver

logger = logging.getLogger(__name__)

Reporter = Callable[[ItemResult], None]


class DeploymentPlanner:
    """Computes the action for an item without side effects"""

    def __init__(self,
                 cache: Cache,
                 build_tag: str,
                 package_root: Path,
                 force: bool = False,
                 adopt: bool = False):
        """Initialize deployment planner

        Args:
            cache: Deployment cache (read only here)
            build_tag: Active build tag
            package_root: Root directory of the package being deployed
            force: Overwrite conflicting targets
            adopt: Pull existing targets back into the package
        """
        self.processor = TagProcessor(build_tag)
        self.conflicts = ConflictResolver(cache, force=force)
        self.build_tag = build_tag
        self.package_root = Path(package_root)
        self.adopt = adopt

    def plan(self, source: Path, target: Path) -> DeployAction:
        """
        Plan deployment of one source to an absolute target

        Args:
            source: Source file in the package
            target: Absolute target path

        Returns:
            Planned action

        Raises:
            MissingSourceError: If the source no longer exists
            IoError: If the source cannot be read
        """
        if not source.exists():
            raise MissingSourceError(source)

        via = find_linked_ancestor(target, source, self.package_root)
        if via is not None:
            logger.debug("%s is reachable through linked ancestor %s", target, via)
            return DeployAction(source, target, ItemState.ALREADY_CORRECT, via=via)

        if self.adopt and target.exists():
            if canonical_path(target) == canonical_path(source):
                return DeployAction(source, target, ItemState.ALREADY_CORRECT)
            return DeployAction(source, target, ItemState.ADOPTED_BACK)

        create_parent = not target.parent.is_dir()

        try:
            raw = source.read_bytes()
        except OSError as e:
            raise IoError(f"Failed to read source file {source}: {e}", source) from e

        text = self._decode(raw)
        if self.processor.applies_to(text):
            content = self.processor.process(text).encode("utf-8")
            action = DeployAction(
                source, target, ItemState.MATERIALIZED,
                strategy=Strategy.PROCESSED,
                content=content,
                source_hash=calculate_content_hash(raw),
                deployed_hash=calculate_content_hash(content),
                cache_key=str(canonical_location(target)),
            )
        else:
            action = DeployAction(source, target, ItemState.SYMLINKED, strategy=Strategy.VERBATIM)

        action.create_parent = create_parent

        resolution = self.conflicts.resolve(source, target, action.strategy, action.deployed_hash)
        action.drift = resolution.drift
        if not resolution.proceeds:
            action.state = resolution.state
        else:
            action.replace_existing = resolution.replace_existing

        return action

    @staticmethod
    def _decode(raw: bytes) -> Optional[str]:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None


class DeployService:
    """Deploys discovered items into the target directory"""

    def __init__(self, config: RunConfig, cache: Cache, reporter: Optional[Reporter] = None):
        """Initialize deploy service

        Args:
            config: Run configuration
            cache: Deployment cache, updated on materialization
            reporter: Called with each item's outcome as it happens
        """
        self.config = config
        self.cache = cache
        self.reporter = reporter
        self.planner = DeploymentPlanner(
            cache,
            config.build_tag,
            config.package_dir,
            force=config.force,
            adopt=config.adopt,
        )

    def deploy(self, items: Iterable[DiscoveredItem]) -> List[ItemResult]:
        """
        Deploy items sequentially, aborting on the first failure

        Args:
            items: Discovered (source, relative target) pairs

        Returns:
            Outcome of every item
        """
        results = []
        for item in items:
            target = self.config.target_dir / item.target
            logger.info("Processing: %s -> %s", item.source, target)

            action = self.planner.plan(item.source, target)
            result = self.apply(action)

            results.append(result)
            if self.reporter:
                self.reporter(result)
        return results

    def apply(self, action: DeployAction) -> ItemResult:
        """
        Carry out a planned action

        Raises:
            TargetExistsError: If the action is blocked by an existing target
            ManualModificationError: If the action is blocked by drift
            IoError: If a filesystem operation fails
        """
        if action.state == ItemState.BLOCKED_TARGET_EXISTS:
            raise TargetExistsError(action.target)
        if action.state == ItemState.BLOCKED_MANUAL_MODIFICATION:
            raise ManualModificationError(action.target)

        if action.state == ItemState.ALREADY_CORRECT:
            return self._result(action, MSG_ALREADY_CORRECT.format(target=action.target))

        if self.config.dry_run:
            return self._describe(action)

        try:
            if action.state == ItemState.ADOPTED_BACK:
                copy_file(action.target, action.source)
                return self._result(action, MSG_ADOPTED.format(
                    target=action.target, source=action.source))

            if action.create_parent:
                action.target.parent.mkdir(parents=True, exist_ok=True)
            if action.replace_existing:
                remove_path(action.target)

            if action.strategy == Strategy.PROCESSED:
                self._materialize(action)
                message = MSG_MATERIALIZED.format(target=action.target)
                if action.drift:
                    message += MSG_DRIFT_OVERWRITTEN
                return self._result(action, message)

            action.target.symlink_to(canonical_path(action.source))
            return self._result(action, MSG_SYMLINKED.format(
                target=action.target, source=action.source))

        except OSError as e:
            raise IoError(
                f"Failed to deploy {action.source} to {action.target}: {e}", action.target
            ) from e

    def _materialize(self, action: DeployAction) -> None:
        """Write processed content and record it in the cache"""
        action.target.write_bytes(action.content)
        shutil.copymode(action.source, action.target)

        self.cache.upsert(action.cache_key, CacheEntry(
            source_path=str(action.source),
            source_hash=action.source_hash,
            deployed_path=str(action.target),
            deployed_hash=action.deployed_hash,
            build_tag=self.config.build_tag,
        ))

    def _describe(self, action: DeployAction) -> ItemResult:
        """Describe an action instead of applying it"""
        lines = []
        if action.state == ItemState.ADOPTED_BACK:
            lines.append(MSG_WOULD_ADOPT.format(target=action.target, source=action.source))
        else:
            if action.create_parent:
                lines.append(MSG_WOULD_CREATE_DIR.format(path=action.target.parent))
            template = (MSG_WOULD_MATERIALIZE if action.strategy == Strategy.PROCESSED
                        else MSG_WOULD_SYMLINK)
            lines.append(template.format(source=action.source, target=action.target))
        return self._result(action, "\n".join(lines))

    def _result(self, action: DeployAction, message: str) -> ItemResult:
        return ItemResult(
            source=action.source,
            target=action.target,
            state=action.state,
            message=message,
            dry_run=self.config.dry_run,
            drift=action.drift,
        )
