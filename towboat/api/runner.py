"""Runner API: discover a package and deploy or remove it"""

import logging
from typing import Callable, Optional

from ..core.file_discoverer import FileDiscoverer
from ..models.config import RunConfig
from ..models.result import ItemResult, OperationStatus, RunResult
from ..services.cache_service import CacheStore
from ..services.deploy_service import DeployService
from ..services.remove_service import RemoveService

logger = logging.getLogger(__name__)


def run_towboat(config: RunConfig,
                reporter: Optional[Callable[[ItemResult], None]] = None) -> RunResult:
    """
    Run towboat for one package

    Discovers the package's files for the build tag, then either removes
    their targets or deploys them. Items are processed one at a time and the
    first failure aborts the run; items handled before it stay in place. The
    cache is loaded once and saved once after a successful, non-dry-run
    deployment.

    Args:
        config: Resolved run configuration
        reporter: Called with each item's outcome as it happens

    Returns:
        RunResult with every item outcome

    Raises:
        TowboatError: On the first failing item or on configuration errors
    """
    result = RunResult(
        status=OperationStatus.IN_PROGRESS,
        build_tag=config.build_tag,
        target_dir=config.target_dir,
        mode=config.mode,
        dry_run=config.dry_run,
    )

    logger.info("Source: %s", config.package_dir)
    logger.info("Target: %s", config.target_dir)
    logger.info("Build tag: %s", config.build_tag)

    items = FileDiscoverer(config.build_tag).discover(config.package_dir)
    result.discovered = len(items)

    if not items:
        result.add_warning(f"No files found matching build tag '{config.build_tag}'")
        result.complete(OperationStatus.SUCCESS)
        return result

    logger.info("Found %d matching files", len(items))

    if config.remove:
        service = RemoveService(config.target_dir, config.package_dir,
                                dry_run=config.dry_run, reporter=reporter)
        for item in service.remove(items):
            result.add_item(item)
        result.complete(OperationStatus.SUCCESS)
        return result

    store = CacheStore(config.cache_path)
    cache = store.load()

    deployer = DeployService(config, cache, reporter=reporter)
    for item in deployer.deploy(items):
        result.add_item(item)

    if not config.dry_run and cache.dirty:
        store.save(cache)

    result.complete(OperationStatus.SUCCESS)
    return result
