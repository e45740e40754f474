"""Run configuration resolution"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import ConfigurationError
from ..constants import CACHE_ENV_VAR, CACHE_FILE_NAME, DEFAULT_BUILD_TAG, DEFAULT_TARGET_DIR
from ..core.manifest_resolver import find_manifest, parse_manifest
from ..core.path_resolver import absolutize, expand_path
from ..models.config import RunConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Builds a RunConfig from command line values and the package manifest"""

    def __init__(self, home: Optional[str] = None):
        """Initialize config service

        Args:
            home: Home directory used for ``~`` expansion (defaults to $HOME)
        """
        self.home = home

    def resolve(self,
                package: str,
                stow_dir: Union[str, Path] = ".",
                target: str = DEFAULT_TARGET_DIR,
                build_tag: Optional[str] = None,
                dry_run: bool = False,
                force: bool = False,
                adopt: bool = False,
                remove: bool = False) -> RunConfig:
        """
        Resolve the configuration of one run

        The manifest's ``target_dir`` overrides the command line target. The
        build tag comes from the command line, else from the manifest's first
        ``build_tags`` entry, else it is ``default``.

        Args:
            package: Package name inside the stow directory
            stow_dir: Directory containing packages
            target: Target directory (``~`` expands to the home directory)
            build_tag: Build tag given on the command line
            dry_run: Show what would be done without making changes
            force: Overwrite existing targets
            adopt: Copy existing targets back into the package
            remove: Remove deployed targets

        Returns:
            Resolved run configuration

        Raises:
            ConfigurationError: If the package is missing or flags conflict
        """
        if adopt and remove:
            raise ConfigurationError("--adopt and --remove cannot be used together")

        stow_dir = absolutize(stow_dir)
        package_dir = stow_dir / package
        if not package_dir.is_dir():
            raise ConfigurationError(f"Source directory does not exist: {package_dir}", package_dir)

        target_dir = expand_path(target, self.home)
        tag = build_tag

        manifest_path = find_manifest(package_dir)
        if manifest_path is not None:
            try:
                manifest = parse_manifest(manifest_path)
            except ConfigurationError as e:
                # Discovery parses the manifest again and reports the error
                logger.debug("Using command line defaults: %s", e)
            else:
                if manifest.target_dir is not None:
                    target_dir = expand_path(manifest.target_dir, self.home)
                if tag is None:
                    tag = manifest.default_build_tag

        return RunConfig(
            package_dir=package_dir,
            stow_dir=stow_dir,
            target_dir=absolutize(target_dir),
            build_tag=tag or DEFAULT_BUILD_TAG,
            dry_run=dry_run,
            force=force,
            adopt=adopt,
            remove=remove,
            cache_path=self.cache_path(stow_dir),
        )

    @staticmethod
    def cache_path(stow_dir: Path) -> Path:
        """Get cache file path

        Returns:
            Path from the environment variable, else inside the stow directory
        """
        cache_path = os.environ.get(CACHE_ENV_VAR)
        if cache_path:
            return absolutize(expand_path(cache_path))
        return stow_dir / CACHE_FILE_NAME
