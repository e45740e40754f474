"""Discovery of deployable files in a package tree"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import List, NamedTuple

from ..api.exceptions import IoError
from ..constants import MANIFEST_FILE_NAME
from .manifest_resolver import ManifestResolver
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


class DiscoveredItem(NamedTuple):
    """A source file and its target path relative to the target dir"""
    source: Path
    target: Path


class FileDiscoverer:
    """Walks a package and collects the files to deploy for a build tag"""

    def __init__(self, build_tag: str):
        """Initialize file discoverer

        Args:
            build_tag: Active build tag
        """
        self.build_tag = build_tag

    def discover(self, package_root: Path) -> List[DiscoveredItem]:
        """Discover deployable files of a package

        Subdirectories carrying their own manifest are discovered as
        independent packages; their targets are placed under the
        subdirectory's relative path.

        Args:
            package_root: Root directory of the package

        Returns:
            (source, target) pairs in walk order

        Raises:
            ConfigurationError: If no manifest governs the package
            IoError: If the tree cannot be walked
        """
        package_root = Path(package_root)
        resolver = ManifestResolver.for_package(package_root)
        paths = PathResolver(package_root)
        items = []

        def on_error(error: OSError) -> None:
            raise IoError(f"Failed to read directory {error.filename}: {error.strerror}",
                          error.filename)

        for dirpath, dirnames, filenames in os.walk(package_root, onerror=on_error):
            current = Path(dirpath)

            # Sorted for a stable order within a run
            dirnames.sort()
            for dirname in list(dirnames):
                subdir = current / dirname
                if subdir.is_symlink():
                    # Not followed; treated as a file candidate below
                    dirnames.remove(dirname)
                    filenames.append(dirname)
                elif (subdir / MANIFEST_FILE_NAME).is_file():
                    dirnames.remove(dirname)
                    items.extend(self._discover_nested(subdir, paths))

            for filename in sorted(filenames):
                if filename == MANIFEST_FILE_NAME:
                    continue

                path = current / filename
                if path.is_symlink() and not path.exists():
                    logger.warning("Skipping broken symlink: %s", path)
                    continue
                if not path.is_file():
                    logger.debug("Skipping non-file entry: %s", path)
                    continue

                key = paths.relative_key(path)
                resolution = resolver.resolve(key, self.build_tag)
                if resolution.included:
                    logger.debug("Including %s -> %s", key, resolution.target)
                    items.append(DiscoveredItem(path, Path(resolution.target)))
                else:
                    logger.debug("Excluding %s for tag %s", key, self.build_tag)

        return items

    def _discover_nested(self, subdir: Path, paths: PathResolver) -> List[DiscoveredItem]:
        """Discover a nested package and rebase its targets"""
        prefix = PurePosixPath(paths.relative_key(subdir))
        logger.info("Discovering nested package %s", subdir)

        return [
            DiscoveredItem(item.source, Path(prefix / item.target.as_posix()))
            for item in self.discover(subdir)
        ]


def discover(package_root: Path, build_tag: str) -> List[DiscoveredItem]:
    """Discover deployable files of a package for a build tag"""
    return FileDiscoverer(build_tag).discover(package_root)
