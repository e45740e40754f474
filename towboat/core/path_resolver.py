"""Path resolution module for towboat"""

import os
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from ..api.exceptions import PathError


class PathResolver:
    """Resolves paths between a package and its deployment target"""

    def __init__(self, package_root: Union[str, Path]):
        """Initialize path resolver

        Args:
            package_root: Root directory of the package
        """
        self.package_root = Path(package_root)

    def relative_key(self, path: Union[str, Path]) -> str:
        """Get the manifest key of a path inside the package

        Args:
            path: Path under the package root

        Returns:
            POSIX-style relative path string

        Raises:
            PathError: If path is not under the package root
        """
        try:
            relative = Path(path).relative_to(self.package_root)
        except ValueError as e:
            raise PathError(
                f"Path {path} is outside of package root {self.package_root}", path
            ) from e
        return relative.as_posix()


def expand_path(path: str, home: Optional[str] = None) -> Path:
    """Expand a leading ``~`` or ``~/`` to the home directory

    Args:
        path: Path string to expand
        home: Home directory (defaults to $HOME)

    Returns:
        Expanded path
    """
    if home is None:
        home = os.path.expanduser("~")

    if path == "~":
        return Path(home)
    if path.startswith("~/"):
        return Path(home) / path[2:]
    return Path(path)


def absolutize(path: Union[str, Path]) -> Path:
    """Make a path absolute against the current directory without resolving links"""
    path = Path(path)
    if path.is_absolute():
        return path
    return Path.cwd() / path


def canonical_path(path: Union[str, Path]) -> Path:
    """Resolve all symlinks of a path"""
    return Path(os.path.realpath(path))


def canonical_location(path: Union[str, Path]) -> Path:
    """Canonicalize the location of a path without following the path itself

    The parent directory is resolved, the final component is kept, so a
    symlink at ``path`` keys on its own location rather than its destination.
    """
    path = absolutize(path)
    return canonical_path(path.parent) / path.name


def is_path_prefix(prefix: Path, path: Path) -> bool:
    """Check component-wise that ``prefix`` is an ancestor of (or equal to) ``path``"""
    return path == prefix or prefix in path.parents


def find_linked_ancestor(target: Path, source: Path, package_root: Path) -> Optional[Path]:
    """Find an ancestor symlink of target that already points into source

    An ancestor qualifies when its canonical resolution is a path-prefix of
    the canonical source and lies inside the canonical package root. A
    symlinked home directory resolves above the package and never qualifies.

    Args:
        target: Absolute target path
        source: Source file the target should expose
        package_root: Root directory of the package being deployed

    Returns:
        The first qualifying ancestor symlink (innermost first), or None
    """
    canonical_source = canonical_path(source)
    canonical_root = canonical_path(package_root)

    for ancestor in absolutize(target).parents:
        if not ancestor.is_symlink():
            continue
        resolved = canonical_path(ancestor)
        if is_path_prefix(resolved, canonical_source) and is_path_prefix(canonical_root, resolved):
            return ancestor
    return None


def posix_key(key: str) -> str:
    """Normalize a manifest path key to POSIX relative form"""
    normalized = PurePosixPath(key.replace("\\", "/")).as_posix()
    if normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.rstrip("/")
