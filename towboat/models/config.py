"""Run configuration models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..constants import DEFAULT_BUILD_TAG, CACHE_FILE_NAME


@dataclass
class RunConfig:
    """Fully resolved configuration of a single towboat invocation"""

    package_dir: Path
    stow_dir: Path
    target_dir: Path
    build_tag: str = DEFAULT_BUILD_TAG

    # Mode flags
    dry_run: bool = False
    force: bool = False
    adopt: bool = False
    remove: bool = False

    cache_path: Optional[Path] = None

    def __post_init__(self):
        self.package_dir = Path(self.package_dir)
        self.stow_dir = Path(self.stow_dir)
        self.target_dir = Path(self.target_dir)
        if self.cache_path is None:
            self.cache_path = self.stow_dir / CACHE_FILE_NAME
        else:
            self.cache_path = Path(self.cache_path)

    @property
    def mode(self) -> str:
        """Human readable mode name"""
        if self.remove:
            return "remove"
        if self.adopt:
            return "adopt"
        return "deploy"
