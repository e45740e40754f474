# towboat/models/manifest.py
"""Manifest models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import DEFAULT_BUILD_TAG


@dataclass
class TargetRule:
    """Inclusion rule for a file or a directory prefix"""
    tags: List[str]
    target: Optional[str] = None  # Target override (relative to target dir)

    def matches(self, build_tag: str) -> bool:
        """Check if the rule includes the build tag"""
        return build_tag in self.tags

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TargetRule':
        """Create from dictionary"""
        # Ordered set: keep first occurrence of each tag
        tags = list(dict.fromkeys(data['tags']))
        return cls(tags=tags, target=data.get('target'))


@dataclass
class DefaultPolicy:
    """Behaviour for paths no rule covers"""
    include_all: bool = False
    default_tag: str = DEFAULT_BUILD_TAG

    def includes(self, build_tag: str) -> bool:
        """Check if unmatched paths are included for the build tag"""
        return self.include_all and build_tag == self.default_tag

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DefaultPolicy':
        """Create from dictionary"""
        return cls(
            include_all=data.get('include_all', False),
            default_tag=data.get('default_tag', DEFAULT_BUILD_TAG),
        )


@dataclass
class Manifest:
    """Package manifest (boat.toml)"""
    path: Optional[Path] = None
    target_dir: Optional[str] = None
    build_tags: List[str] = field(default_factory=list)
    targets: Dict[str, TargetRule] = field(default_factory=dict)
    default: DefaultPolicy = field(default_factory=DefaultPolicy)

    @property
    def default_build_tag(self) -> Optional[str]:
        """First declared build tag, if any"""
        return self.build_tags[0] if self.build_tags else None

    def get_rule(self, key: str) -> Optional[TargetRule]:
        """Find the rule for an exact relative path key"""
        return self.targets.get(key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[Path] = None) -> 'Manifest':
        """Create from dictionary

        Keys of ``targets`` are expected to be normalized already.
        """
        default_data = data.get('default')
        return cls(
            path=path,
            target_dir=data.get('target_dir'),
            build_tags=list(data.get('build_tags', [])),
            targets={
                key: TargetRule.from_dict(rule)
                for key, rule in data.get('targets', {}).items()
            },
            default=DefaultPolicy.from_dict(default_data) if default_data else DefaultPolicy(),
        )


@dataclass(frozen=True)
class Resolution:
    """Inclusion decision for a single path"""
    included: bool
    target: str  # Target path relative to the target dir
