"""Deployment cache models"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class CacheEntry:
    """Provenance of a materialized (processed) target"""
    source_path: str
    source_hash: str
    deployed_path: str
    deployed_hash: str
    build_tag: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary"""
        return {
            'source_path': self.source_path,
            'source_hash': self.source_hash,
            'deployed_path': self.deployed_path,
            'deployed_hash': self.deployed_hash,
            'build_tag': self.build_tag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CacheEntry':
        """Create from dictionary"""
        return cls(
            source_path=str(data['source_path']),
            source_hash=str(data['source_hash']),
            deployed_path=str(data['deployed_path']),
            deployed_hash=str(data['deployed_hash']),
            build_tag=str(data['build_tag']),
        )
