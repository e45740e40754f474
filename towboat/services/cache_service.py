"""Persisted deployment cache used for drift detection"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from ..api.exceptions import IoError
from ..models.cache import CacheEntry
from ..utils.file_utils import atomic_write_text

logger = logging.getLogger(__name__)


class Cache:
    """Map from canonical deployed path to the provenance of its content

    Only materialized targets have entries. The cache is a heuristic: losing
    it turns drift conflicts into plain overwrites but never changes what
    gets deployed.
    """

    def __init__(self, entries: Optional[Dict[str, CacheEntry]] = None):
        self._entries: Dict[str, CacheEntry] = dict(entries or {})
        self.dirty = False

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, key: Union[str, Path]) -> Optional[CacheEntry]:
        """Look up the entry of a deployed path"""
        return self._entries.get(str(key))

    def upsert(self, key: Union[str, Path], entry: CacheEntry) -> None:
        """Insert or overwrite the entry of a deployed path"""
        self._entries[str(key)] = entry
        self.dirty = True

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Convert to dictionary"""
        return {key: entry.to_dict() for key, entry in sorted(self._entries.items())}

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, str]]) -> 'Cache':
        """Create from dictionary"""
        return cls({key: CacheEntry.from_dict(value) for key, value in data.items()})


class CacheStore:
    """Loads and saves a Cache from a JSON file"""

    def __init__(self, cache_path: Path):
        """Initialize cache store

        Args:
            cache_path: Path to the JSON cache file
        """
        self.cache_path = Path(cache_path)

    def load(self) -> Cache:
        """Load the cache

        A missing file yields an empty cache. An unreadable or corrupt file is
        reported and also yields an empty cache.
        """
        if not self.cache_path.exists():
            logger.debug("No cache at %s, starting empty", self.cache_path)
            return Cache()

        try:
            with open(self.cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value is not an object")
            cache = Cache.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(
                "Ignoring unreadable cache %s (%s); drift detection is disabled for this run",
                self.cache_path, e,
            )
            return Cache()

        logger.debug("Loaded %d cache entries from %s", len(cache), self.cache_path)
        return cache

    def save(self, cache: Cache) -> None:
        """Persist the cache

        Raises:
            IoError: If the file cannot be written
        """
        content = json.dumps(cache.to_dict(), indent=2, ensure_ascii=False) + "\n"
        try:
            atomic_write_text(self.cache_path, content)
        except OSError as e:
            raise IoError(f"Failed to save cache {self.cache_path}: {e}", self.cache_path) from e

        cache.dirty = False
        logger.debug("Saved %d cache entries to %s", len(cache), self.cache_path)
