"""Core functionality for towboat"""

from .path_resolver import PathResolver
from .tag_processor import TagProcessor, process, has_start_marker
from .manifest_resolver import ManifestResolver, find_manifest, parse_manifest, resolve
from .file_discoverer import FileDiscoverer, DiscoveredItem, discover

__all__ = [
    "PathResolver",
    "TagProcessor",
    "process",
    "has_start_marker",
    "ManifestResolver",
    "find_manifest",
    "parse_manifest",
    "resolve",
    "FileDiscoverer",
    "DiscoveredItem",
    "discover",
]
