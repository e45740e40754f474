"""Manifest discovery, parsing and per-path inclusion decisions"""

import logging
import tomllib
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, Any, Optional

import jsonschema

from ..api.exceptions import ConfigurationError, IoError
from ..constants import MANIFEST_FILE_NAME
from ..models.manifest import Manifest, Resolution
from ..utils.file_utils import read_text_or_none
from .path_resolver import posix_key
from .tag_processor import has_start_marker

logger = logging.getLogger(__name__)

# Returns the text of a regular file, or None for anything else
ContentReader = Callable[[str], Optional[str]]

_TAG_LIST = {
    "type": "array",
    "items": {"type": "string", "minLength": 1},
}

MANIFEST_SCHEMA = {
    "type": "object",
    "properties": {
        "target_dir": {"type": "string"},
        "build_tags": _TAG_LIST,
        "targets": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "target": {"type": "string", "minLength": 1},
                    "tags": _TAG_LIST,
                },
                "required": ["tags"],
                "additionalProperties": False,
            },
        },
        "default": {
            "type": "object",
            "properties": {
                "include_all": {"type": "boolean"},
                "default_tag": {"type": "string", "minLength": 1},
            },
            "required": ["include_all"],
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


def find_manifest(directory: Path) -> Optional[Path]:
    """Find the nearest manifest searching upward from a directory

    Args:
        directory: Directory to start searching from

    Returns:
        Path to the manifest file, or None when the filesystem root is reached
    """
    current = Path(directory)
    while True:
        candidate = current / MANIFEST_FILE_NAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def parse_manifest(path: Path) -> Manifest:
    """Parse and validate a manifest file

    Args:
        path: Path to boat.toml

    Returns:
        Parsed manifest

    Raises:
        ConfigurationError: If the file is missing, unparsable or malformed
    """
    path = Path(path)

    try:
        with open(path, 'rb') as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Manifest not found: {path}", path) from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read manifest {path}: {e}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse manifest {path}: {e}", path) from e

    try:
        jsonschema.validate(data, MANIFEST_SCHEMA)
    except jsonschema.ValidationError as e:
        location = "/".join(str(part) for part in e.absolute_path) or "<root>"
        raise ConfigurationError(
            f"Invalid manifest {path} at {location}: {e.message}", path
        ) from e

    data = dict(data)
    data["targets"] = _normalize_targets(data.get("targets", {}), path)

    manifest = Manifest.from_dict(data, path=path)
    logger.debug("Loaded manifest %s with %d rules", path, len(manifest.targets))
    return manifest


def _normalize_targets(targets: Dict[str, Any], path: Path) -> Dict[str, Any]:
    """Normalize rule keys, rejecting keys that collide after normalization"""
    normalized = {}
    for key, rule in targets.items():
        normal_key = posix_key(key)
        if not normal_key or normal_key == ".":
            raise ConfigurationError(f"Invalid target key {key!r} in manifest {path}", path)
        if normal_key in normalized:
            raise ConfigurationError(
                f"Duplicate target key {normal_key!r} in manifest {path}", path
            )
        normalized[normal_key] = rule
    return normalized


def resolve(relative_path: str,
            manifest: Manifest,
            build_tag: str,
            read_content: ContentReader) -> Resolution:
    """Decide whether a package path is deployed and where

    Precedence:
        1. exact rule for the path (may override the target)
        2. rule of the innermost matching ancestor directory
        3. a start marker for the build tag in the file content
        4. the manifest's default policy

    Args:
        relative_path: POSIX path relative to the package root
        manifest: Package manifest
        build_tag: Active build tag
        read_content: Reads the content of a regular file, None otherwise

    Returns:
        Resolution with the inclusion flag and the relative target
    """
    rule = manifest.get_rule(relative_path)
    if rule is not None:
        return Resolution(rule.matches(build_tag), rule.target or relative_path)

    for ancestor in PurePosixPath(relative_path).parents:
        key = ancestor.as_posix()
        if key == ".":
            break
        rule = manifest.get_rule(key)
        if rule is not None:
            return Resolution(rule.matches(build_tag), relative_path)

    if has_start_marker(read_content(relative_path), build_tag):
        return Resolution(True, relative_path)

    return Resolution(manifest.default.includes(build_tag), relative_path)


class ManifestResolver:
    """Resolves paths of one package against its manifest"""

    def __init__(self, package_root: Path, manifest: Manifest):
        """Initialize manifest resolver

        Args:
            package_root: Root directory of the package
            manifest: Manifest governing the package
        """
        self.package_root = Path(package_root)
        self.manifest = manifest

    @classmethod
    def for_package(cls, package_root: Path) -> 'ManifestResolver':
        """Locate and parse the manifest governing a package

        Raises:
            ConfigurationError: If no manifest is found or it is invalid
        """
        manifest_path = find_manifest(package_root)
        if manifest_path is None:
            raise ConfigurationError(
                f"No {MANIFEST_FILE_NAME} found for package {package_root}", package_root
            )
        return cls(package_root, parse_manifest(manifest_path))

    def read_content(self, relative_path: str) -> Optional[str]:
        """Read a regular file of the package as text, if possible"""
        path = self.package_root / relative_path
        if not path.is_file():
            return None
        try:
            return read_text_or_none(path)
        except OSError as e:
            raise IoError(f"Failed to read {path}: {e}", path) from e

    def resolve(self, relative_path: str, build_tag: str) -> Resolution:
        """Resolve a package path for the build tag"""
        return resolve(relative_path, self.manifest, build_tag, self.read_content)
