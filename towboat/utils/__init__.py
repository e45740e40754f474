"""Utility functions for towboat"""

from .file_utils import (
    path_lexists,
    read_text_or_none,
    copy_file,
    atomic_write_text,
    remove_path,
    prune_empty_parents,
)

from .hash_utils import (
    calculate_sha256,
    calculate_content_hash,
)

__all__ = [
    "path_lexists",
    "read_text_or_none",
    "copy_file",
    "atomic_write_text",
    "remove_path",
    "prune_empty_parents",
    "calculate_sha256",
    "calculate_content_hash",
]
