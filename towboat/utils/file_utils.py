# towboat/utils/file_utils.py
"""File operation utilities"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def path_lexists(path: Path) -> bool:
    """Check if path exists without following a final symlink

    A broken symlink counts as existing.
    """
    return os.path.lexists(path)


def read_text_or_none(file_path: Path) -> Optional[str]:
    """
    Read a file as UTF-8 text, keeping line endings untouched

    Args:
        file_path: Path to file

    Returns:
        File content, or None when the file is not valid UTF-8
    """
    data = file_path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def copy_file(src: Path, dst: Path) -> None:
    """
    Copy file bytes and permissions, creating parent directories

    Args:
        src: Source file (symlinks are followed)
        dst: Destination file
    """
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


def atomic_write_text(path: Path, content: str) -> None:
    """Write text through a temporary file and an atomic rename"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.lexists(tmp_name):
            os.unlink(tmp_name)
        raise


def remove_path(path: Path) -> None:
    """
    Remove file, symlink or directory tree

    Args:
        path: Path to remove; a symlink is removed itself, never followed
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def prune_empty_parents(path: Path) -> list:
    """
    Remove now-empty ancestor directories of path

    Walks upward from the parent of ``path``, deleting each directory while it
    is empty. Stops at the first non-empty ancestor or at the filesystem root.

    Args:
        path: Path whose ancestors should be pruned

    Returns:
        List of removed directories, innermost first
    """
    removed = []
    current = path.parent

    while current != current.parent:
        if current.is_symlink() or not current.is_dir():
            break
        if any(current.iterdir()):
            break
        current.rmdir()
        logger.debug("Removed empty directory %s", current)
        removed.append(current)
        current = current.parent

    return removed
