"""Hash calculation utilities"""

import hashlib
from pathlib import Path

from ..constants import HASH_ALGORITHM, HASH_CHUNK_SIZE


def calculate_sha256(file_path: Path, chunk_size: int = HASH_CHUNK_SIZE) -> str:
    """
    Calculate SHA256 hash of file

    Args:
        file_path: Path to file
        chunk_size: Read chunk size

    Returns:
        Hex digest string
    """
    sha256_hash = hashlib.sha256()

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            sha256_hash.update(chunk)

    return sha256_hash.hexdigest()


def calculate_content_hash(content: bytes, algorithm: str = HASH_ALGORITHM) -> str:
    """
    Calculate hash of content bytes

    Args:
        content: Content bytes
        algorithm: Hash algorithm

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)
    hash_func.update(content)
    return hash_func.hexdigest()
