"""Hash utilities for minivcs."""

import hashlib

# Width of a raw SHA-1 digest; trees embed digests in this form.
DIGEST_SIZE = 20
HEX_DIGEST_SIZE = DIGEST_SIZE * 2


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute SHA-1 hash of a file's raw bytes.
    
    Args:
        filepath: Path to file
        
    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object(f.read())


def is_hex_digest(value: str) -> bool:
    """Return True if value looks like a full hex digest."""
    if len(value) != HEX_DIGEST_SIZE:
        return False
    return all(c in '0123456789abcdef' for c in value.lower())
