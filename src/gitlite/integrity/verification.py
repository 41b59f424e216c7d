"""
Integrity verification for stored objects.

Provides tamper detection by recomputing hashes.
"""

from ..errors import ObjectCorruptedError
from .hashing import compute_hash


def verify_object_integrity(framed: bytes, expected_hash: str) -> None:
    """
    Verify that an object's framed bytes match its hash.

    Raises ObjectCorruptedError if mismatch detected.
    """
    actual_hash = compute_hash(framed)
    if actual_hash != expected_hash:
        raise ObjectCorruptedError(expected_hash, actual_hash)


def detect_tampering(obj_hash: str, framed: bytes) -> bool:
    """
    Detect if an object has been tampered with.

    Returns True if tampering detected, False otherwise.
    """
    return compute_hash(framed) != obj_hash
