"""
Content-addressed hashing using SHA-1.

Provides deterministic hash computation over framed objects.
"""

import hashlib
import string
from typing import Tuple

from ..errors import InvalidHashError, InvalidObjectError
from .framing import frame

HASH_LENGTH = 40
DIGEST_SIZE = 20

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def compute_hash(framed: bytes) -> str:
    """
    Compute hash of framed object bytes.

    The digest covers the whole frame (tag, length, separator and payload),
    so the same payload under a different type tag hashes differently.
    Returns hex-encoded hash string.
    """
    return hashlib.sha1(framed).hexdigest()


def compute_digest(framed: bytes) -> bytes:
    """Compute the raw 20-byte digest of framed object bytes."""
    return hashlib.sha1(framed).digest()


def hash_object(object_type: str, payload: bytes) -> Tuple[str, bytes]:
    """
    Frame a payload and hash it.

    Returns (hash, framed bytes) so callers can store the frame
    without building it twice.
    """
    framed = frame(object_type, payload)
    return compute_hash(framed), framed


def validate_hash(object_hash: str) -> None:
    """
    Check that a hash can address an object.

    Raises InvalidHashError unless it is exactly 40 lowercase hex characters.
    """
    if len(object_hash) != HASH_LENGTH:
        raise InvalidHashError(object_hash)
    if not _HEX_DIGITS.issuperset(object_hash):
        raise InvalidHashError(object_hash)


def hex_to_digest(object_hash: str) -> bytes:
    """Convert a validated hex hash into the raw digest stored in trees."""
    validate_hash(object_hash)
    return bytes.fromhex(object_hash)


def digest_to_hex(digest: bytes) -> str:
    """Convert a raw tree-entry digest back into an object hash."""
    if len(digest) != DIGEST_SIZE:
        raise InvalidObjectError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    return digest.hex()


def get_hash_prefix(hash_str: str, prefix_length: int = 2) -> str:
    """
    Get prefix of hash for directory sharding.

    Default is 2 characters, creating 256 subdirectories.
    """
    if len(hash_str) < prefix_length:
        raise ValueError(f"Hash too short for prefix length {prefix_length}")
    return hash_str[:prefix_length]
