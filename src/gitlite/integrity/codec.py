"""
Compression codec for stored objects.

Objects are stored as zlib (deflate) streams, the format git uses
for loose objects.
"""

import zlib

from ..errors import ObjectDecodeError


def encode(framed: bytes, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    """Compress framed object bytes for storage."""
    return zlib.compress(framed, level)


def decode(compressed: bytes, object_hash: str = None) -> bytes:
    """
    Decompress a stored object back into its framed bytes.

    Raises ObjectDecodeError if the stream is corrupt or truncated.
    """
    decompressor = zlib.decompressobj()
    try:
        framed = decompressor.decompress(compressed)
        framed += decompressor.flush()
    except zlib.error as e:
        raise ObjectDecodeError(str(e), object_hash)

    if not decompressor.eof:
        raise ObjectDecodeError("Compressed stream is truncated", object_hash)

    return framed
