"""
Blob object model.

Blobs store raw file content addressed by hash.
"""

from ..errors import TypeMismatchError
from ..integrity.framing import frame, parse_header
from ..integrity.hashing import compute_hash


class Blob:
    """
    Immutable blob object containing raw data.

    Blobs are leaf objects - they contain no references.
    """

    TYPE = 'blob'

    def __init__(self, data: bytes):
        """
        Create a blob from raw bytes.

        Args:
            data: raw file content
        """
        self.data = data

    def serialize(self) -> bytes:
        """Return the framed bytes that are hashed and stored."""
        return frame(self.TYPE, self.data)

    @classmethod
    def from_framed(cls, framed: bytes, object_hash: str = None) -> 'Blob':
        """
        Reconstruct blob from framed bytes.

        Raises TypeMismatchError if the frame is not a blob.
        """
        object_type, _, payload = parse_header(framed, object_hash)
        if object_type != cls.TYPE:
            raise TypeMismatchError(object_hash, cls.TYPE, object_type)
        return cls(payload)

    def compute_hash(self) -> str:
        """Compute content hash of this blob."""
        return compute_hash(self.serialize())

    def __eq__(self, other) -> bool:
        return isinstance(other, Blob) and other.data == self.data

    def __repr__(self) -> str:
        size = len(self.data)
        hash_preview = self.compute_hash()[:8]
        return f"Blob(size={size}, hash={hash_preview}...)"
