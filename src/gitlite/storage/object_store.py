"""
Content-addressed object storage.

Provides immutable, compressed object storage keyed by SHA-1 hash.
"""

import logging
import os
import tempfile
import zlib
from pathlib import Path
from typing import List, Tuple

from ..errors import ObjectNotFoundError, StorageError
from ..integrity.codec import decode, encode
from ..integrity.framing import parse_header
from ..integrity.hashing import hash_object, validate_hash
from ..integrity.verification import verify_object_integrity
from .layout import StorageLayout

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Content-addressed object store with immutable objects.

    Objects are stored by the hash of their framed bytes.
    Once written, objects never change.
    """

    def __init__(self, layout: StorageLayout, compression_level: int = zlib.Z_DEFAULT_COMPRESSION):
        """Initialize object store with given layout."""
        self.layout = layout
        self.compression_level = compression_level

    def put(self, obj_hash: str, compressed: bytes) -> None:
        """
        Persist compressed object bytes under their hash.

        Creates the shard directory if needed. Rewriting an existing
        object is harmless since its content is derived from the hash,
        and a failed rewrite leaves the existing file untouched.
        """
        self.layout.ensure_object_directory(obj_hash)
        obj_path = self.layout.get_object_path(obj_hash)

        self._write_object_atomic(obj_path, compressed)

        logger.debug("Stored object %s (%d bytes)", obj_hash[:8], len(compressed))

    def get(self, obj_hash: str) -> bytes:
        """
        Retrieve the compressed bytes of an object.

        Raises InvalidHashError before touching the filesystem if the
        hash is malformed, ObjectNotFoundError if no file exists.
        """
        validate_hash(obj_hash)
        obj_path = self.layout.get_object_path(obj_hash)

        try:
            with open(obj_path, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            raise ObjectNotFoundError(obj_hash, str(obj_path))
        except OSError as e:
            raise StorageError("read_object", str(obj_path), e)

    def put_object(self, object_type: str, payload: bytes) -> str:
        """
        Frame, hash, compress and store an object.

        Returns the content hash.
        """
        obj_hash, framed = hash_object(object_type, payload)
        self.put(obj_hash, encode(framed, self.compression_level))
        return obj_hash

    def get_framed(self, obj_hash: str, verify: bool = False) -> bytes:
        """
        Retrieve and decompress an object into its framed bytes.

        If verify=True, checks that the content still hashes to obj_hash.
        """
        framed = decode(self.get(obj_hash), obj_hash)
        if verify:
            verify_object_integrity(framed, obj_hash)
        return framed

    def get_object(self, obj_hash: str, verify: bool = False) -> Tuple[str, bytes]:
        """
        Retrieve an object as (type, payload).

        Raises ObjectNotFoundError if object doesn't exist.
        Raises ObjectCorruptedError if verification fails.
        """
        object_type, _, payload = parse_header(self.get_framed(obj_hash, verify), obj_hash)
        return object_type, payload

    def has_object(self, obj_hash: str) -> bool:
        """Check if an object exists in the store."""
        return self.layout.object_exists(obj_hash)

    def list_all_objects(self) -> List[str]:
        """List all object hashes in the store."""
        return self.layout.list_all_objects()

    def _write_object_atomic(self, path: Path, data: bytes) -> None:
        """
        Write object file atomically.

        Uses temp file + rename, so readers only ever see a complete file.
        """
        fd = None
        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(dir=str(path.parent), prefix='.tmp_')

            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                view = view[written:]
            os.close(fd)
            fd = None

            os.replace(temp_path, path)
            temp_path = None

        except OSError as e:
            raise StorageError("write_object", str(path), e)

        finally:
            if fd is not None:
                os.close(fd)
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
