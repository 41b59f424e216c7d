"""
Tree object model.

Trees record a directory as a table of binary entries::

    <mode> <name>\\0<20-byte digest>

one after another with no terminator.
"""

import os
from typing import Iterable, List, NamedTuple

from ..errors import InvalidObjectError, TruncatedPayloadError, TypeMismatchError
from ..integrity.framing import frame, parse_header
from ..integrity.hashing import DIGEST_SIZE, compute_hash, digest_to_hex, hex_to_digest
from .reader import ByteReader

FILE_MODE = '100644'
DIRECTORY_MODE = '40000'


class TreeEntry(NamedTuple):
    """A single (mode, name, digest) record of a tree."""

    mode: str
    name: str
    digest: bytes

    @classmethod
    def for_object(cls, mode: str, name: str, object_hash: str) -> 'TreeEntry':
        """Build an entry referencing an object by its hex hash."""
        if not name or '/' in name or '\0' in name:
            raise InvalidObjectError(f"Invalid tree entry name: {name!r}")
        return cls(mode, name, hex_to_digest(object_hash))

    @property
    def object_hash(self) -> str:
        return digest_to_hex(self.digest)

    @property
    def is_tree(self) -> bool:
        return self.mode == DIRECTORY_MODE

    def serialize(self) -> bytes:
        return self.mode.encode('ascii') + b' ' + os.fsencode(self.name) + b'\0' + self.digest


class Tree:
    """
    Immutable tree object listing blobs and sub-trees.

    Entries keep the order they were added in; only the name
    listing is sorted.
    """

    TYPE = 'tree'

    def __init__(self, entries: Iterable[TreeEntry]):
        """
        Create a tree.

        Args:
            entries: tree entries in encounter order
        """
        self.entries = tuple(entries)

    def serialize_payload(self) -> bytes:
        return b''.join(entry.serialize() for entry in self.entries)

    def serialize(self) -> bytes:
        """Return the framed bytes that are hashed and stored."""
        return frame(self.TYPE, self.serialize_payload())

    @classmethod
    def from_framed(cls, framed: bytes, object_hash: str = None, strict: bool = False) -> 'Tree':
        """
        Reconstruct a tree from framed bytes.

        Raises TypeMismatchError if the frame is not a tree.
        The declared length is only checked when strict=True.
        """
        object_type, declared_size, payload = parse_header(framed, object_hash)
        if object_type != cls.TYPE:
            raise TypeMismatchError(object_hash, cls.TYPE, object_type)
        return cls(parse_tree(payload, declared_size, strict, object_hash))

    def compute_hash(self) -> str:
        """Compute content hash of this tree."""
        return compute_hash(self.serialize())

    def names(self) -> List[str]:
        """Entry names sorted byte-wise."""
        return sorted((entry.name for entry in self.entries), key=os.fsencode)

    def name_listing(self) -> str:
        """
        Newline-separated sorted names with a trailing newline.

        An empty tree lists as an empty string.
        """
        return ''.join(name + '\n' for name in self.names())

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        hash_preview = self.compute_hash()[:8]
        return f"Tree(entries={len(self.entries)}, hash={hash_preview}...)"


def parse_tree(
    payload: bytes,
    declared_size: int = None,
    strict: bool = False,
    object_hash: str = None,
) -> List[TreeEntry]:
    """
    Parse a tree payload into entries.

    Parsing stops when a one-byte lookahead finds no more data, not at
    the declared size. A record cut short in any field raises
    TruncatedPayloadError.
    """
    if strict and declared_size is not None and declared_size != len(payload):
        raise InvalidObjectError(
            f"Declared size {declared_size} does not match payload size {len(payload)}",
            object_hash,
        )

    reader = ByteReader(payload)
    entries = []

    while reader.peek() is not None:
        mode = reader.read_until(b' ')
        if mode is None:
            raise TruncatedPayloadError('mode', reader.offset)

        name = reader.read_until(b'\0')
        if name is None:
            raise TruncatedPayloadError('name', reader.offset)

        digest = reader.read_exact(DIGEST_SIZE)
        if digest is None:
            raise TruncatedPayloadError('hash', reader.offset)

        try:
            mode_str = mode.decode('ascii')
        except UnicodeDecodeError:
            raise InvalidObjectError(f"Non-ASCII mode {mode!r}", object_hash)

        entries.append(TreeEntry(mode_str, os.fsdecode(name), digest))

    return entries
