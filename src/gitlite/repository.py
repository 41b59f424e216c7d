"""
Repository handle.

Main entry point coordinating layout, object store and tree builder.
"""

import logging
import zlib
from pathlib import Path
from typing import Dict, List, Tuple

from .builder import TreeBuilder
from .errors import AlreadyInitializedError, GitliteError
from .integrity.framing import parse_header
from .integrity.verification import detect_tampering
from .model.blob import Blob
from .model.tree import Tree, TreeEntry
from .storage.layout import StorageLayout
from .storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


class Repository:
    """
    Handle on a repository rooted at a working directory.

    This is the primary interface for:
    - Initializing the repository skeleton
    - Writing files as blobs and directories as trees
    - Reading objects back and listing trees
    - Verifying stored objects
    """

    def __init__(
        self,
        root: str | Path,
        git_dir: str = ".git",
        compression_level: int = zlib.Z_DEFAULT_COMPRESSION,
    ):
        """
        Open a repository handle.

        Args:
            root: working directory that contains the metadata directory
            git_dir: name of the metadata directory under root
            compression_level: zlib level used when storing objects
        """
        self.root = Path(root).resolve()
        self.layout = StorageLayout(self.root, git_dir)
        self.object_store = ObjectStore(self.layout, compression_level)
        self.builder = TreeBuilder(self.object_store, skip_dir=git_dir)
        self.initialized = False

    def init(self) -> None:
        """
        Create the repository skeleton and HEAD file.

        May only run once per handle; the flag is handle state and
        does not look at the filesystem.
        """
        if self.initialized:
            raise AlreadyInitializedError(str(self.layout.git_dir))

        self.layout.initialize()
        self.initialized = True
        logger.debug("Initialized repository in %s", self.layout.git_dir)

    # ========== Reading ==========

    def read_object(self, obj_hash: str, verify: bool = False) -> Tuple[str, bytes]:
        """Return (type, payload) of any stored object."""
        return self.object_store.get_object(obj_hash, verify=verify)

    def cat_file(self, obj_hash: str) -> str:
        """
        Return an object's payload as text.

        Everything after the header's NUL separator is returned, including
        any further NUL bytes.
        """
        _, payload = self.read_object(obj_hash)
        return payload.decode('utf-8', errors='replace')

    def get_blob(self, blob_hash: str) -> Blob:
        """Retrieve a blob by hash."""
        return Blob.from_framed(self.object_store.get_framed(blob_hash), blob_hash)

    def get_tree(self, tree_hash: str, strict: bool = False) -> Tree:
        """Retrieve and parse a tree by hash."""
        return Tree.from_framed(self.object_store.get_framed(tree_hash), tree_hash, strict)

    def ls_tree(self, tree_hash: str) -> List[TreeEntry]:
        """Return a tree's entries in stored order."""
        return list(self.get_tree(tree_hash).entries)

    def read_tree(self, tree_hash: str) -> str:
        """
        List a tree's entry names.

        Names are sorted byte-wise and newline-terminated.
        """
        return self.get_tree(tree_hash).name_listing()

    # ========== Writing ==========

    def hash_object(self, filename: str | Path, base_dir: str | Path = None) -> str:
        """Store a file as a blob and return its hash."""
        return self.builder.write_blob(filename, base_dir)

    def write_tree(self, dir_path: str | Path = None) -> str:
        """Store a directory (the working directory by default) as a tree."""
        return self.builder.write_tree(self.root if dir_path is None else dir_path)

    # ========== Integrity Verification ==========

    def verify_object(self, obj_hash: str) -> bool:
        """
        Verify an object's integrity.

        Returns True if valid.
        Raises ObjectCorruptedError if corrupted.
        """
        framed = self.object_store.get_framed(obj_hash, verify=True)
        parse_header(framed, obj_hash)
        return True

    def detect_tampering(self) -> Dict[str, object]:
        """
        Check every stored object against its hash.

        Returns dict with:
            - tampered: list of object hashes whose content does not match
            - verified: count of verified objects
            - errors: list of errors encountered
        """
        result = {
            'tampered': [],
            'verified': 0,
            'errors': [],
        }

        for obj_hash in self.object_store.list_all_objects():
            try:
                framed = self.object_store.get_framed(obj_hash)
            except GitliteError as e:
                result['tampered'].append(obj_hash)
                result['errors'].append(f"{obj_hash}: {e}")
                continue

            if detect_tampering(obj_hash, framed):
                result['tampered'].append(obj_hash)
            else:
                result['verified'] += 1

        return result

    def list_all_objects(self) -> List[str]:
        """List all object hashes in the store."""
        return self.object_store.list_all_objects()

    def __repr__(self) -> str:
        return f"Repository(root={self.root}, git_dir={self.layout.git_dir_name})"
