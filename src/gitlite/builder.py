"""
Tree builder.

Walks a directory depth-first, storing every file as a blob and every
directory as a tree.
"""

import logging
import os
from pathlib import Path

from .errors import StorageError
from .model.blob import Blob
from .model.tree import DIRECTORY_MODE, FILE_MODE, Tree, TreeEntry
from .storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Encodes files and directories into stored objects.

    The repository's own metadata directory is never descended into.
    """

    def __init__(self, object_store: ObjectStore, skip_dir: str = ".git"):
        self.object_store = object_store
        self.skip_dir = skip_dir

    def write_blob(self, filename: str | Path, base_dir: str | Path = None) -> str:
        """
        Store a file's content as a blob and return its hash.

        Args:
            filename: path of the file, relative to base_dir if given
            base_dir: directory the filename is resolved against

        Raises StorageError if the file cannot be read.
        """
        path = Path(base_dir) / filename if base_dir is not None else Path(filename)

        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise StorageError("read_file", str(path), e)

        blob_hash = self.object_store.put_object(Blob.TYPE, data)
        logger.debug("Wrote blob %s for %s", blob_hash[:8], path)
        return blob_hash

    def write_tree(self, dir_path: str | Path) -> str:
        """
        Store a directory recursively and return its tree hash.

        Entries are recorded in the order the directory lists them.
        Anything that is neither a directory nor a regular file is skipped.
        """
        dir_path = Path(dir_path)
        entries = []

        try:
            with os.scandir(dir_path) as listing:
                children = list(listing)
        except OSError as e:
            raise StorageError("list_directory", str(dir_path), e)

        for child in children:
            if child.name == self.skip_dir:
                continue

            if child.is_dir():
                subtree_hash = self.write_tree(child.path)
                entries.append(TreeEntry.for_object(DIRECTORY_MODE, child.name, subtree_hash))
            elif child.is_file():
                blob_hash = self.write_blob(child.path)
                entries.append(TreeEntry.for_object(FILE_MODE, child.name, blob_hash))
            else:
                # fifos, sockets, devices, dangling symlinks
                logger.debug("Skipping non-regular entry %s", child.path)

        tree = Tree(entries)
        tree_hash = self.object_store.put_object(Tree.TYPE, tree.serialize_payload())
        logger.debug("Wrote tree %s for %s (%d entries)", tree_hash[:8], dir_path, len(tree))
        return tree_hash
