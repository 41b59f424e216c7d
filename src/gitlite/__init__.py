"""
gitlite - a minimal content-addressable object store in git's loose-object format.

This package provides:
- Blob and tree objects framed and hashed the way git frames them
- zlib-compressed, hash-sharded storage on disk
- Recursive directory snapshots as tree objects
- Binary tree parsing and integrity verification

Main entry point:
    Repository - primary interface for all operations

Example usage:
    from gitlite import Repository

    repo = Repository('/path/to/worktree')
    repo.init()

    blob_hash = repo.hash_object('README.md')
    tree_hash = repo.write_tree()
    print(repo.read_tree(tree_hash))
"""

from .repository import Repository
from .builder import TreeBuilder
from .errors import (
    GitliteError,
    InvalidHashError,
    ObjectNotFoundError,
    ObjectDecodeError,
    InvalidObjectError,
    TypeMismatchError,
    TruncatedPayloadError,
    ObjectCorruptedError,
    AlreadyInitializedError,
    StorageError,
)
from .model.blob import Blob
from .model.tree import Tree, TreeEntry

__version__ = '0.1.0'

__all__ = [
    # Main entry point
    'Repository',
    'TreeBuilder',

    # Errors
    'GitliteError',
    'InvalidHashError',
    'ObjectNotFoundError',
    'ObjectDecodeError',
    'InvalidObjectError',
    'TypeMismatchError',
    'TruncatedPayloadError',
    'ObjectCorruptedError',
    'AlreadyInitializedError',
    'StorageError',

    # Models
    'Blob',
    'Tree',
    'TreeEntry',
]
