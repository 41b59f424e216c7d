"""
Filesystem layout for object storage.

Implements git's loose-object layout with directory sharding.
"""

from pathlib import Path
from typing import List

from ..errors import StorageError
from ..integrity.hashing import get_hash_prefix, validate_hash


class StorageLayout:
    """
    Manages filesystem layout for content-addressed objects.

    Layout:
        root/
            .git/
                objects/
                    <hash[:2]>/
                        <hash[2:]>   # compressed object file
                refs/
                HEAD                 # default branch pointer
    """

    OBJECTS_DIR = "objects"
    REFS_DIR = "refs"
    HEAD_FILE = "HEAD"
    DEFAULT_HEAD = "ref: refs/heads/master\n"

    def __init__(self, root: str | Path, git_dir: str = ".git"):
        """Initialize storage layout for a repository rooted at root."""
        self.root = Path(root).resolve()
        self.git_dir_name = git_dir
        self.git_dir = self.root / git_dir
        self.objects_dir = self.git_dir / self.OBJECTS_DIR
        self.refs_dir = self.git_dir / self.REFS_DIR
        self.head_path = self.git_dir / self.HEAD_FILE

    def initialize(self) -> None:
        """
        Create the repository skeleton and HEAD file.

        Existing directories are kept; HEAD is (re)written with the
        default branch pointer.
        """
        for directory in (self.git_dir, self.objects_dir, self.refs_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError("mkdir", str(directory), e)

        try:
            self.head_path.write_text(self.DEFAULT_HEAD, encoding='utf-8')
        except OSError as e:
            raise StorageError("write_head", str(self.head_path), e)

    def get_object_path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object by its hash.

        The first two characters name the directory, the remaining
        38 name the file. The hash is validated first.
        """
        validate_hash(obj_hash)
        prefix = get_hash_prefix(obj_hash, 2)
        return self.objects_dir / prefix / obj_hash[2:]

    def ensure_object_directory(self, obj_hash: str) -> Path:
        """Ensure the shard directory for an object exists and return it."""
        prefix_dir = self.get_object_path(obj_hash).parent
        try:
            prefix_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError("mkdir", str(prefix_dir), e)
        return prefix_dir

    def list_all_objects(self) -> List[str]:
        """
        List all object hashes in the store.

        Scans all prefix directories.
        """
        objects = []

        if not self.objects_dir.exists():
            return objects

        try:
            for prefix_dir in self.objects_dir.iterdir():
                if not prefix_dir.is_dir() or len(prefix_dir.name) != 2:
                    continue

                for obj_file in prefix_dir.iterdir():
                    if obj_file.is_file() and len(obj_file.name) == 38:
                        objects.append(prefix_dir.name + obj_file.name)

        except OSError as e:
            raise StorageError("list_objects", str(self.objects_dir), e)

        return sorted(objects)

    def object_exists(self, obj_hash: str) -> bool:
        """Check if an object exists in storage."""
        return self.get_object_path(obj_hash).is_file()
