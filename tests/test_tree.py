"""
Test tree encoding and parsing.

Verifies directory snapshots and the binary tree format.
"""

import os

import pytest

from gitlite import (
    InvalidObjectError,
    Repository,
    Tree,
    TreeEntry,
    TruncatedPayloadError,
    TypeMismatchError,
)
from gitlite.integrity.framing import frame
from gitlite.model.reader import ByteReader
from gitlite.model.tree import DIRECTORY_MODE, FILE_MODE, parse_tree

# Hash fields full of the bytes the parser splits on.
AWKWARD_DIGEST = b'\x00 ' * 10
OTHER_DIGEST = b' \x00' * 10


class TestByteReader:
    """Test the parsing cursor."""

    def test_peek_does_not_consume(self):
        reader = ByteReader(b'ab')
        assert reader.peek() == ord('a')
        assert reader.peek() == ord('a')
        assert reader.offset == 0

    def test_peek_at_end(self):
        assert ByteReader(b'').peek() is None

    def test_read_until(self):
        reader = ByteReader(b'100644 name\x00rest')
        assert reader.read_until(b' ') == b'100644'
        assert reader.read_until(b'\x00') == b'name'
        assert reader.remaining() == 4

    def test_read_until_missing_delimiter(self):
        reader = ByteReader(b'abc')
        assert reader.read_until(b' ') is None
        assert reader.offset == 0

    def test_read_exact(self):
        reader = ByteReader(b'abcdef')
        assert reader.read_exact(4) == b'abcd'
        assert reader.read_exact(4) is None
        assert reader.read_exact(2) == b'ef'


class TestTreeParsing:
    """Test parsing of hand-built tree payloads."""

    def test_parse_entries(self):
        payload = (
            b'100644 b.txt\x00' + AWKWARD_DIGEST
            + b'40000 a\x00' + OTHER_DIGEST
        )
        entries = parse_tree(payload)

        assert entries == [
            TreeEntry(FILE_MODE, 'b.txt', AWKWARD_DIGEST),
            TreeEntry(DIRECTORY_MODE, 'a', OTHER_DIGEST),
        ]
        assert entries[1].is_tree
        assert not entries[0].is_tree

    def test_parse_empty_payload(self):
        assert parse_tree(b'') == []

    @pytest.mark.parametrize("payload, field", [
        (b'100644', 'mode'),
        (b'100644 name-without-nul', 'name'),
        (b'100644 a.txt\x00' + b'x' * 19, 'hash'),
        (b'100644 a.txt\x00' + AWKWARD_DIGEST + b'4', 'mode'),
    ])
    def test_truncated_payload(self, payload, field):
        with pytest.raises(TruncatedPayloadError) as exc_info:
            parse_tree(payload)
        assert exc_info.value.field == field

    def test_declared_length_is_not_checked_by_default(self):
        payload = b'100644 a.txt\x00' + AWKWARD_DIGEST
        tree = Tree.from_framed(b'tree 999\x00' + payload)

        assert tree.names() == ['a.txt']

    def test_strict_length_check(self):
        payload = b'100644 a.txt\x00' + AWKWARD_DIGEST

        with pytest.raises(InvalidObjectError):
            Tree.from_framed(b'tree 999\x00' + payload, strict=True)

        assert len(Tree.from_framed(frame('tree', payload), strict=True)) == 1

    def test_blob_is_not_a_tree(self):
        with pytest.raises(TypeMismatchError) as exc_info:
            Tree.from_framed(frame('blob', b'content'), "a" * 40)

        assert exc_info.value.expected == 'tree'
        assert exc_info.value.actual == 'blob'

    def test_serialize_round_trip(self):
        entries = [
            TreeEntry(FILE_MODE, 'z', AWKWARD_DIGEST),
            TreeEntry(DIRECTORY_MODE, 'm', OTHER_DIGEST),
        ]
        tree = Tree(entries)

        parsed = Tree.from_framed(tree.serialize(), strict=True)

        assert list(parsed.entries) == entries
        assert parsed.compute_hash() == tree.compute_hash()

    def test_name_listing_sorted_bytewise(self):
        tree = Tree([
            TreeEntry(FILE_MODE, 'b', AWKWARD_DIGEST),
            TreeEntry(FILE_MODE, 'B', AWKWARD_DIGEST),
            TreeEntry(FILE_MODE, 'a', AWKWARD_DIGEST),
        ])

        assert tree.name_listing() == "B\na\nb\n"

    def test_empty_tree_listing(self):
        assert Tree([]).name_listing() == ""

    def test_entry_rejects_path_names(self):
        with pytest.raises(InvalidObjectError):
            TreeEntry.for_object(FILE_MODE, 'dir/file', "a" * 40)


class TestWriteTree:
    """Test recursive directory snapshots."""

    @pytest.fixture
    def repo(self, tmp_path):
        repo = Repository(tmp_path)
        repo.init()
        return repo

    def test_file_and_subdirectory(self, repo, tmp_path):
        (tmp_path / "b.txt").write_text("file")
        (tmp_path / "a_dir").mkdir()
        (tmp_path / "a_dir" / "inner.txt").write_text("inner")

        tree_hash = repo.write_tree()

        assert repo.read_tree(tree_hash) == "a_dir\nb.txt\n"

    def test_names_match_directory_children(self, repo, tmp_path):
        names = ["zeta", "alpha", "Mid", "with space", "dot.file"]
        for name in names:
            (tmp_path / name).write_bytes(name.encode())
        (tmp_path / "nested").mkdir()

        listing = repo.read_tree(repo.write_tree())

        assert set(listing.splitlines()) == set(names) | {"nested"}
        assert listing.endswith("\n")

    def test_metadata_directory_is_skipped(self, repo, tmp_path):
        (tmp_path / "file.txt").write_text("x")

        listing = repo.read_tree(repo.write_tree())

        assert ".git" not in listing.splitlines()

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
    def test_non_regular_entries_are_skipped(self, repo, tmp_path):
        (tmp_path / "regular.txt").write_text("kept")
        os.mkfifo(tmp_path / "pipe")
        os.symlink(tmp_path / "nowhere", tmp_path / "dangling")

        assert repo.read_tree(repo.write_tree()) == "regular.txt\n"

    def test_symlink_to_file_is_stored_as_blob(self, repo, tmp_path):
        (tmp_path / "target.txt").write_text("target")
        os.symlink(tmp_path / "target.txt", tmp_path / "link.txt")

        entries = {entry.name: entry for entry in repo.ls_tree(repo.write_tree())}

        assert repo.cat_file(entries["link.txt"].object_hash) == "target"

    def test_entries_reference_stored_objects(self, repo, tmp_path):
        (tmp_path / "file.txt").write_text("content")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "inner.txt").write_text("inner")

        entries = {entry.name: entry for entry in repo.ls_tree(repo.write_tree())}

        assert entries["file.txt"].mode == FILE_MODE
        assert repo.cat_file(entries["file.txt"].object_hash) == "content"

        assert entries["sub"].mode == DIRECTORY_MODE
        assert repo.read_tree(entries["sub"].object_hash) == "inner.txt\n"

    def test_subtree_hash_is_raw_digest(self, repo, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "inner.txt").write_text("inner")

        sub_hash = repo.write_tree(tmp_path / "sub")
        entries = repo.ls_tree(repo.write_tree())

        assert entries[0].digest == bytes.fromhex(sub_hash)

    def test_single_file_tree_hash(self, repo, tmp_path):
        (tmp_path / "hello.txt").write_text("hello world\n")

        tree = Tree([TreeEntry.for_object(
            FILE_MODE, "hello.txt", "3b18e512dba79e4c8300dd08aeb37f8e728b8dad",
        )])

        assert repo.write_tree() == tree.compute_hash()

    def test_empty_directory(self, repo, tmp_path):
        assert repo.write_tree() == "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
        assert repo.read_tree("4b825dc642cb6eb9a060e54bf8d69288fbee4904") == ""

    def test_write_tree_is_deterministic(self, repo, tmp_path):
        (tmp_path / "a").write_text("1")
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "c").write_text("2")

        assert repo.write_tree() == repo.write_tree()

    def test_missing_directory(self, repo, tmp_path):
        from gitlite import StorageError

        with pytest.raises(StorageError):
            repo.write_tree(tmp_path / "missing")

    def test_read_tree_on_blob(self, repo, tmp_path):
        (tmp_path / "file.txt").write_text("content")
        blob_hash = repo.hash_object("file.txt", tmp_path)

        with pytest.raises(TypeMismatchError):
            repo.read_tree(blob_hash)

    def test_read_tree_invalid_hash(self, repo):
        from gitlite import InvalidHashError

        with pytest.raises(InvalidHashError):
            repo.read_tree("123")

    def test_read_truncated_tree(self, repo):
        obj_hash = repo.object_store.put_object('tree', b'100644 a.txt\x00short')

        with pytest.raises(TruncatedPayloadError):
            repo.read_tree(obj_hash)
