"""Tests for regular files and blocks — I/O through the content backend."""

import pytest

from py_mockfs.content import NullContent, SeekWhence, StreamContent
from py_mockfs.errors import InvalidArgumentError, NotFoundError
from py_mockfs.filesystem import FileSystem
from py_mockfs.logging import LogLevel
from py_mockfs.nodes import Node


class _StubbornContent(StreamContent):
    """Content that refuses to be released."""

    def unlink(self) -> bool:
        return False


class TestFileIO:
    """Verify reads, writes, and seeks on a file node."""

    def test_write_then_read(self) -> None:
        """Written bytes are read back after seeking."""
        fs = FileSystem()
        file = fs.create_file("f")
        expected = 5
        assert file.write(b"hello") == expected
        assert file.seek(0)
        assert file.read(5) == b"hello"
        assert file.is_eof()

    def test_seek_and_tell(self) -> None:
        """Seeks are relative to the chosen reference point."""
        file = FileSystem().create_file("f", content=b"abcdef")
        file.seek(-2, SeekWhence.END)
        expected = 4
        assert file.tell() == expected
        assert file.read(2) == b"ef"

    def test_write_updates_mtime(self) -> None:
        """Writing modifies the file."""
        file = FileSystem().create_file("f")
        file.set_modify_time(0)
        file.write(b"x")
        assert file.mtime > 0

    def test_read_updates_atime(self) -> None:
        """Reading accesses the file."""
        file = FileSystem().create_file("f", content=b"x")
        file.set_access_time(0)
        file.read(1)
        assert file.atime > 0

    def test_open_close_flush(self) -> None:
        """Lifecycle calls reach the content."""
        file = FileSystem().create_file("f")
        assert file.open()
        assert file.flush()
        assert file.close()

    def test_truncate_without_quota(self) -> None:
        """Truncation without a quota always reaches the content."""
        file = FileSystem().create_file("f", content=b"abc")
        assert file.truncate(1)
        assert file.size == 1

    def test_unattached_file_has_no_limit(self) -> None:
        """A file outside any partition is never clamped."""
        file = Node.regular_file("f")
        data = b"x" * 1000
        assert file.write(data) == len(data)


class TestContentSwap:
    """Verify replacing a file's content."""

    def test_set_content(self) -> None:
        """A content backend can be swapped in."""
        file = FileSystem().create_file("f", content=b"abc")
        device = NullContent()
        file.set_content(device)
        assert file.content is device
        assert file.size == 0

    def test_set_content_from_string(self) -> None:
        """A string becomes a fresh buffer."""
        file = FileSystem().create_file("f")
        file.set_content_from_string("hi")
        assert file.read(2) == b"hi"

    def test_set_bad_content(self) -> None:
        """Anything else is rejected."""
        file = FileSystem().create_file("f")
        with pytest.raises(InvalidArgumentError):
            file.set_content(3.5)  # type: ignore[arg-type]


class TestUnlink:
    """Verify removing files."""

    def test_unlink_removes_from_parent(self) -> None:
        """An unlinked file leaves its directory and the inode table."""
        fs = FileSystem()
        root = fs.mount(structure={"f": "data"})
        file = root.get_child("f")
        assert file.unlink()
        assert not root.has_child("f")
        assert file.parent is None

    def test_unlink_after_set_name_spares_sibling(self) -> None:
        """A file renamed in place removes its own entry, not its namesake's."""
        fs = FileSystem()
        root = fs.mount(structure={"a": "first", "b": "second"})
        first = root.get_child("a")
        sibling = root.get_child("b")
        first.set_name("b")
        assert first.unlink()
        assert root.children() == [sibling]
        assert root.get_child("b") is sibling
        assert sibling.parent is root

    def test_unlink_forgets_inode(self) -> None:
        """An unlinked file is no longer reachable by inode number."""
        fs = FileSystem()
        root = fs.mount(structure={"f": ""})
        file = root.get_child("f")
        file.unlink()
        with pytest.raises(NotFoundError):
            fs.node(file.ino)

    def test_unlink_logged(self) -> None:
        """Unlinking leaves an info entry."""
        fs = FileSystem()
        root = fs.mount(structure={"f": ""})
        root.get_child("f").unlink()
        entries = fs.logger.filter(min_level=LogLevel.INFO, source="fs")
        assert any("Unlinked" in entry.message for entry in entries)

    def test_unlink_detached(self) -> None:
        """A file without a parent unlinks trivially."""
        assert FileSystem().create_file("f").unlink()

    def test_unlink_refused_by_content(self) -> None:
        """If the content refuses, the file stays."""
        fs = FileSystem()
        root = fs.mount()
        file = fs.create_file("f", content=_StubbornContent(b"x"))
        file.add_to(root)
        assert not file.unlink()
        assert root.has_child("f")


class TestBlocks:
    """Verify block devices behave like files."""

    def test_block_io(self) -> None:
        """Blocks read and write through their content."""
        block = FileSystem().create_block("sda", content=b"\x00" * 4)
        block.seek(1)
        block.write(b"\xff")
        block.seek(0)
        assert block.read(4) == b"\x00\xff\x00\x00"

    def test_block_permissions(self) -> None:
        """Blocks default to file permissions."""
        assert FileSystem().create_block("sda").permissions == 0o666
