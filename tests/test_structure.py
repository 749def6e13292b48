"""Tests for building subtrees from nested mappings."""

import pytest

from py_mockfs.content import FullContent, NullContent, RandomContent, StreamContent, ZeroContent
from py_mockfs.errors import InvalidArgumentError
from py_mockfs.filesystem import FileSystem
from py_mockfs.nodes import NodeKind
from py_mockfs.structure import add_structure


class TestAddStructure:
    """Verify the mapping-to-tree conversion."""

    def test_directories_and_files(self) -> None:
        """Mappings become directories, strings and bytes become files."""
        fs = FileSystem()
        root = fs.mount()
        add_structure(fs, {"etc": {"hosts": "127.0.0.1", "raw": b"\x00\x01"}}, root)
        etc = fs.find("/etc")
        hosts = fs.find("/etc/hosts")
        raw = fs.find("/etc/raw")
        assert etc is not None
        assert etc.kind is NodeKind.DIRECTORY
        assert hosts is not None
        assert hosts.kind is NodeKind.FILE
        assert hosts.read(9) == b"127.0.0.1"
        assert raw is not None
        assert raw.read(2) == b"\x00\x01"

    def test_content_backend_as_data(self) -> None:
        """A content backend is used directly."""
        fs = FileSystem()
        content = StreamContent(b"x")
        root = fs.mount(structure={"f": content})
        assert root.get_child("f").content is content

    @pytest.mark.parametrize(
        ("name", "device"),
        [("full", FullContent), ("null", NullContent), ("random", RandomContent), ("zero", ZeroContent)],
    )
    def test_named_devices(self, name: str, device: type) -> None:
        """Bracketed names with no data pick the matching device."""
        fs = FileSystem()
        fs.mount(structure={"dev": {f"[{name}]": None}})
        node = fs.find(f"/dev/{name}")
        assert node is not None
        assert node.kind is NodeKind.BLOCK
        assert isinstance(node.content, device)

    def test_unknown_block_starts_empty(self) -> None:
        """Other bracketed names with no data are empty blocks."""
        fs = FileSystem()
        fs.mount(structure={"[sda]": None})
        node = fs.find("/sda")
        assert node is not None
        assert node.kind is NodeKind.BLOCK
        assert node.size == 0

    def test_block_with_data(self) -> None:
        """Bracketed names with data are blocks holding that data."""
        fs = FileSystem()
        size = 8
        fs.mount(structure={"[sda]": b"\x00" * size})
        node = fs.find("/sda")
        assert node is not None
        assert node.size == size

    def test_non_string_name_rejected(self) -> None:
        """Names must be strings."""
        fs = FileSystem()
        root = fs.mount()
        with pytest.raises(InvalidArgumentError, match="File name must be a string"):
            add_structure(fs, {1: "x"}, root)  # type: ignore[dict-item]

    def test_bad_data_rejected(self) -> None:
        """Data must be bytes, a string, a content backend, or a mapping."""
        fs = FileSystem()
        root = fs.mount()
        with pytest.raises(InvalidArgumentError, match="Data must be"):
            add_structure(fs, {"f": 42}, root)

    def test_bad_block_data_rejected(self) -> None:
        """Block data must be bytes, a string, or None."""
        fs = FileSystem()
        root = fs.mount()
        with pytest.raises(InvalidArgumentError, match="Block data"):
            add_structure(fs, {"[b]": 4.2}, root)

    def test_invalid_name_rejected(self) -> None:
        """Names are validated like any other."""
        fs = FileSystem()
        root = fs.mount()
        with pytest.raises(InvalidArgumentError):
            add_structure(fs, {"a/b": ""}, root)
