"""Tests for the tree drawing."""

import io
from typing import Any

import pytest

from py_mockfs.errors import InvalidArgumentError
from py_mockfs.filesystem import FileSystem
from py_mockfs.visitor import TreeStyle, TreeVisitor

STRUCTURE: dict[str, Any] = {
    "dev": {
        "[null]": None,
    },
    "usr": {
        "local": {
            "bin": {
                "php": "",
                "python": "",
                "composer": "",
            },
        },
    },
    "etc": {
        "ssh": {
            "ssh_config": "",
        },
        "passwd": "",
        "shadow": "",
    },
}


def _fs() -> FileSystem:
    fs = FileSystem()
    fs.mount(structure=STRUCTURE)
    return fs


def _draw(fs: FileSystem, path: str | None = None, **style: Any) -> str:
    out = io.StringIO()
    visitor = TreeVisitor(out, **style)
    if path is None:
        visitor.visit_file_system(fs)
    else:
        node = fs.find(path)
        assert node is not None
        visitor.visit(node)
    return out.getvalue()


class TestTreeVisitor:
    """Verify the drawing for one partition."""

    def test_whole_file_system(self) -> None:
        """The file system is drawn under its URL."""
        expected = (
            "mfs://\n"
            "└── /\n"
            "    ├── dev\n"
            "    │   └── null\n"
            "    ├── etc\n"
            "    │   ├── passwd\n"
            "    │   ├── shadow\n"
            "    │   └── ssh\n"
            "    │       └── ssh_config\n"
            "    └── usr\n"
            "        └── local\n"
            "            └── bin\n"
            "                ├── composer\n"
            "                ├── php\n"
            "                └── python\n"
            "\n6 directories, 7 files\n"
        )
        assert _draw(_fs()) == expected

    def test_root_partition(self) -> None:
        """A partition is drawn under its path."""
        expected = (
            "/\n"
            "├── dev\n"
            "│   └── null\n"
            "├── etc\n"
            "│   ├── passwd\n"
            "│   ├── shadow\n"
            "│   └── ssh\n"
            "│       └── ssh_config\n"
            "└── usr\n"
            "    └── local\n"
            "        └── bin\n"
            "            ├── composer\n"
            "            ├── php\n"
            "            └── python\n"
            "\n6 directories, 7 files\n"
        )
        assert _draw(_fs(), "/") == expected

    def test_sub_directory(self) -> None:
        """A directory is drawn under its full path."""
        expected = "/usr/local\n└── bin\n    ├── composer\n    ├── php\n    └── python\n\n1 directory, 3 files\n"
        assert _draw(_fs(), "/usr/local") == expected

    def test_single_file(self) -> None:
        """A lone file is just a header."""
        assert _draw(_fs(), "/usr/local/bin/php") == "/usr/local/bin/php\n\n0 directories, 0 files\n"

    def test_spacing(self) -> None:
        """Spacing adds trunk lines before each entry."""
        expected = "/usr/local\n│\n└── bin\n    │\n    └── php\n\n1 directory, 1 file\n"
        fs = FileSystem()
        fs.mount(structure={"usr": {"local": {"bin": {"php": ""}}}})
        assert _draw(fs, "/usr/local", spacing=1) == expected

    def test_custom_characters(self) -> None:
        """Drawing characters can be replaced."""
        fs = FileSystem()
        fs.mount(structure={"a": "", "b": ""})
        drawing = _draw(fs, "/", trunk_branch="+", trunk_end="`", branch_prefix="-- ")
        assert drawing == "/\n+-- a\n`-- b\n\n0 directories, 2 files\n"

    def test_nested_partition_is_a_pointer(self) -> None:
        """Partitions inside directories are not descended into."""
        fs = FileSystem()
        root = fs.mount(structure={"mnt": {}})
        backup = fs.create_partition("backup", structure={"secret": ""})
        backup.add_to(root.get_child("mnt"))
        drawing = _draw(fs, "/mnt")
        assert "backup -> /mnt/backup" in drawing
        assert "secret" not in drawing


class TestOptions:
    """Verify visitor construction."""

    def test_default_style(self) -> None:
        """The defaults draw like tree(1)."""
        assert TreeVisitor(io.StringIO()).style == TreeStyle()

    def test_unknown_option(self) -> None:
        """Unknown style options are rejected."""
        with pytest.raises(InvalidArgumentError):
            TreeVisitor(io.StringIO(), colour="red")

    def test_unwritable_output(self) -> None:
        """The output needs a write method."""
        with pytest.raises(InvalidArgumentError):
            TreeVisitor(42)  # type: ignore[arg-type]
