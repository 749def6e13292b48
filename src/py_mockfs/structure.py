"""Build a subtree from a nested mapping.

Writing ``create_directory`` / ``add_child`` by hand for every fixture
gets tedious.  A structure describes a tree as plain data::

    {
        "etc": {
            "hosts": "127.0.0.1 localhost",
        },
        "dev": {
            "[null]": None,          # block backed by NullContent
            "[sda]": b"\\x00" * 512,  # block with real bytes
        },
        "README": b"hello",
    }

- a **mapping** becomes a directory (recursively);
- **bytes**, a **string** or a content backend becomes a regular file;
- a name in **brackets** becomes a block device.  With ``None`` as data,
  a block named ``full``, ``null``, ``random`` or ``zero`` gets the
  matching device content; any other block starts empty.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from py_mockfs.content import NAMED_CONTENT, Content
from py_mockfs.errors import InvalidArgumentError

if TYPE_CHECKING:
    from py_mockfs.filesystem import FileSystem
    from py_mockfs.nodes import Node


def add_structure(fs: FileSystem, structure: Mapping[str, Any], parent: Node) -> None:
    """Create the nodes described by *structure* under *parent*.

    Raises:
        InvalidArgumentError: If a name is not a string or the data has
            an unsupported type.

    """
    for name, data in structure.items():
        if not isinstance(name, str):
            msg = f"File name must be a string; received {type(name).__name__}."
            raise InvalidArgumentError(msg)
        _add_component(fs, parent, name, data)


def _add_component(fs: FileSystem, parent: Node, name: str, data: Any) -> None:
    if isinstance(data, Mapping):
        fs.create_directory(name, structure=data).add_to(parent)
        return

    if len(name) > 1 and name.startswith("[") and name.endswith("]"):
        _add_block(fs, parent, name[1:-1], data)
        return

    if isinstance(data, (bytes, str, Content)):
        fs.create_file(name, content=data).add_to(parent)
        return

    msg = f"Data must be bytes, a string or a mapping; received {type(data).__name__}."
    raise InvalidArgumentError(msg)


def _add_block(fs: FileSystem, parent: Node, name: str, data: Any) -> None:
    if data is None:
        device = NAMED_CONTENT.get(name.lower())
        if device is not None:
            data = device()
    elif not isinstance(data, (bytes, str, Content)):
        msg = f"Block data must be bytes, a string or None; received {type(data).__name__}."
        raise InvalidArgumentError(msg)
    fs.create_block(name, content=data).add_to(parent)
