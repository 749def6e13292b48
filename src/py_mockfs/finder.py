"""Finder — turn a path string into a node.

Resolution walks the tree one segment at a time, starting at the file
system.  The first segment selects a partition (``""`` for ``/``,
``C:`` for ``C:\\``); each later segment descends into a directory.

The walk stops with ``None`` as soon as a segment is missing or the
current node cannot have children: ``/etc/hosts/x`` does not resolve
even though ``/etc/hosts`` does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_mockfs.filesystem import FileSystem
    from py_mockfs.nodes import Node


class Finder:
    """Resolve canonical paths against one file system."""

    def __init__(self, fs: FileSystem) -> None:
        """Bind the finder to *fs*."""
        self._fs = fs

    @property
    def file_system(self) -> FileSystem:
        """Return the file system searched by this finder."""
        return self._fs

    def find(self, path: str) -> Node | None:
        """Return the node at *path*, or ``None`` if it does not resolve."""
        current: Node | FileSystem = self._fs
        for segment in self._fs.split_path(path):
            if not current.is_container or not current.has_child(segment):
                return None
            current = current.get_child(segment)

        if current is self._fs:
            return None
        return current  # type: ignore[return-value]
