"""File handles — independent cursors over one shared file.

A file's content backend has exactly **one** cursor.  If two callers
open the same file and each expects its own offset, they would trample
each other.  A ``FileHandle`` fixes that by remembering its own
position and doing every operation as:

1. **save** — nothing to save; the handle already owns its position;
2. **seek** — move the shared cursor to the handle's position;
3. **operate** — read, write, truncate...;
4. **recapture** — store the shared cursor back as the handle's position.

Two handles on one file therefore never see each other's offsets, while
still seeing each other's bytes.

``HandleTable`` hands out small integers for open handles, the lowest
free number first, like a process's file-descriptor table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from py_mockfs.content import SeekWhence
from py_mockfs.errors import NotFoundError, StructuralError

if TYPE_CHECKING:
    from py_mockfs.nodes import Node, StatResult

# 0, 1, 2 are stdin, stdout, stderr on a real system.
FIRST_HANDLE = 3


class FileHandle:
    """An open file with its own cursor."""

    def __init__(self, node: Node) -> None:
        """Open a handle on *node*, starting at offset 0.

        Raises:
            StructuralError: If *node* is not a regular file or block.

        """
        if not node.is_file:
            msg = f'"{node.name}" is not a regular file.'
            raise StructuralError(msg)
        self._node = node
        self._position = 0

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"FileHandle(path={self._node.path!r}, position={self._position})"

    @property
    def node(self) -> Node:
        """Return the file behind this handle."""
        return self._node

    @property
    def position(self) -> int:
        """Return this handle's offset."""
        return self._position

    def _restore(self) -> None:
        self._node.seek(self._position)

    def _capture(self) -> None:
        self._position = self._node.tell()

    def open(self) -> bool:
        """Open the underlying content."""
        return self._node.open()

    def close(self) -> bool:
        """Close the underlying content."""
        return self._node.close()

    def flush(self) -> bool:
        """Flush the underlying content."""
        return self._node.flush()

    def unlink(self) -> bool:
        """Remove the file from its directory."""
        return self._node.unlink()

    def stat(self) -> StatResult:
        """Return the file's stat record."""
        return self._node.stat()

    def read(self, count: int) -> bytes:
        """Read up to *count* bytes at this handle's offset."""
        self._restore()
        data = self._node.read(count)
        self._capture()
        return data

    def write(self, data: bytes) -> int:
        """Write *data* at this handle's offset; return bytes written."""
        self._restore()
        written = self._node.write(data)
        self._capture()
        return written

    def truncate(self, size: int) -> bool:
        """Resize the file; this handle's offset is kept."""
        self._restore()
        result = self._node.truncate(size)
        self._capture()
        return result

    def seek(self, offset: int, whence: int = SeekWhence.SET) -> bool:
        """Move this handle's offset.

        Relative seeks start from this handle's offset, not from
        wherever another handle left the shared cursor.  A failed seek
        leaves the offset unchanged, as ``lseek(2)`` does.
        """
        self._restore()
        if not self._node.seek(offset, whence):
            return False
        self._capture()
        return True

    def tell(self) -> int:
        """Return this handle's offset."""
        self._restore()
        self._capture()
        return self._position

    def is_eof(self) -> bool:
        """Return whether this handle's offset is at the end of the file."""
        self._restore()
        return self._node.is_eof()


@dataclass
class HandleTable:
    """Numbered open handles, lowest free number first.

    Example::

        >>> table = HandleTable()
        >>> table.allocate(fs.open("/etc/hosts"))
        3

    """

    _handles: dict[int, FileHandle] = field(default_factory=lambda: {})  # noqa: PIE807

    def allocate(self, handle: FileHandle) -> int:
        """Store *handle* under the lowest free number and return it."""
        number = FIRST_HANDLE
        while number in self._handles:
            number += 1
        self._handles[number] = handle
        return number

    def lookup(self, number: int) -> FileHandle:
        """Return the handle stored under *number*.

        Raises:
            NotFoundError: If *number* is not open.

        """
        handle = self._handles.get(number)
        if handle is None:
            msg = f"Bad file handle: {number}"
            raise NotFoundError(msg)
        return handle

    def close(self, number: int) -> bool:
        """Close and forget the handle stored under *number*.

        Raises:
            NotFoundError: If *number* is not open.

        """
        handle = self.lookup(number)
        del self._handles[number]
        return handle.close()

    def __len__(self) -> int:
        """Return the number of open handles."""
        return len(self._handles)

    def __contains__(self, number: object) -> bool:
        """Return whether *number* is open."""
        return number in self._handles
