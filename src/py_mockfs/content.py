"""Content backends — the bytes behind a regular file.

A regular file does not store bytes itself; it delegates to a
**content backend**.  Most files use ``StreamContent`` (a real, growable
buffer), but a few well-known device files behave differently:

- ``NullContent`` — ``/dev/null``: reads nothing, swallows every write.
- ``ZeroContent`` — ``/dev/zero``: reads NUL bytes forever.
- ``FullContent`` — ``/dev/full``: reads NUL bytes, refuses every write.
- ``RandomContent`` — ``/dev/random``: reads random bytes.

Every backend satisfies the ``Content`` protocol: open/close/unlink,
read/write/truncate, seek/tell/eof, flush, and a ``size``.

Why a Protocol?
    Structural typing — any object with the right methods can back a
    file (a test double, a wrapper around a real file), without
    inheriting from anything here.  ``BaseContent`` is only a
    convenience for the cursor bookkeeping the fixed-behaviour devices
    share.
"""

from __future__ import annotations

import io
from enum import IntEnum
from os import urandom
from typing import BinaryIO, Protocol, runtime_checkable

from py_mockfs.errors import InvalidArgumentError


class SeekWhence(IntEnum):
    """Reference point for seek operations (same values as ``os.SEEK_*``).

    - SET — absolute offset from the beginning of the file.
    - CUR — relative offset from the current position.
    - END — relative offset from the end of the file.
    """

    SET = 0
    CUR = 1
    END = 2


@runtime_checkable
class Content(Protocol):
    """Interface that every content backend must satisfy."""

    @property
    def size(self) -> int:
        """Return the number of stored bytes."""
        ...  # pragma: no cover

    def open(self) -> bool:
        """Prepare the content for I/O."""
        ...  # pragma: no cover

    def close(self) -> bool:
        """Release any per-open state."""
        ...  # pragma: no cover

    def unlink(self) -> bool:
        """Release the content before its file is removed."""
        ...  # pragma: no cover

    def read(self, count: int) -> bytes:
        """Read up to *count* bytes at the cursor."""
        ...  # pragma: no cover

    def write(self, data: bytes) -> int:
        """Write *data* at the cursor and return the bytes written."""
        ...  # pragma: no cover

    def truncate(self, size: int) -> bool:
        """Resize the content to exactly *size* bytes."""
        ...  # pragma: no cover

    def seek(self, offset: int, whence: int = SeekWhence.SET) -> bool:
        """Move the cursor."""
        ...  # pragma: no cover

    def tell(self) -> int:
        """Return the cursor position."""
        ...  # pragma: no cover

    def is_eof(self) -> bool:
        """Return whether the cursor is at the end of the content."""
        ...  # pragma: no cover

    def flush(self) -> bool:
        """Flush buffered writes."""
        ...  # pragma: no cover


class BaseContent:
    """Cursor bookkeeping shared by the fixed-behaviour devices.

    Subclasses override the I/O methods; seeking, telling and the
    open/close/flush/unlink no-ops live here.
    """

    def __init__(self) -> None:
        """Start with the cursor at offset 0."""
        self._position = 0

    @property
    def size(self) -> int:
        """Device contents never occupy space."""
        return 0

    def open(self) -> bool:
        """Nothing to prepare."""
        return True

    def close(self) -> bool:
        """Nothing to release."""
        return True

    def unlink(self) -> bool:
        """Nothing to release."""
        return True

    def flush(self) -> bool:
        """Nothing is buffered."""
        return True

    def read(self, count: int) -> bytes:  # noqa: ARG002
        """Return nothing; subclasses override."""
        return b""

    def write(self, data: bytes) -> int:
        """Accept *data* without storing it."""
        return len(data)

    def truncate(self, size: int) -> bool:  # noqa: ARG002
        """Accept any size without storing anything."""
        return True

    def seek(self, offset: int, whence: int = SeekWhence.SET) -> bool:
        """Move the cursor within ``[0, size]``.

        An unknown *whence* fails without moving.  A target outside the
        content resets the cursor to 0 and fails.
        """
        match whence:
            case SeekWhence.SET:
                position = offset
            case SeekWhence.CUR:
                position = self._position + offset
            case SeekWhence.END:
                position = self.size + offset
            case _:
                return False

        if position < 0 or position > self.size:
            self._position = 0
            return False

        self._position = position
        return True

    def tell(self) -> int:
        """Return the cursor position."""
        return self._position

    def is_eof(self) -> bool:
        """Return whether the cursor has reached the end."""
        return self._position >= self.size


class NullContent(BaseContent):
    """The black hole — absorbs all writes, reads return empty."""

    def is_eof(self) -> bool:
        """Always at the end: there is nothing to read."""
        return True


class ZeroContent(BaseContent):
    """An endless source of NUL bytes that swallows writes."""

    def read(self, count: int) -> bytes:
        """Return *count* NUL bytes."""
        return b"\0" * count

    def is_eof(self) -> bool:
        """Never at the end."""
        return False


class FullContent(BaseContent):
    """A device that is always full: reads NUL bytes, refuses writes."""

    def read(self, count: int) -> bytes:
        """Return *count* NUL bytes."""
        return b"\0" * count

    def write(self, data: bytes) -> int:  # noqa: ARG002
        """Refuse the write; nothing fits."""
        return 0

    def truncate(self, size: int) -> bool:  # noqa: ARG002
        """Refuse to resize."""
        return False

    def is_eof(self) -> bool:
        """Never at the end."""
        return False


class RandomContent(BaseContent):
    """Random byte generator that swallows writes.

    Produces cryptographically random bytes using ``os.urandom()``.
    """

    def read(self, count: int) -> bytes:
        """Return *count* random bytes."""
        return urandom(count)

    def is_eof(self) -> bool:
        """Never at the end."""
        return False


class StreamContent:
    r"""A real byte buffer backed by a seekable binary stream.

    Writing past the end pads the gap with ``\x00`` bytes (like
    ``lseek`` + ``write``).  Truncating never moves the cursor.
    """

    def __init__(self, source: bytes | str | BinaryIO = b"") -> None:
        """Wrap *source*, copying bytes or strings into a fresh buffer.

        Args:
            source: Initial bytes, a string (stored as UTF-8), or an
                already-open seekable binary stream.

        Raises:
            InvalidArgumentError: If *source* is none of those.

        """
        if isinstance(source, str):
            source = source.encode()
        if isinstance(source, bytes | bytearray | memoryview):
            stream: BinaryIO = io.BytesIO(bytes(source))
        elif isinstance(source, io.IOBase) and source.seekable():
            stream = source  # type: ignore[assignment]
        else:
            msg = f"Expected bytes, a string, or a seekable binary stream; {type(source).__name__} given."
            raise InvalidArgumentError(msg)
        stream.seek(0)
        self._stream = stream

    @property
    def size(self) -> int:
        """Return the length of the buffer."""
        position = self._stream.tell()
        end = self._stream.seek(0, SeekWhence.END)
        self._stream.seek(position)
        return end

    def open(self) -> bool:
        """Nothing to prepare."""
        return True

    def close(self) -> bool:
        """Keep the stream open; other handles may still use it."""
        return True

    def unlink(self) -> bool:
        """Nothing to release."""
        return True

    def read(self, count: int) -> bytes:
        """Read up to *count* bytes at the cursor."""
        if count <= 0:
            return b""
        return self._stream.read(count)

    def write(self, data: bytes) -> int:
        """Write *data* at the cursor, padding any gap past the end."""
        return self._stream.write(data)

    def truncate(self, size: int) -> bool:
        r"""Resize to *size* bytes, padding with ``\x00`` when growing."""
        if size < 0:
            return False
        position = self._stream.tell()
        current = self.size
        if size <= current:
            self._stream.truncate(size)
        else:
            self._stream.seek(current)
            self._stream.write(b"\0" * (size - current))
        self._stream.seek(position)
        return True

    def seek(self, offset: int, whence: int = SeekWhence.SET) -> bool:
        """Move the cursor; targets past the end are allowed, negative ones fail."""
        match whence:
            case SeekWhence.SET:
                position = offset
            case SeekWhence.CUR:
                position = self._stream.tell() + offset
            case SeekWhence.END:
                position = self.size + offset
            case _:
                return False

        if position < 0:
            return False
        self._stream.seek(position)
        return True

    def tell(self) -> int:
        """Return the cursor position."""
        return self._stream.tell()

    def is_eof(self) -> bool:
        """Return whether the cursor is at or past the end."""
        return self._stream.tell() >= self.size

    def flush(self) -> bool:
        """Flush the underlying stream."""
        self._stream.flush()
        return True

    def getvalue(self) -> bytes:
        """Return the whole buffer without moving the cursor."""
        position = self._stream.tell()
        self._stream.seek(0)
        data = self._stream.read()
        self._stream.seek(position)
        return data


NAMED_CONTENT: dict[str, type[BaseContent]] = {
    "full": FullContent,
    "null": NullContent,
    "random": RandomContent,
    "zero": ZeroContent,
}
"""Device contents selectable by name in structure definitions."""
