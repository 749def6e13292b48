"""Event log — what happened to a file system's tree, and to which node.

Every ``FileSystem`` keeps an append-only ``EventLog``.  Each entry names
its *subject*: the inode number of the node the event happened to and
the path that node had at that moment, so the trail still reads
correctly after the node is renamed or unlinked.

Two subsystems write to it:

- ``LogSource.FS`` — mounts, children added and removed, renames and
  unlinks;
- ``LogSource.QUOTA`` — every time a quota refused an insert, clamped a
  write, or refused a truncate.

Tests and adapters read it back to explain *why* a write came up short::

    >>> for entry in fs.logger.about(file):
    ...     print(entry)
    [WARNING] quota /home/report.txt: Write clamped from 13 to 4 bytes
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

from py_mockfs.errors import FileSystemError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from py_mockfs.nodes import Node


class LogLevel(IntEnum):
    """Severity of an event; levels compare with ``<``."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class LogSource(StrEnum):
    """The subsystem that recorded an event."""

    FS = "fs"
    QUOTA = "quota"


@dataclass(frozen=True)
class LogEntry:
    """One recorded event.

    Attributes:
        level: Severity of the event.
        source: Subsystem that recorded it.
        message: What happened.
        ino: Inode number of the subject node, or ``None`` when the event
            concerns the file system as a whole.
        path: Path of the subject at the time of the event.
        uid: Configured user the event happened on behalf of.

    """

    level: LogLevel
    source: LogSource
    message: str
    ino: int | None = None
    path: str = ""
    uid: int = 0

    def __str__(self) -> str:
        """Format as ``[LEVEL] source path: message``."""
        subject = f" {self.path}" if self.path else ""
        return f"[{self.level.name}] {self.source}{subject}: {self.message}"


class EventLog:
    """Append-only record of tree events, searchable by node."""

    def __init__(self) -> None:
        """Create an empty log."""
        self._entries: list[LogEntry] = []

    def __len__(self) -> int:
        """Return the number of recorded events."""
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        """Iterate over the events, oldest first."""
        return iter(tuple(self._entries))

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every event, oldest first."""
        return list(self._entries)

    def record(
        self,
        level: LogLevel,
        message: str,
        *,
        source: LogSource = LogSource.FS,
        subject: Node | None = None,
        uid: int = 0,
    ) -> LogEntry:
        """Append an event about *subject* and return it.

        The subject's path is captured now; a node that is not attached
        anywhere is recorded by its bare name.
        """
        if subject is None:
            entry = LogEntry(level, LogSource(source), message, uid=uid)
        else:
            entry = LogEntry(level, LogSource(source), message, subject.ino, _describe(subject), uid)
        self._entries.append(entry)
        return entry

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: LogSource | str | None = None,
        ino: int | None = None,
    ) -> list[LogEntry]:
        """Return the events matching every given criterion.

        Args:
            min_level: Keep events at or above this severity.
            source: Keep events from this subsystem.
            ino: Keep events about the node with this inode number.

        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
            and (ino is None or entry.ino == ino)
        ]

    def about(self, node: Node) -> list[LogEntry]:
        """Return every event whose subject was *node*."""
        return self.filter(ino=node.ino)

    def clear(self) -> None:
        """Forget every event."""
        self._entries.clear()


def _describe(node: Node) -> str:
    """Return *node*'s path, falling back to its name when detached."""
    try:
        return node.path
    except FileSystemError:
        return node.name

