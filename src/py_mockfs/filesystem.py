"""The file system — the context object that owns a whole tree.

A ``FileSystem`` ties everything together:

- the **configuration** every attached node reads;
- the **inode table** (arena) mapping inode numbers to nodes;
- the **partition map**, its only children (``/`` or ``C:\\``, ``D:\\``);
- the **finder** that resolves path strings to nodes;
- the **audit log** of what happened to the tree.

There is no global registry: create as many file systems as you like,
each one fully independent of the others.

Paths:
    ``get_path`` cleans up whatever the caller hands in (surrounding
    whitespace, a leading ``mfs://``, mixed slashes, ``.`` and ``..``
    segments, doubled separators) and returns a canonical path.  The
    result is idempotent: cleaning a clean path changes nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import Any, BinaryIO

from py_mockfs.config import Config
from py_mockfs.content import Content
from py_mockfs.errors import FileSystemError, InvalidArgumentError, NotFoundError, StructuralError
from py_mockfs.finder import Finder
from py_mockfs.handle import FileHandle
from py_mockfs.logging import EventLog, LogLevel, LogSource
from py_mockfs.nodes import ROOT_INODE, SCHEME, Node, NodeKind, Summary
from py_mockfs.structure import add_structure

_SCHEME_PREFIX = re.compile(rf"^{SCHEME}://", re.IGNORECASE)


class FileSystem:
    """A simulated file system: partitions, nodes, config and log."""

    def __init__(self, config: Config | None = None) -> None:
        """Create an empty file system.

        Args:
            config: Behaviour options; POSIX-like defaults when omitted.

        """
        self._config = config if config is not None else Config()
        self._partitions: dict[str, int] = {}
        self._nodes: dict[int, Node] = {}
        self._finder = Finder(self)
        self._logger = EventLog()

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"FileSystem(partitions={len(self._partitions)}, nodes={len(self._nodes)})"

    # -- Context -----------------------------------------------------------

    @property
    def config(self) -> Config:
        """Return the configuration shared by every attached node."""
        return self._config

    @property
    def logger(self) -> EventLog:
        """Return the event log."""
        return self._logger

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: LogSource = LogSource.FS,
        subject: Node | None = None,
    ) -> None:
        """Record an event about *subject* on behalf of the configured user."""
        self._logger.record(level, message, source=source, subject=subject, uid=self._config.user)

    @property
    def finder(self) -> Finder:
        """Return the path resolver."""
        return self._finder

    def set_finder(self, finder: Finder) -> None:
        """Replace the path resolver."""
        self._finder = finder

    def umask(self, mask: int | None = None) -> int:
        """Return the current umask, replacing it when *mask* is given."""
        old = self._config.umask
        if mask is not None:
            self._config.set_umask(mask)
        return old

    # -- Inode table -------------------------------------------------------

    def register(self, node: Node) -> None:
        """Add *node* to the inode table."""
        self._nodes[node.ino] = node

    def forget(self, node: Node) -> None:
        """Drop *node* from the inode table."""
        self._nodes.pop(node.ino, None)

    def node(self, ino: int) -> Node:
        """Return the node with inode number *ino*.

        Raises:
            NotFoundError: If no such node is registered.

        """
        node = self._nodes.get(ino)
        if node is None:
            msg = f"Inode {ino} does not exist."
            raise NotFoundError(msg)
        return node

    # -- Tree position (the root of everything) ------------------------------

    @property
    def ino(self) -> int:
        """Return the sentinel inode number of the file system."""
        return ROOT_INODE

    @property
    def is_container(self) -> bool:
        """The file system holds partitions."""
        return True

    @property
    def parent(self) -> None:
        """The file system never has a parent."""
        return None

    def set_parent(self, parent: object | None) -> None:
        """Refuse any parent.

        Raises:
            StructuralError: If *parent* is not ``None``.

        """
        if parent is not None:
            msg = "The file system cannot have a parent."
            raise StructuralError(msg)

    @property
    def path(self) -> str:
        """The file system is the empty prefix of every path."""
        return ""

    # -- Partitions ----------------------------------------------------------

    def _normalize(self, name: str) -> str:
        """Return the partition-map key for *name*.

        ``C``, ``C:`` and ``C:\\`` all map to the same key.
        """
        config = self._config
        key = name.rstrip(config.file_separator)
        if config.partition_separator:
            key = key.rstrip(config.partition_separator)
        key = key + config.partition_separator + config.file_separator
        if config.ignore_case:
            return key.upper()
        return key

    def add_child(self, partition: Node) -> None:
        """Mount *partition* at the top level.

        Raises:
            InvalidArgumentError: If *partition* is not a partition.

        """
        if not isinstance(partition, Node) or not partition.is_partition:
            msg = "Only partitions can be added to the file system."
            raise InvalidArgumentError(msg)

        partition.attach(self)
        partition.set_parent(self)
        self._partitions[self._normalize(partition.name)] = partition.ino

    def insert(self, partition: Node) -> None:
        """Store *partition* without any checks (used to undo a detach)."""
        self._partitions[self._normalize(partition.name)] = partition.ino
        partition.set_parent(self)

    def release(self, partition: Node) -> None:
        """Drop every partition-map entry that refers to *partition*."""
        for key in [k for k, ino in self._partitions.items() if ino == partition.ino]:
            del self._partitions[key]

    def has_child(self, name: str) -> bool:
        """Return whether a partition called *name* is mounted."""
        return self._normalize(name) in self._partitions

    def get_child(self, name: str) -> Node:
        """Return the partition called *name*.

        Raises:
            NotFoundError: If no such partition is mounted.

        """
        ino = self._partitions.get(self._normalize(name))
        if ino is None:
            msg = f'Partition "{name}" does not exist.'
            raise NotFoundError(msg)
        return self.node(ino)

    def remove_child(self, name: str) -> bool:
        """Unmount the partition called *name*; return whether one was removed."""
        ino = self._partitions.pop(self._normalize(name), None)
        if ino is None:
            return False
        partition = self.node(ino)
        partition.clear_parent(ROOT_INODE)
        self.log(LogLevel.DEBUG, f"Removed partition {name!r}", subject=partition)
        return True

    def children(self) -> list[Node]:
        """Return the mounted partitions in mount order."""
        return [self.node(ino) for ino in self._partitions.values()]

    def __iter__(self) -> Iterator[Node]:
        """Iterate over the mounted partitions."""
        return iter(self.children())

    def summary(self, user: int | None = None, group: int | None = None) -> Summary:
        """Return the totals of every mounted partition combined."""
        size = 0
        file_count = 0
        for partition in self.children():
            sub = partition.summary(user, group)
            size += sub.size
            file_count += sub.file_count
        return Summary(size=size, file_count=file_count)

    # -- Paths -------------------------------------------------------------

    def _sanitize(self, path: str) -> str:
        """Trim whitespace and scheme, unify slashes, drop trailing separators."""
        config = self._config
        separator = config.file_separator

        path = path.strip()
        while _SCHEME_PREFIX.match(path):
            path = _SCHEME_PREFIX.sub("", path, count=1).strip()

        if config.normalize_slashes:
            path = path.replace("/", separator).replace("\\", separator)

        return path.rstrip(separator)

    def _resolve(self, path: str) -> list[str]:
        """Split a sanitized path into segments, applying ``.`` and ``..``.

        The first segment is the partition and is always kept; ``..``
        never climbs above it.
        """
        segments = path.split(self._config.file_separator)
        resolved = segments[:1]
        for segment in segments[1:]:
            match segment:
                case "" | ".":
                    continue
                case "..":
                    if len(resolved) > 1:
                        resolved.pop()
                case _:
                    resolved.append(segment)
        return resolved

    def get_path(self, path: str | None = None) -> str:
        """Return the canonical form of *path* (``""`` for ``None``).

        Example::

            >>> fs.get_path("mfs:///a/b/../c/./")
            '/a/c'

        """
        if path is None:
            return ""

        # Resolving can expose whitespace or a ".." that sanitizing hid,
        # so repeat until the path is stable.
        separator = self._config.file_separator
        previous = None
        while path != previous:
            previous = path
            path = separator.join(self._resolve(self._sanitize(path)))
        return path

    def get_url(self, path: str | None = None) -> str:
        """Return ``mfs://`` followed by the canonical *path*."""
        return f"{SCHEME}://{self.get_path(path)}"

    def split_path(self, path: str) -> list[str]:
        """Return the canonical segments of *path*, partition first."""
        return self.get_path(path).split(self._config.file_separator)

    # -- Lookup --------------------------------------------------------------

    def find(self, path: str) -> Node | None:
        """Return the node at *path*, or ``None``."""
        return self._finder.find(path)

    def find_by_type(self, path: str, kind: NodeKind) -> Node | None:
        """Return the node at *path* only if it is of *kind*."""
        node = self.find(path)
        if node is None or node.kind is not kind:
            return None
        return node

    def open(self, path: str) -> FileHandle:
        """Open the file or block at *path* and return a new handle.

        Raises:
            NotFoundError: If *path* does not name a file or block.

        """
        node = self.find(path)
        if node is None or not node.is_file:
            msg = f'File "{path}" does not exist.'
            raise NotFoundError(msg)
        handle = FileHandle(node)
        handle.open()
        return handle

    # -- Factories -----------------------------------------------------------

    def create_partition(
        self,
        name: str = "",
        permissions: int | None = None,
        structure: Mapping[str, Any] | None = None,
    ) -> Node:
        """Create an attached (but not mounted) partition.

        *name* may carry separators (``"C:\\"``); they are stripped.
        """
        config = self._config
        clean = self.get_path(name).rstrip(config.file_separator)
        if config.partition_separator:
            clean = clean.rstrip(config.partition_separator)

        partition = Node.partition(clean, permissions).attach(self)
        if structure is not None:
            add_structure(self, structure, partition)
        return partition

    def create_directory(
        self,
        name: str,
        permissions: int | None = None,
        structure: Mapping[str, Any] | None = None,
    ) -> Node:
        """Create an attached directory, optionally populated from *structure*."""
        directory = Node.directory(name, permissions).attach(self)
        if structure is not None:
            add_structure(self, structure, directory)
        return directory

    def create_file(
        self,
        name: str,
        content: Content | bytes | str | BinaryIO | None = None,
        permissions: int | None = None,
    ) -> Node:
        """Create an attached regular file."""
        return Node.regular_file(name, permissions, content).attach(self)

    def create_block(
        self,
        name: str,
        content: Content | bytes | str | BinaryIO | None = None,
        permissions: int | None = None,
    ) -> Node:
        """Create an attached block device."""
        return Node.block(name, permissions, content).attach(self)

    def mount(
        self,
        name: str = "",
        permissions: int | None = None,
        structure: Mapping[str, Any] | None = None,
    ) -> Node:
        """Create a partition and mount it at the top level.

        Example::

            >>> fs = FileSystem()
            >>> root = fs.mount(structure={"etc": {"hosts": "127.0.0.1"}})
            >>> fs.find("/etc/hosts").read(9)
            b'127.0.0.1'

        """
        partition = self.create_partition(name, permissions, structure)
        self.add_child(partition)
        self.log(LogLevel.INFO, f"Mounted partition {partition.path}", subject=partition)
        return partition

    # -- Tree operations -----------------------------------------------------

    def rename(self, node: Node, new_parent: Node | FileSystem, new_name: str) -> Node:
        """Move *node* under *new_parent* as *new_name*.

        The new name is validated before anything changes.  If the new
        parent refuses the node (cycle, quota), the old name and parent
        are restored and the error is re-raised.

        Raises:
            InvalidArgumentError: If *new_name* is not a legal name.
            RecursionError: If *new_parent* lies inside *node*.
            NoDiskSpaceError: If the destination quota has no room.

        """
        node.validate_name(new_name, self._config)

        old_name = node.name
        old_path = node.path
        previous = node.parent
        was_mounted = node.is_partition and self._partitions.get(self._normalize(old_name)) == node.ino

        if isinstance(previous, Node):
            previous.detach_child(node)
        if was_mounted:
            self.release(node)

        node.set_name(new_name)
        try:
            new_parent.add_child(node)
        except FileSystemError:
            node.set_name(old_name)
            if was_mounted:
                self.insert(node)
            if isinstance(previous, Node):
                previous.insert(node)
            raise

        self.log(LogLevel.INFO, f"Renamed {old_path} to {node.path}", subject=node)
        return node
