"""Nodes — the members of the simulated file tree.

Every member of the tree is a ``Node``: regular files, block devices,
directories and partitions.  Rather than a class per kind, a node
carries a **kind tag** plus a small payload that holds what only that
kind needs:

- ``FileData`` — the content backend of a regular file or block.
- ``DirectoryData`` — ``normalized name -> inode number`` for children.
- ``PartitionData`` — a directory that also owns a quota.

Behaviour that differs by kind (size, type bits, default permissions)
is chosen with ``match`` on the tag.

Why inode numbers instead of object references for parents?
    Nodes live in their file system's inode table (the arena).  A child
    remembers its parent's inode number, never the parent object, so
    there are no reference cycles and walking up the tree is a chain of
    table lookups.  The file system itself is the sentinel parent
    ``ROOT_INODE`` (0) of every top-level partition.

Lifecycle:
    A node can be built on its own, but it only becomes fully usable
    once ``attach()`` hands it a file system.  Attaching validates the
    name against the configuration and fills in the owner, group and
    permissions the caller left unset.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from itertools import count
from time import time
from typing import TYPE_CHECKING, BinaryIO, NamedTuple

from py_mockfs.content import Content, SeekWhence, StreamContent
from py_mockfs.errors import (
    ConfigurationError,
    FileSystemError,
    InvalidArgumentError,
    NoDiskSpaceError,
    NotFoundError,
    RecursionError,
    StructuralError,
)
from py_mockfs.logging import LogLevel, LogSource
from py_mockfs.permissions import (
    DEFAULT_DIRECTORY_PERMISSIONS,
    DEFAULT_FILE_PERMISSIONS,
    Access,
    apply_umask,
    is_allowed,
)
from py_mockfs.quota import UNLIMITED, QuotaManager, QuotaPolicy

if TYPE_CHECKING:
    from py_mockfs.config import Config
    from py_mockfs.filesystem import FileSystem

SCHEME = "mfs"
"""URL scheme of paths inside a simulated file system (``mfs://``)."""

ROOT_INODE = 0
"""Inode number standing for the file system itself."""

UNSET = -1


class NodeKind(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    BLOCK = "block"
    DIRECTORY = "directory"
    PARTITION = "partition"


class TypeBits(IntEnum):
    """File-type bits reported in ``stat().mode``."""

    FILE = 0o100000
    DIRECTORY = 0o040000
    BLOCK = 0o060000


class StatResult(NamedTuple):
    """The 13-field record returned by ``stat``.

    Like ``os.stat_result``, fields are reachable by position
    (``st[2]``) and by name (``st.mode``).
    """

    dev: int
    ino: int
    mode: int
    nlink: int
    uid: int
    gid: int
    rdev: int
    size: int
    atime: int
    mtime: int
    ctime: int
    blksize: int
    blocks: int


@dataclass(frozen=True)
class Summary:
    """Total size and node count of a subtree."""

    size: int
    file_count: int


@dataclass
class FileData:
    """Payload of regular files and blocks."""

    content: Content


@dataclass
class DirectoryData:
    """Payload of directories: children by normalized name."""

    children: dict[str, int] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]


@dataclass
class PartitionData(DirectoryData):
    """Payload of partitions: a directory with its own quota."""

    quota: QuotaPolicy | None = None
    quota_manager: QuotaManager | None = None


# Module-level inode counter, same pattern as PID generation.
_inode_counter = count(start=ROOT_INODE + 1)


def _now() -> int:
    """Return the current time in whole seconds."""
    return int(time())


def coerce_content(content: Content | bytes | str | BinaryIO | None) -> Content:
    """Turn *content* into a content backend.

    ``None`` becomes an empty buffer; bytes, strings and binary streams
    are wrapped in ``StreamContent``.

    Raises:
        InvalidArgumentError: If *content* cannot back a file.

    """
    if content is None:
        return StreamContent(b"")
    if isinstance(content, Content):
        return content
    return StreamContent(content)


class Node:
    """A member of the file tree, tagged with its kind."""

    def __init__(
        self,
        name: str,
        kind: NodeKind,
        payload: FileData | DirectoryData,
        permissions: int | None = None,
    ) -> None:
        """Create a detached node.

        Prefer the ``regular_file``/``block``/``directory``/``partition``
        constructors, which build the matching payload.
        """
        self.ino: int = next(_inode_counter)
        self.kind = kind
        self.payload = payload
        self._name = name
        self._permissions = UNSET if permissions is None else permissions
        self._owner = UNSET
        self._group = UNSET
        now = _now()
        self._atime = now
        self._mtime = now
        self._ctime = now
        self._fs: FileSystem | None = None
        self._parent_ino: int | None = None

    # -- Constructors ------------------------------------------------------

    @classmethod
    def regular_file(
        cls,
        name: str,
        permissions: int | None = None,
        content: Content | bytes | str | BinaryIO | None = None,
    ) -> Node:
        """Create a regular file holding *content* (empty by default)."""
        return cls(name, NodeKind.FILE, FileData(coerce_content(content)), permissions)

    @classmethod
    def block(
        cls,
        name: str,
        permissions: int | None = None,
        content: Content | bytes | str | BinaryIO | None = None,
    ) -> Node:
        """Create a block device holding *content*."""
        return cls(name, NodeKind.BLOCK, FileData(coerce_content(content)), permissions)

    @classmethod
    def directory(cls, name: str, permissions: int | None = None) -> Node:
        """Create an empty directory."""
        return cls(name, NodeKind.DIRECTORY, DirectoryData(), permissions)

    @classmethod
    def partition(cls, name: str, permissions: int | None = None) -> Node:
        """Create an empty partition with no quota."""
        node = cls(name, NodeKind.PARTITION, PartitionData(), permissions)
        node.set_quota_manager(QuotaManager(node))
        return node

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"Node(kind={self.kind.value}, name={self._name!r}, ino={self.ino})"

    # -- Kind ---------------------------------------------------------------

    @property
    def is_container(self) -> bool:
        """Return True for directories and partitions."""
        return self.kind in {NodeKind.DIRECTORY, NodeKind.PARTITION}

    @property
    def is_partition(self) -> bool:
        """Return True for partitions."""
        return self.kind is NodeKind.PARTITION

    @property
    def is_file(self) -> bool:
        """Return True for regular files and blocks."""
        return self.kind in {NodeKind.FILE, NodeKind.BLOCK}

    @property
    def type_bits(self) -> int:
        """Return the file-type bits reported by ``stat``."""
        match self.kind:
            case NodeKind.FILE:
                return TypeBits.FILE
            case NodeKind.BLOCK:
                return TypeBits.BLOCK
            case NodeKind.DIRECTORY | NodeKind.PARTITION:
                return TypeBits.DIRECTORY

    @property
    def default_permissions(self) -> int:
        """Return the permissions used when none were given."""
        match self.kind:
            case NodeKind.FILE | NodeKind.BLOCK:
                return DEFAULT_FILE_PERMISSIONS
            case NodeKind.DIRECTORY | NodeKind.PARTITION:
                return DEFAULT_DIRECTORY_PERMISSIONS

    @property
    def size(self) -> int:
        """Return the content size; containers are always 0.

        Use ``summary()`` for the size of everything inside a container.
        """
        match self.payload:
            case FileData(content=content):
                return content.size
            case _:
                return 0

    # -- Configuration -----------------------------------------------------

    @property
    def file_system(self) -> FileSystem | None:
        """Return the file system this node is attached to, if any."""
        return self._fs

    @property
    def config(self) -> Config:
        """Return the configuration of the attached file system.

        Raises:
            ConfigurationError: If the node is not attached yet.

        """
        return self._require_fs().config

    def attach(self, fs: FileSystem) -> Node:
        """Attach this node (and any children) to *fs*.

        Validates the name, registers the node in the file system's
        inode table, and fills in unset owner, group and permissions
        from the configuration (permissions are the kind's default with
        the umask removed).

        Raises:
            InvalidArgumentError: If the name breaks the configured rules.

        """
        config = fs.config
        self.validate_name(self._name, config)
        children = self._child_nodes() if self.is_container else []

        self._fs = fs
        fs.register(self)

        if self._owner == UNSET:
            self._owner = config.user
        if self._group == UNSET:
            self._group = config.group
        if self._permissions == UNSET:
            self._permissions = apply_umask(self.default_permissions, config.umask)

        for child in children:
            child.attach(fs)
        return self

    def _require_fs(self) -> FileSystem:
        """Return the attached file system or raise."""
        if self._fs is None:
            msg = "Config not set."
            raise ConfigurationError(msg)
        return self._fs

    def _log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: LogSource = LogSource.FS,
        subject: Node | None = None,
    ) -> None:
        """Record an event about *subject* (this node by default), if attached."""
        if self._fs is not None:
            self._fs.log(level, message, source=source, subject=self if subject is None else subject)

    # -- Naming ------------------------------------------------------------

    @property
    def name(self) -> str:
        """Return the node's name."""
        return self._name

    def set_name(self, name: str) -> None:
        """Rename the node in place (validated once attached).

        Does not re-key the node inside its parent; use
        ``FileSystem.rename`` to move or rename a node in the tree.
        """
        if self._fs is not None:
            self.validate_name(name, self._fs.config)
        self._name = name

    @property
    def allows_empty_name(self) -> bool:
        """Return True for partitions, which may be unnamed (``/``)."""
        return self.is_partition

    @property
    def is_dot(self) -> bool:
        """Return True for the synthetic ``.`` and ``..`` entries."""
        return self._name in {".", ".."}

    def validate_name(self, name: str, config: Config) -> None:
        """Check *name* against the naming rules of *config*.

        Raises:
            InvalidArgumentError: If the name is ``.``/``..``, empty
                (where not allowed), or contains a forbidden character.

        """
        if name in {".", ".."}:
            msg = 'Name cannot be "." or ".."'
            raise InvalidArgumentError(msg)

        if not name and not self.allows_empty_name:
            msg = "Name cannot be empty."
            raise InvalidArgumentError(msg)

        for label, char in config.forbidden_characters():
            if char in name:
                msg = f'Name cannot contain a "{label}" character.'
                raise InvalidArgumentError(msg)

    # -- Ownership and permissions -----------------------------------------

    @property
    def owner(self) -> int:
        """Return the owner uid (-1 until attached)."""
        return self._owner

    @property
    def group(self) -> int:
        """Return the group gid (-1 until attached)."""
        return self._group

    @property
    def permissions(self) -> int:
        """Return the permission bits (-1 until attached or set)."""
        return self._permissions

    def set_owner(self, user: int) -> None:
        """Change the owner."""
        self.set_change_time()
        self._owner = user

    def set_group(self, group: int) -> None:
        """Change the group."""
        self.set_change_time()
        self._group = group

    def set_permissions(self, permissions: int) -> None:
        """Change the permission bits."""
        self.set_change_time()
        self._permissions = permissions

    def _allows(self, access: Access, user: int, group: int) -> bool:
        return is_allowed(
            self._permissions,
            access,
            owner=self._owner,
            group=self._group,
            user=user,
            request_group=group,
        )

    def is_readable(self, user: int, group: int) -> bool:
        """Return whether *user*/*group* may read this node."""
        return self._allows(Access.READ, user, group)

    def is_writable(self, user: int, group: int) -> bool:
        """Return whether *user*/*group* may write this node."""
        return self._allows(Access.WRITE, user, group)

    def is_executable(self, user: int, group: int) -> bool:
        """Return whether *user*/*group* may execute (or enter) this node."""
        return self._allows(Access.EXECUTE, user, group)

    # -- Timestamps --------------------------------------------------------

    @property
    def atime(self) -> int:
        """Return the last access time."""
        return self._atime

    @property
    def mtime(self) -> int:
        """Return the last modification time."""
        return self._mtime

    @property
    def ctime(self) -> int:
        """Return the last metadata change time."""
        return self._ctime

    def set_access_time(self, timestamp: int | None = None) -> None:
        """Set the access time (now by default)."""
        self._atime = _now() if timestamp is None else timestamp

    def set_modify_time(self, timestamp: int | None = None) -> None:
        """Set the modification time (now by default)."""
        self._mtime = _now() if timestamp is None else timestamp

    def set_change_time(self, timestamp: int | None = None) -> None:
        """Set the change time (now by default)."""
        self._ctime = _now() if timestamp is None else timestamp

    def touch(self, *, access_time: int | None = None, modify_time: int | None = None) -> None:
        """Update timestamps like ``touch(1)``.

        The modification time defaults to now; the access time defaults
        to the modification time.
        """
        mtime = _now() if modify_time is None else modify_time
        self.set_modify_time(mtime)
        self.set_access_time(mtime if access_time is None else access_time)

    def stat(self) -> StatResult:
        """Return a POSIX-like stat record for this node."""
        return StatResult(
            dev=0,
            ino=self.ino,
            mode=self.type_bits | self._permissions,
            nlink=1,
            uid=self._owner,
            gid=self._group,
            rdev=0,
            size=self.size,
            atime=self._atime,
            mtime=self._mtime,
            ctime=self._ctime,
            blksize=-1,
            blocks=-1,
        )

    # -- Tree position -----------------------------------------------------

    @property
    def parent_ino(self) -> int | None:
        """Return the parent's inode number (``ROOT_INODE`` for the file system)."""
        return self._parent_ino

    @property
    def parent(self) -> Node | FileSystem | None:
        """Return the parent container, looked up in the inode table."""
        if self._parent_ino is None:
            return None
        fs = self._require_fs()
        if self._parent_ino == ROOT_INODE:
            return fs
        return fs.node(self._parent_ino)

    def check_parent(self, parent: Node | FileSystem | None) -> None:
        """Raise if *parent* has this node among its ancestors (or is it).

        Raises:
            RecursionError: If the assignment would create a cycle.

        """
        node = parent
        while node is not None:
            if node is self:
                msg = "A parent cannot contain a child reference to itself."
                raise RecursionError(msg)
            node = node.parent

    def set_parent(self, parent: Node | FileSystem | None) -> None:
        """Point this node at *parent* after checking for cycles."""
        self.check_parent(parent)
        self._parent_ino = None if parent is None else parent.ino

    @property
    def enclosing_partition(self) -> Node | None:
        """Return the nearest enclosing partition (self included)."""
        node: Node | FileSystem | None = self
        while isinstance(node, Node):
            if node.is_partition:
                return node
            node = node.parent
        return None

    def free_disk_space(self, candidate: Node | None = None) -> int:
        """Return the room left in this node's partition.

        Args:
            candidate: The node about to be inserted, if any.

        Returns:
            ``UNLIMITED`` when no partition or quota limits the caller.

        """
        partition = self.enclosing_partition
        if partition is None:
            return UNLIMITED
        return partition.quota_manager.free_disk_space(candidate)

    @property
    def path(self) -> str:
        """Return the full path of this node.

        Top-level partitions render as mount roots (``/`` or ``C:\\``);
        parentless nodes render as their bare name.
        """
        if self.is_partition and self._parent_ino in {None, ROOT_INODE}:
            config = self.config
            return self._name + config.partition_separator + config.file_separator

        parent = self.parent
        if parent is None:
            return self._name

        separator = self.config.file_separator
        return parent.path.rstrip(separator) + separator + self._name

    @property
    def url(self) -> str:
        """Return ``mfs://`` followed by the path."""
        return f"{SCHEME}://{self.path}"

    def add_to(self, container: Node | FileSystem) -> Node:
        """Move this node into *container*.

        The node is first detached from its current parent (unless that
        parent is the file system itself).  If *container* refuses the
        node, it is put back where it was.
        """
        previous = self.parent
        if isinstance(previous, Node):
            previous.detach_child(self)

        try:
            container.add_child(self)
        except FileSystemError:
            if isinstance(previous, Node):
                previous.insert(self)
            raise
        return self

    # -- Container operations ----------------------------------------------

    def _directory(self) -> DirectoryData:
        """Return the directory payload or raise for leaves."""
        match self.payload:
            case DirectoryData() as data:
                return data
            case _:
                msg = f'"{self._name}" is not a directory.'
                raise StructuralError(msg)

    def _partition_data(self) -> PartitionData:
        """Return the partition payload or raise for other kinds."""
        match self.payload:
            case PartitionData() as data:
                return data
            case _:
                msg = f'"{self._name}" is not a partition.'
                raise StructuralError(msg)

    def _normalize(self, name: str) -> str:
        """Return the lookup key for *name* (upper-cased if ignoring case)."""
        if self.config.ignore_case:
            return name.upper()
        return name

    def _child_nodes(self) -> list[Node]:
        """Return the children in insertion order without touching timestamps."""
        data = self._directory()
        if not data.children:
            return []
        fs = self._require_fs()
        return [fs.node(ino) for ino in data.children.values()]

    def add_child(self, child: Node) -> None:
        """Insert *child* under this directory.

        Steps: attach the child to this file system; refuse cycles;
        refuse the child if the partition has no room for it; register
        partitions at the top level as well; then detach the child from
        any previous directory and store it under its normalized name.

        A child already stored under the same name is detached.  A
        displaced file or block is also dropped from the inode table;
        a displaced container keeps its entries so its own children can
        still find it.

        Raises:
            RecursionError: If *child* is this node or one of its ancestors.
            NoDiskSpaceError: If the quota has no room for *child*.

        """
        data = self._directory()
        fs = self._require_fs()
        child.attach(fs)
        child.check_parent(self)

        if self.free_disk_space(child) == 0:
            self._log(
                LogLevel.WARNING,
                f"No disk space for {child.name!r} in {self.path}",
                source=LogSource.QUOTA,
                subject=child,
            )
            msg = "Not enough disk space"
            raise NoDiskSpaceError(msg)

        previous = child.parent
        if child.is_partition:
            fs.add_child(child)
        if isinstance(previous, Node):
            previous.release(child)

        child.set_parent(self)
        self.set_modify_time()

        key = self._normalize(child.name)
        displaced = data.children.get(key)
        data.children[key] = child.ino
        if displaced is not None and displaced != child.ino:
            old = fs.node(displaced)
            old.clear_parent(self.ino)
            if old.is_file:
                fs.forget(old)
        self._log(LogLevel.DEBUG, f"Added {child.kind.value} {child.name!r} to {self.path}", subject=child)

    def insert(self, child: Node) -> None:
        """Store *child* without quota checks (used to undo a detach)."""
        data = self._directory()
        data.children[self._normalize(child.name)] = child.ino
        child.set_parent(self)

    def release(self, child: Node) -> bool:
        """Drop every entry that refers to *child*; return whether any did."""
        data = self._directory()
        keys = [k for k, ino in data.children.items() if ino == child.ino]
        for key in keys:
            del data.children[key]
        return bool(keys)

    def clear_parent(self, parent_ino: int) -> None:
        """Forget the parent if it is still *parent_ino*."""
        if self._parent_ino == parent_ino:
            self._parent_ino = None

    def has_child(self, name: str) -> bool:
        """Return whether a child with *name* exists."""
        return self._normalize(name) in self._directory().children

    def get_child(self, name: str) -> Node:
        """Return the child called *name*.

        Raises:
            NotFoundError: If there is no such child.

        """
        data = self._directory()
        ino = data.children.get(self._normalize(name))
        if ino is None:
            msg = f'Child "{name}" does not exist.'
            raise NotFoundError(msg)
        self.set_access_time()
        return self._require_fs().node(ino)

    def remove_child(self, name: str) -> bool:
        """Remove the child called *name*; return whether one was removed."""
        ino = self._directory().children.get(self._normalize(name))
        if ino is None:
            return False
        return self.detach_child(self._require_fs().node(ino))

    def detach_child(self, child: Node) -> bool:
        """Remove *child* by inode, whatever name it carries now.

        Returns:
            Whether this directory held *child*.

        """
        if not self.release(child):
            return False
        self.set_modify_time()
        self._log(LogLevel.DEBUG, f"Removed {child.name!r} from {self.path}", subject=child)
        child.clear_parent(self.ino)
        return True

    def children(self) -> list[Node]:
        """Return the children in insertion order."""
        self.set_access_time()
        return self._child_nodes()

    @property
    def child_count(self) -> int:
        """Return the number of direct children."""
        return len(self._directory().children)

    def __iter__(self) -> Iterator[Node]:
        """Iterate over the children, preceded by ``.``/``..`` if configured."""
        children = self.children()
        if self.config.include_dot_files:
            yield Node.directory(".")
            yield Node.directory("..")
        yield from children

    def summary(self, user: int | None = None, group: int | None = None) -> Summary:
        """Return the size and node count of this subtree.

        Directories count as nodes too.  Nested partitions are skipped:
        they keep their own accounting.

        Args:
            user: Only count nodes owned by this user.
            group: Only count nodes in this group.

        """
        size = 0
        file_count = 0

        for child in self._child_nodes():
            if child.is_partition:
                continue

            if child.is_container:
                sub = child.summary(user, group)
                size += sub.size
                file_count += sub.file_count

            if user is not None and user != child.owner:
                continue
            if group is not None and group != child.group:
                continue

            size += child.size
            file_count += 1

        return Summary(size=size, file_count=file_count)

    # -- Partition operations ----------------------------------------------

    @property
    def quota(self) -> QuotaPolicy | None:
        """Return the partition's quota, if any."""
        return self._partition_data().quota

    def set_quota(self, quota: QuotaPolicy | None) -> None:
        """Attach (or with ``None``, detach) a quota."""
        self._partition_data().quota = quota

    @property
    def quota_manager(self) -> QuotaManager:
        """Return the free-space calculator of this partition."""
        manager = self._partition_data().quota_manager
        if manager is None:
            manager = QuotaManager(self)
            self._partition_data().quota_manager = manager
        return manager

    def set_quota_manager(self, manager: QuotaManager) -> None:
        """Replace the free-space calculator."""
        self._partition_data().quota_manager = manager

    # -- File operations ---------------------------------------------------

    def _file(self) -> FileData:
        """Return the file payload or raise for containers."""
        match self.payload:
            case FileData() as data:
                return data
            case _:
                msg = f'"{self._name}" is not a regular file.'
                raise StructuralError(msg)

    @property
    def content(self) -> Content:
        """Return the content backend."""
        return self._file().content

    def set_content(self, content: Content | bytes | str | BinaryIO | None) -> None:
        """Replace the content backend.

        Raises:
            InvalidArgumentError: If *content* cannot back a file.

        """
        self._file().content = coerce_content(content)

    def set_content_from_string(self, data: bytes | str) -> None:
        """Replace the content with a fresh buffer holding *data*."""
        self._file().content = StreamContent(data)

    def open(self) -> bool:
        """Open the content for I/O."""
        content = self._file().content
        self.set_access_time()
        return content.open()

    def close(self) -> bool:
        """Close the content."""
        return self._file().content.close()

    def read(self, count: int) -> bytes:
        """Read up to *count* bytes at the content cursor."""
        content = self._file().content
        self.set_access_time()
        return content.read(count)

    def write(self, data: bytes) -> int:
        """Write *data* at the cursor, clamped to the free disk space.

        When the partition's quota is limited, the allowance is the free
        space adjusted by the cursor's slack (``tell - size``); anything
        beyond it is dropped.

        Returns:
            The number of bytes actually written.

        """
        content = self._file().content
        remaining = self.free_disk_space()
        if remaining != UNLIMITED:
            remaining += content.tell() - content.size
            allowed = max(0, remaining)
            if len(data) > allowed:
                self._log(
                    LogLevel.WARNING,
                    f"Write clamped from {len(data)} to {allowed} bytes",
                    source=LogSource.QUOTA,
                )
                data = data[:allowed]

        self.set_modify_time()
        return content.write(data)

    def truncate(self, size: int) -> bool:
        """Resize the content to *size* bytes if the quota allows growth.

        Returns:
            False (with nothing changed) when the growth exceeds the free
            space, otherwise the backend's answer.

        """
        content = self._file().content
        remaining = self.free_disk_space()
        if remaining != UNLIMITED and (size - content.size) > remaining:
            self._log(
                LogLevel.WARNING,
                f"Truncate to {size} bytes refused",
                source=LogSource.QUOTA,
            )
            return False

        self.set_modify_time()
        return content.truncate(size)

    def seek(self, offset: int, whence: int = SeekWhence.SET) -> bool:
        """Move the content cursor."""
        return self._file().content.seek(offset, whence)

    def tell(self) -> int:
        """Return the content cursor."""
        return self._file().content.tell()

    def is_eof(self) -> bool:
        """Return whether the content cursor is at the end."""
        return self._file().content.is_eof()

    def flush(self) -> bool:
        """Flush the content."""
        return self._file().content.flush()

    def unlink(self) -> bool:
        """Release the content and remove this file from its directory.

        Returns:
            False if the content refused to be released (nothing is
            removed), otherwise whether the directory held this file.

        The entry is found by inode, not by name, so a file renamed with
        ``set_name`` never takes a sibling with it.

        """
        if not self._file().content.unlink():
            return False

        parent = self.parent
        if not isinstance(parent, Node):
            return True

        if not parent.detach_child(self):
            return False
        self._log(LogLevel.INFO, f"Unlinked {self._name!r} from {parent.path}")
        self._require_fs().forget(self)
        return True
