"""In-memory file-system engine — partitions, directories, files and quotas.

Re-exports public symbols so callers can write::

    from py_mockfs import Config, FileSystem, Quota
"""

from py_mockfs.config import Config
from py_mockfs.content import (
    Content,
    FullContent,
    NullContent,
    RandomContent,
    SeekWhence,
    StreamContent,
    ZeroContent,
)
from py_mockfs.errors import (
    ConfigurationError,
    FileSystemError,
    InvalidArgumentError,
    NoDiskSpaceError,
    NotFoundError,
    RecursionError,
    StructuralError,
)
from py_mockfs.filesystem import FileSystem
from py_mockfs.finder import Finder
from py_mockfs.handle import FileHandle, HandleTable
from py_mockfs.logging import EventLog, LogEntry, LogLevel, LogSource
from py_mockfs.nodes import ROOT_INODE, Node, NodeKind, StatResult, Summary
from py_mockfs.permissions import Access
from py_mockfs.quota import UNLIMITED, Collection, Quota, QuotaManager
from py_mockfs.structure import add_structure
from py_mockfs.visitor import TreeStyle, TreeVisitor

__all__ = [
    "ROOT_INODE",
    "UNLIMITED",
    "Access",
    "Collection",
    "Config",
    "ConfigurationError",
    "Content",
    "EventLog",
    "FileHandle",
    "FileSystem",
    "FileSystemError",
    "Finder",
    "FullContent",
    "HandleTable",
    "InvalidArgumentError",
    "LogEntry",
    "LogLevel",
    "LogSource",
    "NoDiskSpaceError",
    "Node",
    "NodeKind",
    "NotFoundError",
    "NullContent",
    "Quota",
    "QuotaManager",
    "RandomContent",
    "RecursionError",
    "SeekWhence",
    "StatResult",
    "StreamContent",
    "StructuralError",
    "Summary",
    "TreeStyle",
    "TreeVisitor",
    "ZeroContent",
    "add_structure",
]
