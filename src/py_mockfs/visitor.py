"""Tree printing — a ``tree(1)``-style rendering of a file system.

Example output for a whole file system::

    mfs://
    └── /
        ├── dev
        │   └── null
        ├── etc
        │   ├── passwd
        │   └── ssh
        │       └── ssh_config
        └── usr
            └── local

    5 directories, 3 files

Children are sorted by name.  The ``.``/``..`` entries are never shown.
A partition found inside a directory is drawn as a pointer
(``backup -> /mnt/backup``) instead of being descended into, because it is
its own tree.

The drawing characters are a ``TreeStyle``; pass any of its fields as
keyword arguments to ``TreeVisitor`` to change them.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TextIO

from py_mockfs.errors import InvalidArgumentError
from py_mockfs.nodes import NodeKind

if TYPE_CHECKING:
    from py_mockfs.filesystem import FileSystem
    from py_mockfs.nodes import Node


@dataclass(frozen=True)
class TreeStyle:
    """Characters used to draw the tree.

    Attributes:
        header_prefix: Text before the header line.
        header_suffix: Text after the header line.
        trunk: The vertical line joining siblings.
        trunk_branch: Where a branch leaves the trunk.
        trunk_end: Where the last branch leaves the trunk.
        branch_prefix: Text between the trunk and a name.
        branch_suffix: Text after a name.
        pointer: Separator between a nested partition and its path.
        spacing: Blank trunk lines printed before each entry.

    """

    header_prefix: str = ""
    header_suffix: str = ""
    trunk: str = "│"
    trunk_branch: str = "├"
    trunk_end: str = "└"
    branch_prefix: str = "── "
    branch_suffix: str = ""
    pointer: str = " -> "
    spacing: int = 0


class TreeVisitor:
    """Write a tree drawing of a node or a file system to a text stream."""

    def __init__(self, out: TextIO | None = None, **style: str | int) -> None:
        """Create a visitor.

        Args:
            out: Where to write; standard output by default.
            **style: Overrides for any ``TreeStyle`` field.

        Raises:
            InvalidArgumentError: If *out* cannot be written to or a
                style option is unknown.

        """
        out = out if out is not None else sys.stdout
        if not callable(getattr(out, "write", None)):
            msg = f"Output must be a writable text stream; {type(out).__name__} given."
            raise InvalidArgumentError(msg)

        try:
            self._style = replace(TreeStyle(), **style)  # type: ignore[arg-type]
        except TypeError as exc:
            msg = f"Unknown tree style option: {exc}"
            raise InvalidArgumentError(msg) from exc

        self._out = out
        self._depth = 0
        self._is_last: dict[int, bool] = {}
        self._directories = 0
        self._files = 0

    @property
    def style(self) -> TreeStyle:
        """Return the drawing characters."""
        return self._style

    def visit(self, node: Node) -> TreeVisitor:
        """Draw the subtree rooted at *node*."""
        self._reset()
        self._visit_node(node, descend=True)
        self._print_totals()
        return self

    def visit_file_system(self, fs: FileSystem) -> TreeVisitor:
        """Draw every partition of *fs* under its ``mfs://`` header."""
        self._reset()
        self._print(fs.get_url())
        self._visit_children(fs.children(), descend=True)
        self._print_totals()
        return self

    def _reset(self) -> None:
        self._depth = 0
        self._directories = 0
        self._files = 0

    def _visit_node(self, node: Node, *, descend: bool) -> None:
        match node.kind:
            case NodeKind.PARTITION:
                self._visit_partition(node, descend=descend)
            case NodeKind.DIRECTORY:
                self._visit_directory(node)
            case NodeKind.FILE | NodeKind.BLOCK:
                self._visit_file(node)

    def _visit_partition(self, partition: Node, *, descend: bool) -> None:
        self._directories += 1
        if not descend:
            self._print(partition.name + self._style.pointer + partition.path)
            return

        self._print(partition.path)
        self._visit_children(partition.children())

    def _visit_directory(self, directory: Node) -> None:
        if directory.is_dot:
            return
        self._directories += 1
        self._print(directory.name, directory.path)
        self._visit_children(directory.children())

    def _visit_file(self, node: Node) -> None:
        # A lone file is a header, not an entry.
        if self._directories > 0:
            self._files += 1
        self._print(node.name, node.path)

    def _visit_children(self, children: list[Node], *, descend: bool = False) -> None:
        self._depth += 1
        last = len(children) - 1
        for index, child in enumerate(sorted(children, key=lambda n: n.name)):
            self._is_last[self._depth] = index == last
            self._visit_node(child, descend=descend)
        self._depth -= 1

    def _print(self, name: str, path: str | None = None) -> None:
        if self._depth == 0:
            style = self._style
            self._out.write(f"{style.header_prefix}{path or name}{style.header_suffix}\n")
            return

        for _ in range(self._style.spacing):
            self._out.write(f"{self._indent()}{self._style.trunk}\n")
        self._print_entry(name)

    def _print_entry(self, name: str) -> None:
        style = self._style
        joint = style.trunk_end if self._last() else style.trunk_branch
        self._out.write(f"{self._indent()}{joint}{style.branch_prefix}{name}{style.branch_suffix}\n")

    def _print_totals(self) -> None:
        directories = max(0, self._directories - 1)
        files = self._files
        self._out.write(
            f"\n{directories} director{'y' if directories == 1 else 'ies'}, "
            f"{files} file{'' if files == 1 else 's'}\n"
        )

    def _indent(self) -> str:
        style = self._style
        prefix = " " * len(style.header_prefix)
        for depth in range(1, self._depth):
            if self._last(depth):
                prefix += " " * (len(style.trunk_branch) + len(style.branch_prefix))
            else:
                prefix += style.trunk + " " * len(style.branch_prefix)
        return prefix

    def _last(self, depth: int | None = None) -> bool:
        return self._is_last.get(self._depth if depth is None else depth, True)
