"""Configuration — how the simulated file system behaves.

A POSIX system and a Windows system disagree on almost everything a
path touches: the separator (``/`` vs ``\\``), whether there are drive
letters (``C:``), whether ``README`` and ``readme`` are the same file,
and which characters a name may contain.  ``Config`` collects those
choices in one place.  Nodes read it once they are attached to a
``FileSystem``.

Key design properties:
    - **Named fields, validated once** — a dataclass with defaults;
      ``__post_init__`` rejects an empty separator and normalises the
      blacklist.
    - **Presets** — ``Config()`` is POSIX-like, ``Config.windows()``
      mirrors a Windows volume.
    - **Identity fallback** — when no user/group is configured, the
      current process's uid/gid is used (root on platforms without one).
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from py_mockfs.errors import InvalidArgumentError

ROOT_UID = 0
ROOT_GID = 0

UMASK_BITS = 0o777

# Based on https://en.wikipedia.org/wiki/Filename
# Summary: 0x00-0x1f, 0x7f, ", *, /, :, <, >, ?, \, and |
_CONTROL_NAMES = (
    "start of heading",
    "start of text",
    "end of text",
    "end of transmission",
    "enquiry",
    "acknowledge",
    "bell",
    "backspace",
    "horizontal tab",
    "new line",
    "vertical tab",
    "new page",
    "carriage return",
    "shift out",
    "shift in",
    "data link escape",
    "device control 1",
    "device control 2",
    "device control 3",
    "device control 4",
    "negative acknowledge",
    "synchronous idle",
    "end of transmission block",
    "cancel",
    "end of medium",
    "substitute",
    "escape",
    "file separator",
    "group separator",
    "record separator",
    "unit separator",
)

WINDOWS_BLACKLIST: dict[str, str] = {
    **{label: chr(code) for code, label in enumerate(_CONTROL_NAMES, start=1)},
    "delete": "\x7f",
    "<": "<",
    ">": ">",
    ":": ":",
    "double quote": '"',
    "/": "/",
    "\\": "\\",
    "|": "|",
    "?": "?",
    "*": "*",
}


def _normalize_blacklist(blacklist: Mapping[str, str] | Iterable[str]) -> dict[str, str]:
    """Return the blacklist as a ``label -> character`` dict.

    Unlabelled characters are labelled by themselves.
    """
    if isinstance(blacklist, Mapping):
        return {str(label): str(char) for label, char in blacklist.items()}
    return {char: char for char in blacklist}


@dataclass
class Config:
    """Options that shape names, paths, and default ownership.

    Attributes:
        umask: Bits removed from default permissions of new nodes.
        file_separator: Separator between path components.
        partition_separator: Suffix of partition names (``:`` on Windows).
        ignore_case: Whether name lookups are case-insensitive.
        include_dot_files: Whether directory iteration yields ``.``/``..``.
        normalize_slashes: Whether ``/`` and ``\\`` both act as separators.
        blacklist: Characters a name may not contain, keyed by label.
        default_user: Owner of new nodes (``None`` = process uid).
        default_group: Group of new nodes (``None`` = process gid).

    """

    umask: int = 0o000
    file_separator: str = "/"
    partition_separator: str = ""
    ignore_case: bool = False
    include_dot_files: bool = True
    normalize_slashes: bool = False
    blacklist: dict[str, str] = field(default_factory=lambda: {})  # noqa: PIE807
    default_user: int | None = None
    default_group: int | None = None

    def __post_init__(self) -> None:
        """Validate separators and normalise the umask and blacklist."""
        if not self.file_separator:
            msg = "Separator cannot be empty"
            raise InvalidArgumentError(msg)
        self.umask &= UMASK_BITS
        self.blacklist = _normalize_blacklist(self.blacklist)

    @classmethod
    def windows(cls, **overrides: Any) -> Config:
        """Return a configuration that behaves like a Windows volume."""
        options: dict[str, Any] = {
            "file_separator": "\\",
            "partition_separator": ":",
            "ignore_case": True,
            "include_dot_files": True,
            "normalize_slashes": True,
            "blacklist": dict(WINDOWS_BLACKLIST),
        }
        options.update(overrides)
        return cls.from_options(options)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> Config:
        """Build a configuration from an option map.

        Args:
            options: Field names mapped to values.

        Raises:
            InvalidArgumentError: If an option name is not recognised.

        """
        known = {f.name for f in fields(cls)}
        for name in options:
            if name not in known:
                msg = f'Unknown option "{name}"'
                raise InvalidArgumentError(msg)
        return cls(**options)

    @property
    def user(self) -> int:
        """Return the active user id."""
        if self.default_user is not None:
            return self.default_user
        getuid = getattr(os, "getuid", None)
        return getuid() if getuid is not None else ROOT_UID

    @property
    def group(self) -> int:
        """Return the active group id."""
        if self.default_group is not None:
            return self.default_group
        getgid = getattr(os, "getgid", None)
        return getgid() if getgid is not None else ROOT_GID

    def set_umask(self, mask: int) -> int:
        """Replace the umask and return the previous one."""
        old = self.umask
        self.umask = mask & UMASK_BITS
        return old

    def forbidden_characters(self) -> Iterator[tuple[str, str]]:
        """Yield ``(label, character)`` pairs a name may not contain.

        Empty entries are skipped, so an empty partition separator never
        forbids anything.
        """
        candidates = [
            *self.blacklist.items(),
            (self.file_separator, self.file_separator),
            (self.partition_separator, self.partition_separator),
            ("null", "\0"),
        ]
        for label, char in candidates:
            if char:
                yield label, char

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dict."""
        return asdict(self)
