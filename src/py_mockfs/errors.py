"""Errors raised by the file-system engine.

Every failure is raised synchronously at the point of violation, with a
message precise enough for an I/O adapter to turn it into whatever its
host expects (a warning, an errno, a ``False`` return value).

- **InvalidArgumentError** — illegal names, malformed structures, bad
  content sources, unknown configuration options.
- **NotFoundError** — a child or partition that does not exist.
- **RecursionError** — a parent assignment that would create a cycle.
- **NoDiskSpaceError** — an insert that the quota refuses.
- **ConfigurationError** — a node used before it has been attached to a
  file system (and therefore has no configuration).
- **StructuralError** — operations the tree shape does not allow, such as
  giving the file system a parent or reading from a directory.
"""


class FileSystemError(Exception):
    """Base class for every engine error."""


class InvalidArgumentError(FileSystemError, ValueError):
    """Raise when an argument (name, structure, content) is not acceptable."""


class NotFoundError(FileSystemError, LookupError):
    """Raise when a child or partition does not exist."""


# We define our own RecursionError, mirroring the kernel's PermissionError.
# It is unrelated to the interpreter's stack-depth error.
class RecursionError(FileSystemError):  # noqa: A001
    """Raise when a node would become its own ancestor."""


class NoDiskSpaceError(FileSystemError):
    """Raise when a quota leaves no room for a new child."""


class ConfigurationError(FileSystemError):
    """Raise when a node needs configuration it does not have yet."""


class StructuralError(FileSystemError):
    """Raise when an operation does not fit the shape of the tree."""
