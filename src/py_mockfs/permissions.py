"""Permissions — the POSIX ``rwxrwxrwx`` model.

Every node carries nine permission bits split into three classes:

    owner  group  other
     rwx    rwx    rwx
    0o700  0o070  0o007

When a request arrives, **exactly one** class is consulted:

1. the owner bits if the requesting user owns the node;
2. otherwise the group bits if the requesting group matches;
3. otherwise the other bits.

There is no fallback between classes.  An owner whose own bits deny
writing is denied even if the group or other bits would allow it.  That
surprises people, but it is how Unix behaves.

New nodes start from a default (``0o777`` for directories, ``0o666`` for
files) with the configured umask removed.
"""

from enum import IntFlag

DEFAULT_DIRECTORY_PERMISSIONS = 0o777
DEFAULT_FILE_PERMISSIONS = 0o666

PERMISSION_BITS = 0o777

_OWNER_SHIFT = 6
_GROUP_SHIFT = 3


class Access(IntFlag):
    """The kind of access being requested, as ``other``-class bits."""

    READ = 0o4
    WRITE = 0o2
    EXECUTE = 0o1


def mask_for(access: Access, *, owner: int, group: int, user: int, request_group: int) -> int:
    """Return the single permission mask that decides *access*.

    Args:
        access: The requested access.
        owner: The node's owner uid.
        group: The node's group gid.
        user: The requesting uid.
        request_group: The requesting gid.

    """
    if owner == user:
        return access << _OWNER_SHIFT
    if group == request_group:
        return access << _GROUP_SHIFT
    return int(access)


def is_allowed(
    permissions: int,
    access: Access,
    *,
    owner: int,
    group: int,
    user: int,
    request_group: int,
) -> bool:
    """Return whether *permissions* grant *access* to the requester."""
    mask = mask_for(access, owner=owner, group=group, user=user, request_group=request_group)
    return (permissions & mask) == mask


def apply_umask(default: int, umask: int) -> int:
    """Remove the *umask* bits from a *default* permission value."""
    return default & ~umask & PERMISSION_BITS
