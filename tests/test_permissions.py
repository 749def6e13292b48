"""Tests for the rwx permission model.

Exactly one class of bits (owner, group, or other) decides each request.
"""

from py_mockfs.config import Config
from py_mockfs.filesystem import FileSystem
from py_mockfs.permissions import Access, apply_umask, is_allowed, mask_for

OWNER = 1000
GROUP = 100
OTHER_USER = 2000
OTHER_GROUP = 200


def _check(permissions: int, access: Access, user: int, group: int) -> bool:
    return is_allowed(permissions, access, owner=OWNER, group=GROUP, user=user, request_group=group)


class TestMask:
    """Verify which class of bits is consulted."""

    def test_owner_bits(self) -> None:
        """The owner gets the top three bits."""
        mask = mask_for(Access.READ, owner=OWNER, group=GROUP, user=OWNER, request_group=OTHER_GROUP)
        assert mask == 0o400

    def test_group_bits(self) -> None:
        """A group member gets the middle three bits."""
        mask = mask_for(Access.WRITE, owner=OWNER, group=GROUP, user=OTHER_USER, request_group=GROUP)
        assert mask == 0o020

    def test_other_bits(self) -> None:
        """Everyone else gets the low three bits."""
        mask = mask_for(Access.EXECUTE, owner=OWNER, group=GROUP, user=OTHER_USER, request_group=OTHER_GROUP)
        assert mask == 0o001


class TestPriority:
    """Verify the class-priority rule with ``0o644``."""

    def test_owner_can_read_and_write(self) -> None:
        """Owner bits ``rw-``."""
        assert _check(0o644, Access.READ, OWNER, GROUP)
        assert _check(0o644, Access.WRITE, OWNER, GROUP)

    def test_group_can_only_read(self) -> None:
        """Group bits ``r--``."""
        assert _check(0o644, Access.READ, OTHER_USER, GROUP)
        assert not _check(0o644, Access.WRITE, OTHER_USER, GROUP)

    def test_other_can_only_read(self) -> None:
        """Other bits ``r--``."""
        assert _check(0o644, Access.READ, OTHER_USER, OTHER_GROUP)
        assert not _check(0o644, Access.WRITE, OTHER_USER, OTHER_GROUP)

    def test_no_fallback_from_owner(self) -> None:
        """An owner denied by owner bits is denied even if other bits allow."""
        assert not _check(0o077, Access.READ, OWNER, GROUP)


class TestUmask:
    """Verify umask application."""

    def test_apply_umask(self) -> None:
        """``0o666 & ~0o022`` is ``0o644``."""
        assert apply_umask(0o666, 0o022) == 0o644

    def test_new_nodes_use_umask(self) -> None:
        """Attached nodes get default permissions minus the umask."""
        fs = FileSystem(Config(umask=0o027))
        assert fs.create_file("a").permissions == 0o640
        assert fs.create_directory("d").permissions == 0o750

    def test_explicit_permissions_kept(self) -> None:
        """Permissions given at creation are not masked."""
        fs = FileSystem(Config(umask=0o077))
        assert fs.create_file("a", permissions=0o666).permissions == 0o666


class TestNodePermissions:
    """Verify the node-level checks."""

    def test_node_checks(self) -> None:
        """A 0o750 directory is enterable by its group only."""
        fs = FileSystem(Config(default_user=OWNER, default_group=GROUP))
        directory = fs.create_directory("d", permissions=0o750)
        assert directory.is_executable(OWNER, GROUP)
        assert directory.is_readable(OTHER_USER, GROUP)
        assert not directory.is_writable(OTHER_USER, GROUP)
        assert not directory.is_readable(OTHER_USER, OTHER_GROUP)

    def test_set_permissions_updates_ctime(self) -> None:
        """Changing metadata updates the change time."""
        fs = FileSystem()
        node = fs.create_file("a")
        node.set_change_time(0)
        node.set_permissions(0o600)
        assert node.permissions == 0o600
        assert node.ctime > 0
