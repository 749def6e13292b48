"""Disk quotas — simulated free space for each partition.

A real disk fills up.  Code that writes files should be tested against
that, so partitions can carry a **quota**: a ceiling on total bytes
and/or number of files, optionally scoped to one owner and/or group.

- **Quota** — a single ceiling.  ``UNLIMITED`` (-1) disables either limit.
- **Collection** — several quotas stacked; the first one with a limited
  answer wins.
- **QuotaManager** — answers "how much room is left?" for one partition,
  taking into account the node that is about to be inserted.

Partitions never count against the quota of an enclosing partition:
each one is its own accounting boundary.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from py_mockfs.nodes import Node

UNLIMITED = -1
"""Sentinel for "no limit" in quotas and free-space answers."""


class QuotaPolicy(Protocol):
    """Interface shared by ``Quota`` and ``Collection``."""

    def applies_to(self, user: int, group: int) -> bool:
        """Return whether the policy limits this user/group."""
        ...  # pragma: no cover

    def remaining_size(self, used: int, user: int, group: int) -> int:
        """Return the bytes still available, or ``UNLIMITED``."""
        ...  # pragma: no cover

    def remaining_file_count(self, used: int, user: int, group: int) -> int:
        """Return the files still available, or ``UNLIMITED``."""
        ...  # pragma: no cover


@dataclass(frozen=True)
class Quota:
    """A size and file-count ceiling.

    Attributes:
        size: Maximum total bytes, or ``UNLIMITED``.
        file_count: Maximum number of nodes, or ``UNLIMITED``.
        user: Only limit this owner (``None`` = everyone).
        group: Only limit this group (``None`` = every group).

    """

    size: int
    file_count: int
    user: int | None = None
    group: int | None = None

    def applies_to(self, user: int, group: int) -> bool:
        """Return False when a configured user or group does not match."""
        if self.user is not None and self.user != user:
            return False
        return self.group is None or self.group == group

    def remaining_size(self, used: int, user: int, group: int) -> int:
        """Return ``max(0, size - used)`` or ``UNLIMITED``."""
        if self.size == UNLIMITED or not self.applies_to(user, group):
            return UNLIMITED
        return max(0, self.size - used)

    def remaining_file_count(self, used: int, user: int, group: int) -> int:
        """Return ``max(0, file_count - used)`` or ``UNLIMITED``."""
        if self.file_count == UNLIMITED or not self.applies_to(user, group):
            return UNLIMITED
        return max(0, self.file_count - used)


class Collection:
    """Several quotas consulted in order.

    The first quota that gives a limited answer decides; if every quota
    is unlimited for a question, so is the collection.
    """

    def __init__(self, quotas: Iterable[QuotaPolicy] = ()) -> None:
        """Create a collection from an optional list of quotas."""
        self._quotas: list[QuotaPolicy] = list(quotas)

    @property
    def quotas(self) -> list[QuotaPolicy]:
        """Return the quotas in consultation order."""
        return list(self._quotas)

    def add_quota(self, quota: QuotaPolicy) -> None:
        """Append *quota* to the end of the consultation order."""
        self._quotas.append(quota)

    def __len__(self) -> int:
        """Return the number of quotas."""
        return len(self._quotas)

    def applies_to(self, user: int, group: int) -> bool:
        """Return whether any quota applies."""
        return any(quota.applies_to(user, group) for quota in self._quotas)

    def remaining_size(self, used: int, user: int, group: int) -> int:
        """Return the first limited remaining size."""
        for quota in self._quotas:
            remaining = quota.remaining_size(used, user, group)
            if remaining != UNLIMITED:
                return remaining
        return UNLIMITED

    def remaining_file_count(self, used: int, user: int, group: int) -> int:
        """Return the first limited remaining file count."""
        for quota in self._quotas:
            remaining = quota.remaining_file_count(used, user, group)
            if remaining != UNLIMITED:
                return remaining
        return UNLIMITED


class QuotaManager:
    """Free-space arithmetic for one partition.

    The active user and group come from the partition's configuration,
    so a quota scoped to another user never limits the caller.
    """

    def __init__(self, partition: Node) -> None:
        """Bind the manager to *partition*."""
        self._partition = partition

    @property
    def partition(self) -> Node:
        """Return the partition this manager accounts for."""
        return self._partition

    def free_disk_space(self, candidate: Node | None = None) -> int:
        """Return the room left for *candidate*, or overall if omitted.

        Returns:
            ``UNLIMITED`` when no quota limits the caller, 0 when the
            partition is full (or the candidate does not fit), otherwise
            the bytes that would remain.

        """
        config = self._partition.config
        user = config.user
        group = config.group

        quota = self._quota_for(candidate, user, group)
        if quota is None:
            return UNLIMITED

        summary = self._partition.summary(user, group)
        remaining_count = quota.remaining_file_count(summary.file_count, user, group)
        remaining_size = quota.remaining_size(summary.size, user, group)

        if remaining_count == 0 or remaining_size == 0:
            # Out of space or out of files
            return 0

        return self._remaining_for(candidate, remaining_size, remaining_count)

    def _quota_for(self, candidate: Node | None, user: int, group: int) -> QuotaPolicy | None:
        """Return the quota that limits *candidate*, if any."""
        if candidate is not None and candidate.is_partition:
            return None

        quota = self._partition.quota
        if quota is None or not quota.applies_to(user, group):
            return None
        return quota

    @staticmethod
    def _remaining_for(candidate: Node | None, remaining_size: int, remaining_count: int) -> int:
        """Subtract the candidate's own footprint from what is left."""
        if candidate is None:
            return remaining_size

        if not candidate.is_container:
            if remaining_size == UNLIMITED:
                return UNLIMITED
            return max(0, remaining_size - candidate.size)

        summary = candidate.summary()
        if remaining_count != UNLIMITED and summary.file_count > remaining_count:
            return 0

        if remaining_size != UNLIMITED:
            return max(0, remaining_size - summary.size)

        return UNLIMITED
