"""Growable, size-limited list of path strings.

A FileList owns a contiguous block of slots. Appending to a full list
multiplies its capacity by the growth factor, clamped to the hard
maximum. Appending to a list that is already at the maximum raises
CapacityExceededError and leaves the list intact, so callers can keep
the partial result.

Once complete, a list is trimmed to its exact size and terminated by a
single ``None`` sentinel slot, which is never counted as an entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import cast, overload

from filelist.core.compare import sort_paths
from filelist.core.settings import (
    DEFAULT_INITIAL_CAPACITY,
    DEFAULT_MAX_ENTRIES,
    MAX_ADDRESSABLE_ENTRIES,
    ListSettings,
)
from filelist.errors import CapacityExceededError, FileListError, ListAllocationError, MergeError
from filelist.models import SortMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GrowthPolicy:
    """Capacity growth rules for a FileList.

    Attributes:
        initial_capacity: Number of slots allocated up front.
        growth_factor: Capacity multiplier applied when the list is full.
        max_entries: Hard maximum number of entries.
    """

    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    growth_factor: int = 2
    max_entries: int = DEFAULT_MAX_ENTRIES

    def __post_init__(self) -> None:
        """Validate growth parameters after initialization."""
        if self.initial_capacity < 1:
            msg = f"Initial capacity must be positive, got {self.initial_capacity}"
            raise ValueError(msg)
        if self.growth_factor < 2:
            msg = f"Growth factor must be at least 2, got {self.growth_factor}"
            raise ValueError(msg)
        if not (1 <= self.max_entries <= MAX_ADDRESSABLE_ENTRIES):
            msg = f"Maximum entries must be between 1 and {MAX_ADDRESSABLE_ENTRIES}"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: ListSettings) -> GrowthPolicy:
        """Create a policy from list settings."""
        return cls(
            initial_capacity=settings.initial_capacity,
            growth_factor=settings.growth_factor,
            max_entries=settings.max_entries,
        )

    @property
    def start_capacity(self) -> int:
        """Initial capacity clamped to the maximum."""
        return min(self.initial_capacity, self.max_entries)

    def next_capacity(self, current: int) -> int:
        """Get the capacity that follows ``current``, clamped to the maximum."""
        return min(current * self.growth_factor, self.max_entries)


def _allocate(size: int) -> list[str | None]:
    try:
        return [None] * size
    except MemoryError as e:
        raise ListAllocationError(f"Cannot allocate file list of {size} slots") from e


class FileList:
    """Owned, growable sequence of path strings.

    Example:
        >>> files = FileList(GrowthPolicy(initial_capacity=2, max_entries=3))
        >>> for path in ("a/x", "a/y", "a/z"):
        ...     files.append(path)
        >>> files.capacity
        3
        >>> files.append("a/w")
        Traceback (most recent call last):
        ...
        filelist.errors.CapacityExceededError: File list capacity exhausted (3 entries)
    """

    def __init__(self, policy: GrowthPolicy | None = None) -> None:
        self._policy = policy or GrowthPolicy()
        self._slots: list[str | None] = _allocate(self._policy.start_capacity)
        self._count = 0
        self._terminated = False
        self._released = False

    @classmethod
    def from_paths(cls, paths: list[str], policy: GrowthPolicy | None = None) -> FileList:
        """Create a terminated list holding the given paths in order.

        Raises:
            CapacityExceededError: If there are more paths than the policy allows.
        """
        files = cls(policy)
        for path in paths:
            files.append(path)
        files.trim_and_terminate()
        return files

    @property
    def policy(self) -> GrowthPolicy:
        """Growth policy of this list."""
        return self._policy

    @property
    def capacity(self) -> int:
        """Number of entry slots currently allocated (excluding the terminator)."""
        if self._terminated:
            return len(self._slots) - 1
        return len(self._slots)

    @property
    def terminated(self) -> bool:
        """Check if the list has been trimmed and terminated."""
        return self._terminated

    @property
    def released(self) -> bool:
        """Check if the list has been destroyed or consumed by a merge."""
        return self._released

    @property
    def is_full(self) -> bool:
        """Check if the list holds its maximum number of entries."""
        return self._count >= self._policy.max_entries

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[str]:
        for index in range(self._count):
            yield cast(str, self._slots[index])

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        if isinstance(index, slice):
            return cast(list[str], self._slots[: self._count][index])
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            msg = "FileList index out of range"
            raise IndexError(msg)
        return cast(str, self._slots[index])

    def __repr__(self) -> str:
        return f"FileList(count={self._count}, capacity={self.capacity})"

    def to_list(self) -> list[str]:
        """Return a copy of the live entries."""
        return list(self)

    def append(self, path: str) -> None:
        """Append a path, growing the list if needed.

        Raises:
            CapacityExceededError: If the list already holds the maximum
                number of entries. The list is left unchanged.
            ListAllocationError: If growing the list fails.
            FileListError: If the list is terminated or released.
        """
        self._check_writable()
        if self._count == len(self._slots):
            self._grow()
        self._slots[self._count] = path
        self._count += 1

    def _grow(self) -> None:
        current = len(self._slots)
        if current >= self._policy.max_entries:
            raise CapacityExceededError(self._policy.max_entries)

        new_capacity = self._policy.next_capacity(current)
        logger.debug("Resizing file list: max. %d elements", new_capacity)
        try:
            self._slots.extend([None] * (new_capacity - current))
        except MemoryError as e:
            raise ListAllocationError(f"Cannot grow file list to {new_capacity} slots") from e

    def _check_writable(self) -> None:
        if self._released:
            raise FileListError("File list has been released")
        if self._terminated:
            raise FileListError("File list has been terminated")

    def trim_and_terminate(self) -> None:
        """Shrink storage to the exact entry count plus one terminator slot.

        Calling this on an already terminated list does nothing.
        """
        if self._released:
            raise FileListError("File list has been released")
        if self._terminated:
            return
        del self._slots[self._count :]
        self._slots.append(None)
        self._terminated = True

    def scan_size(self) -> int:
        """Count entries by scanning for the terminator."""
        for index, path in enumerate(self._slots):
            if path is None:
                return index
        return len(self._slots)

    def sort(self, method: SortMethod) -> None:
        """Sort the entries in place; SortMethod.NONE keeps insertion order."""
        live = self._slots[: self._count]
        sort_paths(live, method)  # type: ignore[arg-type]
        self._slots[: self._count] = live

    def absorb(self, source: FileList, *, count: int = 0, source_count: int = 0) -> int:
        """Move every entry of ``source`` to the end of this list.

        The source list is released afterwards. On failure, neither list
        is modified.

        Args:
            source: List whose entries are taken over.
            count: Known size of this list, or 0 to scan for it.
            source_count: Known size of the source list, or 0 to scan for it.

        Returns:
            Combined number of entries.

        Raises:
            MergeError: If a list is released, a size hint is wrong, or the
                combined size exceeds this list's maximum.
            ListAllocationError: If the combined storage cannot be allocated.
        """
        if source is self:
            raise MergeError("Cannot merge a file list into itself")
        if self._released:
            raise MergeError("Destination file list has been released")
        if source.released:
            raise MergeError("Source file list has been released")

        n_dest = count or self.scan_size()
        n_source = source_count or source.scan_size()
        if n_dest != self._count:
            raise MergeError(f"Destination size hint {n_dest} does not match {self._count}")
        if n_source != len(source):
            raise MergeError(f"Source size hint {n_source} does not match {len(source)}")

        total = n_dest + n_source
        if total > self._policy.max_entries:
            raise MergeError(
                f"Merged list of {total} entries exceeds maximum of {self._policy.max_entries}"
            )

        try:
            merged = self._slots[:n_dest] + source._slots[:n_source]
            merged.append(None)
        except MemoryError as e:
            raise ListAllocationError(f"Cannot allocate merged list of {total} slots") from e

        self._slots = merged
        self._count = total
        self._terminated = True
        source._release()
        return total

    def _release(self) -> None:
        self._slots = []
        self._count = 0
        self._terminated = False
        self._released = True

    def destroy(self) -> None:
        """Release every entry and the backing storage.

        Safe to call more than once.
        """
        if self._released:
            return
        self._release()
