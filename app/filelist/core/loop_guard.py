"""Ancestor directory stack used to detect directory loops.

The guard holds the identity of every directory on the path from the
traversal root to the directory currently being read. A directory
whose identity is already on the stack is reachable from itself
(through a symbolic link or a hard-linked directory) and must not be
entered again.
"""

import logging

from filelist.errors import ListAllocationError
from filelist.models import DirIdentity

logger = logging.getLogger(__name__)

DEFAULT_GUARD_CAPACITY = 512


class LoopGuard:
    """Stack of ancestor directory identities.

    The stack is a plain list. Its capacity is a nominal figure that
    doubles whenever the stack outgrows it and is only reported in the
    resize debug log.

    Args:
        initial_capacity: Nominal size before the first logged resize.
    """

    def __init__(self, initial_capacity: int = DEFAULT_GUARD_CAPACITY) -> None:
        if initial_capacity < 1:
            msg = f"Initial capacity must be positive, got {initial_capacity}"
            raise ValueError(msg)
        self._stack: list[DirIdentity] = []
        self._capacity = initial_capacity

    @property
    def capacity(self) -> int:
        """Nominal size reported by the resize log; not an allocation."""
        return self._capacity

    @property
    def root(self) -> DirIdentity:
        """Identity of the traversal root (the bottom of the stack).

        Raises:
            IndexError: If the guard is empty.
        """
        if not self._stack:
            raise IndexError("Loop guard is empty")
        return self._stack[0]

    def __len__(self) -> int:
        return len(self._stack)

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, DirIdentity) and self.contains(identity)

    def push(self, identity: DirIdentity) -> None:
        """Push a directory identity before descending into it.

        Raises:
            ListAllocationError: If the stack cannot grow.
        """
        if len(self._stack) == self._capacity:
            self._capacity *= 2
            logger.debug("Resizing loop guard: max. %d elements", self._capacity)
        try:
            self._stack.append(identity)
        except MemoryError as e:
            raise ListAllocationError(f"Cannot grow loop guard to {self._capacity}") from e

    def pop(self) -> DirIdentity:
        """Remove and return the most recently pushed identity.

        Raises:
            IndexError: If the guard is empty.
        """
        return self._stack.pop()

    def contains(self, identity: DirIdentity) -> bool:
        """Check if a directory identity is an ancestor of the current directory."""
        for ancestor in self._stack:
            if ancestor == identity:
                return True
        return False

    def ancestors(self) -> tuple[DirIdentity, ...]:
        """Return the stack from the root to the current directory."""
        return tuple(self._stack)
