"""Exception hierarchy for file list creation.

Fatal failures (allocation, directory open, pattern compile, merge)
discard the list under construction. CapacityExceededError is the only
recoverable kind: the builder catches it and keeps the partial list.
"""

from __future__ import annotations


class FileListError(Exception):
    """Base exception for file list errors."""


class ListAllocationError(FileListError):
    """Raised when a list or loop guard cannot grow."""


class CapacityExceededError(FileListError):
    """Raised when a list has reached its configured maximum size.

    Attributes:
        max_entries: The maximum that was reached.
    """

    def __init__(self, max_entries: int) -> None:
        self.max_entries = max_entries
        super().__init__(f"File list capacity exhausted ({max_entries} entries)")


class DirectoryOpenError(FileListError):
    """Raised when a directory cannot be opened for a reason other than permissions.

    Attributes:
        path: The directory that could not be opened.
    """

    def __init__(self, path: str, reason: OSError) -> None:
        self.path = path
        super().__init__(f"Cannot open directory {path}: {reason.strerror or reason}")


class PatternCompileError(FileListError):
    """Raised when a name pattern is not a valid regular expression.

    Attributes:
        pattern: The pattern as given by the caller.
    """

    def __init__(self, pattern: str, reason: Exception) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid name pattern {pattern!r}: {reason}")


class MergeError(FileListError):
    """Raised when two lists cannot be merged; the destination is left unchanged."""
