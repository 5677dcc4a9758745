"""Directory reading and attribute query primitives.

The traversal engine reads directories and queries entry attributes
only through a DirectorySource, so that alternative sources (archives,
remote listings, test doubles) can be traversed the same way as the
local filesystem.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from types import TracebackType

from filelist.models import DirIdentity, EntryType


@dataclass(frozen=True, slots=True)
class RawEntry:
    """A directory entry as returned by a directory read.

    Attributes:
        name: Entry name (no directory part).
        type_hint: Cheap type information from the directory read, or
            None if the type can only be learned from an attribute query.
    """

    name: str
    type_hint: EntryType | None = None


@dataclass(frozen=True, slots=True)
class EntryStat:
    """Result of an attribute query.

    Attributes:
        device: Device identifier of the filesystem holding the entry.
        inode: Inode number of the entry.
        entry_type: Type derived from the entry's mode.
    """

    device: int
    inode: int
    entry_type: EntryType

    @property
    def identity(self) -> DirIdentity:
        """Device and inode pair of this entry."""
        return DirIdentity(device=self.device, inode=self.inode)


class DirectoryHandle(ABC):
    """An open directory; iterating it yields its entries.

    Handles are context managers and are closed on exit, whether the
    iteration finished or not.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[RawEntry]:
        """Yield the entries of the directory."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying directory handle."""

    def __enter__(self) -> DirectoryHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class DirectorySource(ABC):
    """Abstract source of directory listings and entry attributes.

    Example:
        >>> source = OsDirectorySource()
        >>> with source.open_directory("/tmp") as handle:
        ...     names = [entry.name for entry in handle]
    """

    @abstractmethod
    def open_directory(self, path: str) -> DirectoryHandle:
        """Open a directory for reading.

        Args:
            path: Directory to open.

        Returns:
            An open DirectoryHandle.

        Raises:
            PermissionError: If reading the directory is not permitted.
            OSError: If the directory cannot be opened for any other reason.
        """

    @abstractmethod
    def stat(self, path: str, *, follow_symlinks: bool) -> EntryStat:
        """Query the attributes of a path.

        Args:
            path: Path to query.
            follow_symlinks: If True, query the target of a symbolic link
                instead of the link itself.

        Returns:
            EntryStat of the path.

        Raises:
            OSError: If the attributes cannot be queried.
        """


class _ScandirHandle(DirectoryHandle):
    """DirectoryHandle backed by os.scandir()."""

    def __init__(self, path: str) -> None:
        self._iterator = os.scandir(path)

    def __iter__(self) -> Iterator[RawEntry]:
        for entry in self._iterator:
            yield RawEntry(name=entry.name, type_hint=_type_hint(entry))

    def close(self) -> None:
        self._iterator.close()


def _type_hint(entry: os.DirEntry[str]) -> EntryType | None:
    """Get an entry's type from the cached directory read data.

    Only symlinks, directories and regular files can be told apart this
    way; any other type needs an attribute query.
    """
    try:
        if entry.is_symlink():
            return EntryType.LNK
        if entry.is_dir(follow_symlinks=False):
            return EntryType.DIR
        if entry.is_file(follow_symlinks=False):
            return EntryType.REG
    except OSError:
        return None
    return None


class OsDirectorySource(DirectorySource):
    """DirectorySource reading the local filesystem."""

    def open_directory(self, path: str) -> DirectoryHandle:
        """Open a local directory with os.scandir()."""
        return _ScandirHandle(path)

    def stat(self, path: str, *, follow_symlinks: bool) -> EntryStat:
        """Query a local path with os.stat() or os.lstat()."""
        result = os.stat(path) if follow_symlinks else os.lstat(path)
        return EntryStat(
            device=result.st_dev,
            inode=result.st_ino,
            entry_type=EntryType.from_mode(result.st_mode),
        )
