"""Domain models for file list creation.

This module defines the selectors accepted by the list builder (type
mask, behavior flags, sort method), the classified entry type tags
produced during traversal, and the immutable value types passed
between the traversal engine and its callers.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from filelist.core.growable import FileList

# Separator used when joining and splitting paths
DIR_SEPARATOR = "/"

# Depth value that never stops recursion
UNLIMITED_DEPTH = -1


class FileType(IntFlag):
    """Bitwise-combinable selector of entry kinds.

    An empty mask (``FileType(0)``) selects every kind.
    """

    UNKNOWN = 1
    FIFO = 2
    CHR = 4
    DIR = 8
    BLK = 16
    REG = 32
    LNK = 64
    SOCK = 128


class BuildFlag(IntFlag):
    """Behavior flags for the list builder.

    Attributes:
        FOLLOW_LINKS: Follow symbolic links when classifying entries.
        DIR_SEP: Append a trailing separator to directory entries.
        REGEX_CASE: Match the name pattern case-sensitively.
        REGEX_BASIC: Use the basic (POSIX BRE) pattern dialect.
        XDEV: Do not descend into directories on other devices.
    """

    FOLLOW_LINKS = 1
    DIR_SEP = 2
    REGEX_CASE = 4
    REGEX_BASIC = 8
    XDEV = 16


class SortMethod(str, Enum):
    """Ordering applied to a finished file list.

    Attributes:
        NONE: Keep directory-read order.
        DEFAULT: Semi-case-insensitive (lowercase first, shorter first).
        NATURAL: DEFAULT plus numeric comparison of digit runs.
        COLLATE: Delegate to the current locale's LC_COLLATE ordering.
        ASCII: Raw code point order.
    """

    NONE = "none"
    DEFAULT = "default"
    NATURAL = "natural"
    COLLATE = "collate"
    ASCII = "ascii"


class EntryType(IntEnum):
    """Classified type of a directory entry.

    Values match the file type bits of ``st_mode`` shifted down by
    twelve, which are also the values of ``dirent.d_type``.
    """

    UNKNOWN = 0
    FIFO = 1
    CHR = 2
    DIR = 4
    BLK = 6
    REG = 8
    LNK = 10
    SOCK = 12

    @classmethod
    def from_mode(cls, mode: int) -> EntryType:
        """Classify an ``st_mode`` value."""
        try:
            return cls(stat.S_IFMT(mode) >> 12)
        except ValueError:
            return cls.UNKNOWN


_MASK_TO_ENTRY_TYPE: dict[FileType, EntryType] = {
    FileType.UNKNOWN: EntryType.UNKNOWN,
    FileType.FIFO: EntryType.FIFO,
    FileType.CHR: EntryType.CHR,
    FileType.DIR: EntryType.DIR,
    FileType.BLK: EntryType.BLK,
    FileType.REG: EntryType.REG,
    FileType.LNK: EntryType.LNK,
    FileType.SOCK: EntryType.SOCK,
}

# One slot per possible type tag (4 bits of st_mode)
_TYPE_TABLE_SIZE = 16


@dataclass(frozen=True, slots=True)
class TypeFilter:
    """Include/exclude lookup table indexed by entry type tag.

    Attributes:
        table: One boolean per type tag value.
    """

    table: tuple[bool, ...]

    @classmethod
    def from_mask(cls, mask: FileType | int) -> TypeFilter:
        """Build the lookup table from a type mask.

        Args:
            mask: Combination of FileType values; 0 selects all types.

        Returns:
            TypeFilter accepting exactly the selected types.
        """
        mask = FileType(mask)
        if not mask:
            return cls(table=(True,) * _TYPE_TABLE_SIZE)

        table = [False] * _TYPE_TABLE_SIZE
        for flag, entry_type in _MASK_TO_ENTRY_TYPE.items():
            if mask & flag:
                table[entry_type] = True
        return cls(table=tuple(table))

    def accepts(self, entry_type: EntryType) -> bool:
        """Check if entries of the given type are listed."""
        return self.table[entry_type]


@dataclass(frozen=True, slots=True)
class DirIdentity:
    """Device and inode pair identifying a directory across links."""

    device: int
    inode: int


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of a list build.

    Attributes:
        files: The trimmed, terminated and sorted file list.
        capacity_exceeded: True if the list reached its maximum size and
            at least one matching entry is missing from it.
    """

    files: FileList
    capacity_exceeded: bool = False

    @property
    def count(self) -> int:
        """Number of collected entries."""
        return len(self.files)

    @property
    def complete(self) -> bool:
        """Check if every matching entry was collected."""
        return not self.capacity_exceeded
