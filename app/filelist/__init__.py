"""filelist - hierarchically sorted file lists.

Recursively lists the entries of a directory tree, filtered by entry
type and name pattern, and sorted so that each directory's contents
are grouped together.
"""

from filelist.builder import build_file_list, destroy_file_list, merge_file_lists
from filelist.core.growable import FileList, GrowthPolicy
from filelist.core.settings import ListSettings
from filelist.errors import (
    CapacityExceededError,
    DirectoryOpenError,
    FileListError,
    ListAllocationError,
    MergeError,
    PatternCompileError,
)
from filelist.models import UNLIMITED_DEPTH, BuildFlag, BuildResult, FileType, SortMethod

__version__ = "0.1.0"

__all__ = [
    "UNLIMITED_DEPTH",
    "BuildFlag",
    "BuildResult",
    "CapacityExceededError",
    "DirectoryOpenError",
    "FileList",
    "FileListError",
    "FileType",
    "GrowthPolicy",
    "ListAllocationError",
    "ListSettings",
    "MergeError",
    "PatternCompileError",
    "SortMethod",
    "__version__",
    "build_file_list",
    "destroy_file_list",
    "merge_file_lists",
]
