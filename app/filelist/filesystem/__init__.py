"""Directory traversal and name matching.

This module provides the filesystem primitives interface, the
pattern matcher and the recursive traversal engine.
"""

from filelist.filesystem.matcher import NameMatcher, compile_name_matcher, resolve_matcher
from filelist.filesystem.source import (
    DirectoryHandle,
    DirectorySource,
    EntryStat,
    OsDirectorySource,
    RawEntry,
)
from filelist.filesystem.traversal import TraversalContext, Traverser, join_path

__all__ = [
    "DirectoryHandle",
    "DirectorySource",
    "EntryStat",
    "NameMatcher",
    "OsDirectorySource",
    "RawEntry",
    "TraversalContext",
    "Traverser",
    "compile_name_matcher",
    "join_path",
    "resolve_matcher",
]
