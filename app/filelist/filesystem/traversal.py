"""Recursive directory traversal populating a file list.

Each visited directory is opened, and every entry is classified,
filtered, descended into (directories only) and collected. The
traversal state shared between recursion levels lives in a single
TraversalContext.

Entry types come from the directory read when that is cheap and
unambiguous. Directories are always verified with an attribute query,
which also provides the device and inode numbers needed for loop
detection; entries without a type hint and (when links are followed)
symbolic links are queried as well. The queried type wins over the
hint.
"""

import logging
from dataclasses import dataclass

from filelist.core.growable import FileList
from filelist.core.loop_guard import LoopGuard
from filelist.errors import DirectoryOpenError
from filelist.filesystem.matcher import NameMatcher
from filelist.filesystem.source import DirectorySource, EntryStat, RawEntry
from filelist.models import DIR_SEPARATOR, BuildFlag, EntryType, TypeFilter

logger = logging.getLogger(__name__)

_SELF_AND_PARENT = (".", "..")


def join_path(directory: str, name: str) -> str:
    """Join a directory and an entry name with exactly one separator."""
    if directory.endswith(DIR_SEPARATOR):
        return directory + name
    return directory + DIR_SEPARATOR + name


@dataclass(slots=True)
class TraversalContext:
    """State shared by every level of one traversal.

    Attributes:
        files: List receiving accepted paths.
        guard: Ancestor identities, seeded with the traversal root.
        type_filter: Entry types to collect.
        matcher: Name predicate, or None to accept every name.
        flags: Behavior flags (FOLLOW_LINKS, DIR_SEP, XDEV are used here).
        source: Directory reading and attribute query primitives.
    """

    files: FileList
    guard: LoopGuard
    type_filter: TypeFilter
    matcher: NameMatcher | None
    flags: BuildFlag
    source: DirectorySource

    @property
    def follow_links(self) -> bool:
        return bool(self.flags & BuildFlag.FOLLOW_LINKS)


class Traverser:
    """Walks a directory tree and appends accepted entries to a FileList.

    Args:
        context: Traversal state; its loop guard must already contain the
            identity of the directory the walk starts from.
    """

    def __init__(self, context: TraversalContext) -> None:
        self._ctx = context

    def walk(self, directory: str, depth: int) -> None:
        """Collect the entries of ``directory`` and, depth permitting, its subdirectories.

        Args:
            directory: Directory to read.
            depth: Remaining recursion levels; 0 stops recursion, a
                negative value never does.

        Raises:
            DirectoryOpenError: If a directory cannot be opened for a
                reason other than missing permissions.
            CapacityExceededError: If the file list is full.
            ListAllocationError: If the file list or loop guard cannot grow.
        """
        try:
            handle = self._ctx.source.open_directory(directory)
        except PermissionError as e:
            logger.debug("Permission denied opening directory %s: %s", directory, e)
            return
        except OSError as e:
            logger.debug("Cannot open directory %s: %s", directory, e)
            raise DirectoryOpenError(directory, e) from e

        with handle:
            for entry in handle:
                if entry.name in _SELF_AND_PARENT:
                    continue
                self._visit(directory, entry, depth)

    def _visit(self, directory: str, entry: RawEntry, depth: int) -> None:
        """Classify, descend into, filter and collect a single entry."""
        ctx = self._ctx
        path: str | None = None
        hint = entry.type_hint

        if hint is None or self._needs_stat(hint):
            path = join_path(directory, entry.name)
            try:
                entry_stat = ctx.source.stat(path, follow_symlinks=ctx.follow_links)
            except OSError as e:
                logger.debug("Cannot query attributes of %s: %s", path, e)
                return
            entry_type = entry_stat.entry_type
            if depth != 0 and entry_type == EntryType.DIR:
                if not self._descend(path, entry_stat, depth):
                    return
        else:
            entry_type = hint

        if not ctx.type_filter.accepts(entry_type):
            return
        if ctx.matcher is not None and not ctx.matcher(entry.name):
            return

        if path is None:
            path = join_path(directory, entry.name)
        if entry_type == EntryType.DIR and ctx.flags & BuildFlag.DIR_SEP:
            path += DIR_SEPARATOR

        ctx.files.append(path)

    def _needs_stat(self, type_hint: EntryType) -> bool:
        if type_hint in (EntryType.DIR, EntryType.UNKNOWN):
            return True
        return type_hint == EntryType.LNK and self._ctx.follow_links

    def _descend(self, path: str, entry_stat: EntryStat, depth: int) -> bool:
        """Recurse into a subdirectory unless it closes a loop.

        Returns:
            False if the directory is a loop and must not be listed either.
        """
        guard = self._ctx.guard
        identity = entry_stat.identity

        if guard.contains(identity):
            logger.debug("Directory loop detected: %s", path)
            return False

        if self._ctx.flags & BuildFlag.XDEV and identity.device != guard.root.device:
            logger.debug("Ignoring other file system: %s", path)
            return True

        guard.push(identity)
        try:
            self.walk(path, depth - 1 if depth > 0 else depth)
        finally:
            guard.pop()
        return True
