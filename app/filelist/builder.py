"""Public entry points: build, destroy and merge file lists.

Example:
    >>> result = build_file_list(
    ...     "/usr/share/doc",
    ...     file_types=FileType.REG,
    ...     pattern=r"\\.gz$",
    ...     depth=1,
    ...     sort_method=SortMethod.NATURAL,
    ... )
    >>> for path in result.files:
    ...     print(path)
"""

import logging
import os
import re

from filelist.core.growable import FileList, GrowthPolicy
from filelist.core.loop_guard import LoopGuard
from filelist.core.settings import ListSettings
from filelist.errors import CapacityExceededError, DirectoryOpenError, ListAllocationError
from filelist.filesystem.matcher import NameMatcher, resolve_matcher
from filelist.filesystem.source import DirectorySource, OsDirectorySource
from filelist.filesystem.traversal import TraversalContext, Traverser
from filelist.models import (
    DIR_SEPARATOR,
    UNLIMITED_DEPTH,
    BuildFlag,
    BuildResult,
    FileType,
    SortMethod,
    TypeFilter,
)

logger = logging.getLogger(__name__)

_REPEATED_SEPARATORS = re.compile(re.escape(DIR_SEPARATOR) + "{2,}")


def normalize_directory(directory: str | os.PathLike[str]) -> str:
    """Collapse repeated separators and strip trailing ones.

    A lone root separator is kept.

    Raises:
        ValueError: If the directory is empty.
    """
    text = os.fspath(directory)
    if not text:
        msg = "Directory cannot be empty"
        raise ValueError(msg)
    collapsed = _REPEATED_SEPARATORS.sub(DIR_SEPARATOR, text)
    return collapsed.rstrip(DIR_SEPARATOR) or DIR_SEPARATOR


def build_file_list(
    directory: str | os.PathLike[str],
    *,
    file_types: FileType | int = FileType(0),
    pattern: str | NameMatcher | None = None,
    depth: int = UNLIMITED_DEPTH,
    flags: BuildFlag | int = BuildFlag(0),
    sort_method: SortMethod = SortMethod.DEFAULT,
    settings: ListSettings | None = None,
    source: DirectorySource | None = None,
) -> BuildResult:
    """Create a hierarchically sorted list of the entries below a directory.

    Args:
        directory: Directory in which the search starts.
        file_types: Combination of FileType values to collect; 0 collects all types.
        pattern: Regular expression matched against entry names, or a
            ready-made predicate. None collects every name.
        depth: Maximum recursion depth; 0 means no recursion and any
            negative value (UNLIMITED_DEPTH) means unlimited recursion.
        flags: Combination of BuildFlag values.
        sort_method: Ordering of the finished list.
        settings: List sizing settings; defaults if None.
        source: Filesystem primitives; the local filesystem if None.

    Returns:
        BuildResult holding the list. If ``capacity_exceeded`` is set, the
        list reached its maximum size and is missing at least one entry.

    Raises:
        ValueError: If the directory is empty.
        PatternCompileError: If the pattern is invalid.
        DirectoryOpenError: If the start directory cannot be queried, or a
            directory cannot be opened for a reason other than permissions.
        ListAllocationError: If the list or the loop guard cannot grow.
    """
    settings = settings or ListSettings()
    flags = BuildFlag(flags)
    sort_method = SortMethod(sort_method)
    source = source or OsDirectorySource()

    type_filter = TypeFilter.from_mask(file_types)
    matcher = resolve_matcher(pattern, flags)
    start_dir = normalize_directory(directory)

    try:
        root = source.stat(start_dir, follow_symlinks=True)
    except OSError as e:
        raise DirectoryOpenError(start_dir, e) from e

    guard = LoopGuard(settings.guard_initial_capacity)
    guard.push(root.identity)

    files = FileList(GrowthPolicy.from_settings(settings))
    traverser = Traverser(
        TraversalContext(
            files=files,
            guard=guard,
            type_filter=type_filter,
            matcher=matcher,
            flags=flags,
            source=source,
        )
    )

    capacity_exceeded = False
    try:
        traverser.walk(start_dir, depth)
    except CapacityExceededError as e:
        logger.debug("%s; keeping %d collected entries", e, len(files))
        capacity_exceeded = True
    except MemoryError as e:
        files.destroy()
        raise ListAllocationError(f"Out of memory while listing {start_dir}") from e
    except Exception:
        files.destroy()
        raise

    files.trim_and_terminate()
    files.sort(sort_method)

    logger.debug("Collected %d entries below %s", len(files), start_dir)
    return BuildResult(files=files, capacity_exceeded=capacity_exceeded)


def destroy_file_list(files: FileList | None) -> None:
    """Release a file list built by build_file_list().

    Safe to call with None or with an already released list.
    """
    if files is None:
        return
    files.destroy()


def merge_file_lists(
    destination: FileList,
    source: FileList,
    *,
    destination_count: int = 0,
    source_count: int = 0,
    sort_method: SortMethod = SortMethod.NONE,
) -> int:
    """Append the entries of ``source`` to ``destination`` and optionally sort.

    The source list is consumed and released. On failure, both lists are
    left unchanged.

    Args:
        destination: List that receives the entries.
        source: List whose entries are moved.
        destination_count: Known size of destination, or 0 to count it.
        source_count: Known size of source, or 0 to count it.
        sort_method: Ordering applied to the combined list.

    Returns:
        Number of entries in the combined list.

    Raises:
        MergeError: If a list was released, a size hint is wrong, or the
            combined size exceeds the destination's maximum.
        ListAllocationError: If the combined list cannot be allocated.
    """
    sort_method = SortMethod(sort_method)
    total = destination.absorb(source, count=destination_count, source_count=source_count)
    destination.sort(sort_method)
    return total
