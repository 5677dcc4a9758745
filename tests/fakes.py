"""In-memory DirectorySource for traversal tests.

Paths are absolute, "/"-separated and stored canonically. Symbolic
links store the canonical path of their target; intermediate path
components that are links are always resolved, the final component
only when following links.
"""

import errno
from collections.abc import Iterator
from dataclasses import dataclass, field

from filelist.filesystem.source import DirectoryHandle, DirectorySource, EntryStat, RawEntry
from filelist.models import EntryType

_MAX_LINK_HOPS = 40


def _default_hint(entry_type: EntryType) -> EntryType | None:
    if entry_type in (EntryType.REG, EntryType.DIR, EntryType.LNK):
        return entry_type
    return None


@dataclass
class FakeNode:
    """A node of the fake filesystem."""

    entry_type: EntryType
    inode: int
    device: int = 1
    hint: EntryType | None = None
    target: str | None = None
    open_errno: int | None = None
    stat_errno: int | None = None


class _FakeHandle(DirectoryHandle):
    def __init__(self, source: "FakeDirectorySource", path: str, entries: list[RawEntry]) -> None:
        self._source = source
        self._path = path
        self._entries = entries
        source.open_handles.add(path)

    def __iter__(self) -> Iterator[RawEntry]:
        yield from self._entries

    def close(self) -> None:
        self._source.open_handles.discard(self._path)


@dataclass
class FakeDirectorySource(DirectorySource):
    """DirectorySource over an in-memory tree."""

    nodes: dict[str, FakeNode] = field(default_factory=dict)
    open_handles: set[str] = field(default_factory=set)
    opened: list[str] = field(default_factory=list)
    stat_calls: list[tuple[str, bool]] = field(default_factory=list)
    _next_inode: int = 100

    def _add(self, path: str, node: FakeNode) -> str:
        self.nodes[path] = node
        return path

    def _inode(self, inode: int | None) -> int:
        if inode is not None:
            return inode
        self._next_inode += 1
        return self._next_inode

    def add_dir(
        self,
        path: str,
        *,
        device: int = 1,
        inode: int | None = None,
        open_errno: int | None = None,
        hint: EntryType | None = EntryType.DIR,
    ) -> str:
        return self._add(
            path,
            FakeNode(
                entry_type=EntryType.DIR,
                inode=self._inode(inode),
                device=device,
                hint=hint,
                open_errno=open_errno,
            ),
        )

    def add_file(
        self,
        path: str,
        entry_type: EntryType = EntryType.REG,
        *,
        device: int = 1,
        stat_errno: int | None = None,
        hinted: bool = True,
    ) -> str:
        return self._add(
            path,
            FakeNode(
                entry_type=entry_type,
                inode=self._inode(None),
                device=device,
                hint=_default_hint(entry_type) if hinted else None,
                stat_errno=stat_errno,
            ),
        )

    def add_link(self, path: str, target: str) -> str:
        return self._add(
            path,
            FakeNode(
                entry_type=EntryType.LNK,
                inode=self._inode(None),
                hint=EntryType.LNK,
                target=target,
            ),
        )

    def _lookup(self, path: str, *, follow: bool) -> tuple[str, FakeNode]:
        parts = [part for part in path.split("/") if part]
        current = ""
        node: FakeNode | None = None
        for index, part in enumerate(parts):
            current = f"{current}/{part}"
            node = self.nodes.get(current)
            if node is None:
                raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
            last = index == len(parts) - 1
            hops = 0
            while node.entry_type == EntryType.LNK and (follow or not last):
                hops += 1
                if hops > _MAX_LINK_HOPS or node.target is None:
                    raise OSError(errno.ELOOP, "Too many levels of symbolic links", path)
                current = node.target
                node = self.nodes.get(current)
                if node is None:
                    raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return current, node

    def open_directory(self, path: str) -> DirectoryHandle:
        canonical, node = self._lookup(path, follow=True)
        if node.open_errno is not None:
            raise OSError(node.open_errno, "Cannot open directory", path)
        if node.entry_type != EntryType.DIR:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        self.opened.append(path)

        entries = [
            RawEntry(name=".", type_hint=EntryType.DIR),
            RawEntry(name="..", type_hint=EntryType.DIR),
        ]
        for child_path, child in self.nodes.items():
            parent, _, name = child_path.rpartition("/")
            if parent == canonical:
                entries.append(RawEntry(name=name, type_hint=child.hint))
        return _FakeHandle(self, path, entries)

    def stat(self, path: str, *, follow_symlinks: bool) -> EntryStat:
        self.stat_calls.append((path, follow_symlinks))
        _, node = self._lookup(path, follow=follow_symlinks)
        if node.stat_errno is not None:
            raise OSError(node.stat_errno, "Cannot stat", path)
        return EntryStat(device=node.device, inode=node.inode, entry_type=node.entry_type)
