"""String comparators for hierarchical file list ordering.

Every comparator returns a negative number, zero, or a positive number,
like C's strcmp(). Path ordering splits both paths at their last
separator and compares the directory parts first, so that the contents
of one directory are grouped together and come after the entries of
its parent directory.

The COLLATE method uses locale.strcoll() and therefore depends on the
process-wide LC_COLLATE setting, which callers must establish with
locale.setlocale() before sorting.
"""

import functools
import locale
import os
from collections.abc import Callable
from typing import Any

from filelist.models import DIR_SEPARATOR, SortMethod

Comparator = Callable[[str, str], int]


def _fold(byte: int) -> int:
    # ASCII-only case folding, independent of the locale
    if 65 <= byte <= 90:
        return byte + 32
    return byte


def _is_digit(byte: int) -> bool:
    return 48 <= byte <= 57


def _digit_run_end(data: bytes, start: int) -> int:
    end = start
    while end < len(data) and _is_digit(data[end]):
        end += 1
    return end


def compare_default(s1: str, s2: str) -> int:
    """Compare strings alphabetically, semi-case-insensitively.

    Names are compared as their filesystem bytes. Letters are compared
    case-insensitively. If the strings differ only in case, the one with
    the lowercase letter at the first case-differing position comes
    first. A prefix sorts before the longer string.
    """
    b1 = os.fsencode(s1)
    b2 = os.fsencode(s2)
    tie = 0
    for c1, c2 in zip(b1, b2):
        if c1 == c2:
            continue
        f1 = _fold(c1)
        f2 = _fold(c2)
        if f1 != f2:
            return f1 - f2
        if not tie:
            # Reversed order: "a" < "A"
            tie = c2 - c1

    if len(b1) == len(b2):
        return tie
    return len(b1) - len(b2)


def compare_natural(s1: str, s2: str) -> int:
    """Compare strings like compare_default, but digit runs by numeric value.

    Digit runs of equal value are ordered by their number of leading
    zeros, more zeros first: "007" < "07" < "7".
    """
    b1 = os.fsencode(s1)
    b2 = os.fsencode(s2)
    tie = 0
    i = j = 0
    len1 = len(b1)
    len2 = len(b2)

    while i < len1 and j < len2:
        c1 = b1[i]
        c2 = b2[j]

        if _is_digit(c1) and _is_digit(c2):
            end1 = _digit_run_end(b1, i)
            end2 = _digit_run_end(b2, j)
            run1 = b1[i:end1]
            run2 = b2[j:end2]
            value1 = run1.lstrip(b"0") or b"0"
            value2 = run2.lstrip(b"0") or b"0"

            if len(value1) != len(value2):
                return len(value1) - len(value2)
            if value1 != value2:
                return -1 if value1 < value2 else 1
            if len(run1) != len(run2):
                return len(run2) - len(run1)

            i = end1
            j = end2
            continue

        if c1 != c2:
            f1 = _fold(c1)
            f2 = _fold(c2)
            if f1 != f2:
                return f1 - f2
            if not tie:
                tie = c2 - c1

        i += 1
        j += 1

    # At most one of the strings has bytes left
    return (len1 - i) - (len2 - j) or tie


def compare_collate(s1: str, s2: str) -> int:
    """Compare strings with the current locale's collation order."""
    return locale.strcoll(s1, s2)


def compare_ascii(s1: str, s2: str) -> int:
    """Compare strings by the raw byte values of their filesystem encoding.

    Undecodable bytes carried as surrogate escapes compare as the
    original bytes.
    """
    b1 = os.fsencode(s1)
    b2 = os.fsencode(s2)
    return (b1 > b2) - (b1 < b2)


_BASE_COMPARATORS: dict[SortMethod, Comparator] = {
    SortMethod.DEFAULT: compare_default,
    SortMethod.NATURAL: compare_natural,
    SortMethod.COLLATE: compare_collate,
    SortMethod.ASCII: compare_ascii,
}


def get_comparator(method: SortMethod) -> Comparator | None:
    """Get the base string comparator for a sort method.

    Args:
        method: The sort method.

    Returns:
        The comparator, or None for SortMethod.NONE.
    """
    return _BASE_COMPARATORS.get(SortMethod(method))


def split_path(path: str) -> tuple[str, str]:
    """Split a path into its directory part and its basename.

    A path without a separator has an empty directory part. A trailing
    separator yields an empty basename.
    """
    index = path.rfind(DIR_SEPARATOR)
    if index < 0:
        return "", path
    return path[:index], path[index + 1 :]


def compare_paths(p1: str, p2: str, method: SortMethod = SortMethod.DEFAULT) -> int:
    """Compare two paths hierarchically.

    The directory parts are compared first; the basenames only if the
    directory parts are equal.

    Args:
        p1: First path.
        p2: Second path.
        method: Sort method selecting the base comparator.

    Returns:
        Negative, zero, or positive like strcmp().

    Raises:
        ValueError: If method is SortMethod.NONE.
    """
    compare = get_comparator(method)
    if compare is None:
        msg = "SortMethod.NONE does not define an ordering"
        raise ValueError(msg)
    return _compare_split(p1, p2, compare)


def _compare_split(p1: str, p2: str, compare: Comparator) -> int:
    dir1, base1 = split_path(p1)
    dir2, base2 = split_path(p2)
    result = compare(dir1, dir2)
    if result == 0:
        result = compare(base1, base2)
    return result


def path_sort_key(method: SortMethod) -> Callable[[str], Any]:
    """Get a sort key implementing compare_paths() for the given method.

    Raises:
        ValueError: If method is SortMethod.NONE.
    """
    compare = get_comparator(method)
    if compare is None:
        msg = "SortMethod.NONE does not define an ordering"
        raise ValueError(msg)
    return functools.cmp_to_key(functools.partial(_compare_split, compare=compare))


def sort_paths(paths: list[str], method: SortMethod) -> None:
    """Sort paths in place; SortMethod.NONE leaves them untouched."""
    if get_comparator(method) is None:
        return
    paths.sort(key=path_sort_key(method))
