"""Entry name matching with POSIX-style regular expressions.

Patterns are POSIX extended regular expressions by default and are
matched case-insensitively anywhere in the entry name. The basic
dialect (BRE) treats ``( ) { } | + ?`` as literals unless escaped.
Both dialects accept bracket expressions with named character classes
such as ``[[:digit:]]``; they are rewritten to Python ``re`` syntax
before compilation.
"""

import re
import string
from collections.abc import Callable

from filelist.errors import PatternCompileError
from filelist.models import BuildFlag

NameMatcher = Callable[[str], bool]

_POSIX_CLASSES: dict[str, str] = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "blank": " \\t",
    "cntrl": "\\x00-\\x1f\\x7f",
    "digit": "0-9",
    "graph": "\\x21-\\x7e",
    "lower": "a-z",
    "print": "\\x20-\\x7e",
    "punct": re.escape(string.punctuation),
    "space": " \\t\\n\\r\\f\\v",
    "upper": "A-Z",
    "xdigit": "0-9A-Fa-f",
}

# Characters that are special in ERE but literal in BRE (and vice versa when escaped)
_BRE_SWAPPED = "(){}|+?"

# Characters Python treats specially inside a character set
_SET_ESCAPES = "\\[&~|"


def _translate_bracket(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression starting at ``pattern[start]``.

    Returns:
        Tuple of (translated set, index after the closing bracket).

    Raises:
        re.error: If the expression is unterminated or names an unknown class.
    """
    parts = ["["]
    i = start + 1
    if i < len(pattern) and pattern[i] == "^":
        parts.append("^")
        i += 1
    # A leading "]" is a literal
    if i < len(pattern) and pattern[i] == "]":
        parts.append("\\]")
        i += 1

    while i < len(pattern) and pattern[i] != "]":
        if pattern.startswith("[:", i):
            close = pattern.find(":]", i + 2)
            if close != -1:
                name = pattern[i + 2 : close]
                if name not in _POSIX_CLASSES:
                    raise re.error(f"unknown character class [:{name}:]", pattern, i)
                parts.append(_POSIX_CLASSES[name])
                i = close + 2
                continue
        char = pattern[i]
        parts.append("\\" + char if char in _SET_ESCAPES else char)
        i += 1

    if i >= len(pattern):
        raise re.error("unterminated bracket expression", pattern, start)
    parts.append("]")
    return "".join(parts), i + 1


def translate_pattern(pattern: str, *, basic: bool = False) -> str:
    """Rewrite a POSIX regular expression as a Python ``re`` pattern.

    Args:
        pattern: Extended (ERE) or basic (BRE) regular expression.
        basic: If True, interpret the pattern as a BRE.

    Returns:
        Equivalent Python regular expression source.

    Raises:
        re.error: If a bracket expression is malformed.
    """
    out: list[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "[":
            translated, i = _translate_bracket(pattern, i)
            out.append(translated)
            continue
        if char == "\\" and i + 1 < len(pattern):
            escaped = pattern[i + 1]
            if escaped in "<>":
                out.append("\\b")
            elif basic and escaped in _BRE_SWAPPED:
                out.append(escaped)
            else:
                out.append(char + escaped)
            i += 2
            continue
        if basic and char in _BRE_SWAPPED:
            out.append("\\" + char)
        else:
            out.append(char)
        i += 1
    return "".join(out)


def compile_name_matcher(
    pattern: str,
    *,
    case_sensitive: bool = False,
    basic: bool = False,
) -> NameMatcher:
    """Compile a name pattern into a predicate.

    Args:
        pattern: POSIX regular expression.
        case_sensitive: If True, match case-sensitively.
        basic: If True, use the basic (BRE) dialect.

    Returns:
        Predicate returning True if the pattern matches anywhere in a name.

    Raises:
        PatternCompileError: If the pattern is invalid.
    """
    try:
        compiled = re.compile(
            translate_pattern(pattern, basic=basic),
            0 if case_sensitive else re.IGNORECASE,
        )
    except re.error as e:
        raise PatternCompileError(pattern, e) from e

    def matches(name: str) -> bool:
        return compiled.search(name) is not None

    return matches


def resolve_matcher(
    pattern: str | NameMatcher | None,
    flags: BuildFlag,
) -> NameMatcher | None:
    """Turn a builder's pattern argument into a predicate.

    Strings are compiled according to the REGEX_CASE and REGEX_BASIC
    flags; callables are used as they are.
    """
    if pattern is None:
        return None
    if callable(pattern):
        return pattern
    return compile_name_matcher(
        pattern,
        case_sensitive=bool(flags & BuildFlag.REGEX_CASE),
        basic=bool(flags & BuildFlag.REGEX_BASIC),
    )
