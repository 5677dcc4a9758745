"""Unit tests for entry name matching.

Tests for POSIX pattern translation and name predicates.
"""

import pytest
from filelist.errors import PatternCompileError
from filelist.filesystem.matcher import (
    compile_name_matcher,
    resolve_matcher,
    translate_pattern,
)
from filelist.models import BuildFlag


class TestTranslatePattern:
    """Tests for translate_pattern."""

    def test_plain_text_unchanged(self) -> None:
        """Ordinary characters pass through."""
        assert translate_pattern("abc.txt") == "abc.txt"

    def test_extended_operators_kept(self) -> None:
        """ERE operators keep their meaning."""
        assert translate_pattern("(a|b)+") == "(a|b)+"

    def test_basic_operators_are_literals(self) -> None:
        """In BRE, unescaped ( ) { } | + ? are literals."""
        assert translate_pattern("a|b+", basic=True) == "a\\|b\\+"

    def test_basic_escaped_operators_are_special(self) -> None:
        """In BRE, escaped operators are special."""
        assert translate_pattern("\\(ab\\)\\{2\\}", basic=True) == "(ab){2}"

    def test_word_boundaries(self) -> None:
        """GNU word anchors become \\b."""
        assert translate_pattern("\\<foo\\>") == "\\bfoo\\b"

    def test_character_classes(self) -> None:
        """Named classes are expanded inside brackets."""
        assert translate_pattern("[[:digit:]]") == "[0-9]"
        assert translate_pattern("[^[:alpha:]_]") == "[^a-zA-Z_]"

    def test_leading_bracket_literal(self) -> None:
        """A "]" right after the opening bracket is literal."""
        assert translate_pattern("[]a]") == "[\\]a]"


class TestCompileNameMatcher:
    """Tests for compile_name_matcher."""

    def test_matches_anywhere(self) -> None:
        """Patterns match anywhere in the name."""
        matches = compile_name_matcher("txt")
        assert matches("notes.txt")
        assert matches("txt")
        assert not matches("notes.md")

    def test_case_insensitive_by_default(self) -> None:
        """Matching ignores case unless requested."""
        assert compile_name_matcher("readme")("README.md")

    def test_case_sensitive(self) -> None:
        """Case-sensitive matching distinguishes case."""
        matches = compile_name_matcher("readme", case_sensitive=True)
        assert not matches("README.md")
        assert matches("readme.md")

    def test_anchors(self) -> None:
        """Anchors refer to the entry name."""
        matches = compile_name_matcher("^a.*\\.py$")
        assert matches("app.py")
        assert not matches("bapp.py")
        assert not matches("app.pyc")

    def test_extended_repetition(self) -> None:
        """"+" repeats in the extended dialect."""
        matches = compile_name_matcher("^a+b$")
        assert matches("aaab")
        assert not matches("a+b")

    def test_basic_literal_plus(self) -> None:
        """"+" is a literal in the basic dialect."""
        matches = compile_name_matcher("^a+b$", basic=True)
        assert matches("a+b")
        assert not matches("aaab")

    def test_basic_interval(self) -> None:
        """Escaped braces form an interval in the basic dialect."""
        matches = compile_name_matcher("^\\(ab\\)\\{2\\}$", basic=True)
        assert matches("abab")
        assert not matches("ab")

    def test_posix_class(self) -> None:
        """Named character classes match their members."""
        matches = compile_name_matcher("file[[:digit:]]+$")
        assert matches("file10")
        assert not matches("file")
        assert not matches("filex")

    def test_word_boundary(self) -> None:
        """Word anchors match at word edges."""
        matches = compile_name_matcher("\\<foo\\>")
        assert matches("foo.txt")
        assert not matches("foobar")

    def test_backslash_in_bracket(self) -> None:
        """A backslash inside brackets is a literal."""
        assert compile_name_matcher("[\\]")("back\\slash")

    @pytest.mark.parametrize("pattern", ["(", "[abc", "[[:nope:]]", "a{2,1}"])
    def test_invalid_patterns(self, pattern: str) -> None:
        """Invalid patterns raise PatternCompileError."""
        with pytest.raises(PatternCompileError) as exc_info:
            compile_name_matcher(pattern)
        assert exc_info.value.pattern == pattern


class TestResolveMatcher:
    """Tests for resolve_matcher."""

    def test_none(self) -> None:
        """No pattern means no matcher."""
        assert resolve_matcher(None, BuildFlag(0)) is None

    def test_callable_passthrough(self) -> None:
        """Callables are used as given."""

        def predicate(name: str) -> bool:
            return name.startswith("x")

        assert resolve_matcher(predicate, BuildFlag(0)) is predicate

    def test_flags_applied(self) -> None:
        """REGEX_CASE and REGEX_BASIC select the compile options."""
        matches = resolve_matcher("^A+$", BuildFlag.REGEX_CASE | BuildFlag.REGEX_BASIC)
        assert matches is not None
        assert matches("A+")
        assert not matches("a+")
        assert not matches("AA")

    def test_default_flags(self) -> None:
        """Without flags, patterns are case-insensitive EREs."""
        matches = resolve_matcher("^A+$", BuildFlag(0))
        assert matches is not None
        assert matches("aa")
