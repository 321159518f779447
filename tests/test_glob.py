"""Tests for prowl.files.glob — restricted glob compilation and matching."""

from __future__ import annotations

import pytest

from prowl.files.glob import compile_glob, match_entries


class TestCompileGlob:
    """compile_glob() and GlobMatcher.test()."""

    def test_star_stays_in_segment(self) -> None:
        matcher = compile_glob("*.js")
        assert matcher.test("a.js")
        assert not matcher.test("a/b.js")

    def test_double_star_crosses_segments(self) -> None:
        matcher = compile_glob("**/*.js")
        assert matcher.test("a/b.js")
        assert matcher.test("a/b/c/d.js")

    def test_double_star_slash_matches_zero_segments(self) -> None:
        assert compile_glob("**/*.js").test("top.js")
        assert compile_glob("src/**/x.css").test("src/x.css")

    def test_bare_double_star(self) -> None:
        matcher = compile_glob("src/**")
        assert matcher.test("src/a/b/c.txt")
        assert not matcher.test("lib/a.txt")

    def test_anchored_both_ends(self) -> None:
        matcher = compile_glob("*.js")
        assert not matcher.test("a.json")
        assert not matcher.test("x/a.js")

    def test_empty_pattern_matches_nothing(self) -> None:
        matcher = compile_glob("")
        assert not matcher.test("")
        assert not matcher.test("a.js")

    def test_leading_slash_ignored(self) -> None:
        assert compile_glob("/src/*.js").test("src/app.js")
        assert compile_glob("./src/*.js").test("src/app.js")

    @pytest.mark.parametrize("pattern", ["[abc].js", "{a,b}.js", "a?.js", "(", "\\", "+*+"])
    def test_never_fails_and_degrades_to_literal(self, pattern: str) -> None:
        matcher = compile_glob(pattern)
        assert matcher.test(pattern.replace("*", ""))

    def test_brackets_match_literally(self) -> None:
        matcher = compile_glob("[abc].js")
        assert matcher.test("[abc].js")
        assert not matcher.test("a.js")

    def test_braces_match_literally(self) -> None:
        matcher = compile_glob("{a,b}.js")
        assert matcher.test("{a,b}.js")
        assert not matcher.test("a.js")

    def test_matcher_is_frozen(self) -> None:
        matcher = compile_glob("*.js")
        with pytest.raises(AttributeError):
            matcher.pattern = "*.css"  # type: ignore[misc]


class TestMatchEntries:
    """match_entries() — glob plus the literal-substring convenience rule."""

    ENTRIES = ["a.txt", "b.txt", "c.md", "docs/d.txt"]

    def test_glob_filter_keeps_order(self) -> None:
        assert match_entries("*.txt", self.ENTRIES) == ["a.txt", "b.txt"]

    def test_no_match(self) -> None:
        assert match_entries("zz", self.ENTRIES) == []

    def test_empty_pattern_short_circuits(self) -> None:
        assert match_entries("", self.ENTRIES) == []

    def test_plain_filename_matches_itself(self) -> None:
        assert match_entries("c.md", self.ENTRIES) == ["c.md"]

    def test_substring_of_pattern_matches(self) -> None:
        """Entries contained in the raw pattern text count as matches."""
        assert match_entries("a.txt,c.md", self.ENTRIES) == ["a.txt", "c.md"]

    def test_recursive_pattern(self) -> None:
        assert match_entries("**/*.txt", self.ENTRIES) == ["a.txt", "b.txt", "docs/d.txt"]
