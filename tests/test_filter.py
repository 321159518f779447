"""Tests for prowl.files.filter — which paths are ever exposed."""

from __future__ import annotations

import pytest

from prowl.files.filter import accepts


class TestAccepts:
    """accepts() rejects any path with a dot-segment, accepts the rest."""

    @pytest.mark.parametrize(
        "path",
        [
            "index.html",
            "docs/guide.md",
            "a/b/c/d.txt",
            "/docs/guide.md",
            "file.with.many.dots.js",
            "dir.v2/file",
            "",
        ],
    )
    def test_accepts_visible_paths(self, path: str) -> None:
        assert accepts(path)

    @pytest.mark.parametrize(
        "path",
        [
            ".env",
            ".git/config",
            "src/.cache/x.js",
            "/.well-known/thing",
            "a/b/.hidden",
            "docs/..",
            "a\\.git\\config",
        ],
    )
    def test_rejects_hidden_segments(self, path: str) -> None:
        assert not accepts(path)

    def test_empty_segments_ignored(self) -> None:
        assert accepts("docs//guide.md")
        assert accepts("docs/")
