"""Tests for prowl._cli — argument parsing and command dispatch."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from prowl._cli import _build_parser, main


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_dev_default_args(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["dev"])
        assert args.command == "dev"
        assert args.root == "."
        assert args.host is None
        assert args.port is None
        assert args.fallback is None

    def test_dev_with_custom_root(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["dev", "public/"])
        assert args.root == "public/"

    def test_dev_all_flags(self) -> None:
        parser = _build_parser()
        args = parser.parse_args([
            "dev", "public/",
            "--host", "0.0.0.0",
            "--port", "8080",
            "--fallback", "app.html",
        ])
        assert args.root == "public/"
        assert args.host == "0.0.0.0"
        assert args.port == 8080
        assert args.fallback == "app.html"

    def test_no_command(self) -> None:
        parser = _build_parser()
        args = parser.parse_args([])
        assert args.command is None


class TestMain:
    """main() — dispatch and exit codes."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "prowl" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--version"])
        assert "0.1.0" in capsys.readouterr().out

    def test_dev_passes_flags(self) -> None:
        with patch("prowl.app.dev") as dev:
            main(["dev", "site/", "--port", "4000"])
        dev.assert_called_once_with(root="site/", host=None, port=4000, fallback=None)

    def test_missing_root_exits_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["dev", str(tmp_path / "missing")])
        assert exc_info.value.code == 2
        assert "Error:" in capsys.readouterr().err
