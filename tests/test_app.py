"""Tests for prowl.app — wiring and the dev entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from starlette.applications import Starlette

from prowl._errors import ConfigError
from prowl.app import create_app, dev
from prowl.config import ProwlConfig
from prowl.observability.log import EventLog
from prowl.watch.source import WatchfilesSource

from .conftest import FakeWatchSource


class TestCreateApp:
    """create_app() — one hub and one route table per call."""

    def test_returns_starlette_app(self, tmp_path: Path) -> None:
        app = create_app(ProwlConfig(root=tmp_path))
        assert isinstance(app, Starlette)
        assert app.state.config.root == tmp_path

    def test_hub_starts_unarmed(self, tmp_path: Path) -> None:
        source = FakeWatchSource()
        app = create_app(ProwlConfig(root=tmp_path), source=source)
        assert not app.state.hub.armed
        assert source.subscriptions == 0

    def test_default_event_log_sized_from_config(self, tmp_path: Path) -> None:
        app = create_app(ProwlConfig(root=tmp_path, log_events=7))
        assert app.state.event_log is not None
        assert app.state.event_log.stats()["max_events"] == 7

    def test_custom_event_log(self, tmp_path: Path) -> None:
        log = EventLog()
        app = create_app(ProwlConfig(root=tmp_path), event_log=log)
        assert app.state.event_log is log

    def test_separate_apps_have_separate_hubs(self, tmp_path: Path) -> None:
        a = create_app(ProwlConfig(root=tmp_path))
        b = create_app(ProwlConfig(root=tmp_path))
        assert a.state.hub is not b.state.hub

    def test_default_source_is_watchfiles(self, tmp_path: Path) -> None:
        app = create_app(ProwlConfig(root=tmp_path))
        assert isinstance(app.state.hub._source, WatchfilesSource)


class TestDev:
    """dev() — config loading, banner, and uvicorn startup."""

    def test_runs_uvicorn_with_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / "prowl.yaml").write_text("port: 4000\n")
        with patch("uvicorn.Server") as server_cls, patch("uvicorn.Config") as config_cls:
            dev(tmp_path, host="0.0.0.0")

        server_cls.return_value.run.assert_called_once_with()
        args, kwargs = config_cls.call_args
        assert isinstance(args[0], Starlette)
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 4000
        assert isinstance(args[0].state.hub._source, WatchfilesSource)
        assert "Prowl" in capsys.readouterr().err

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            dev(tmp_path / "missing")
