"""Shared test fixtures for prowl."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.testclient import TestClient

from prowl.app import create_app
from prowl.config import ProwlConfig
from prowl.observability.log import EventLog


# ---------------------------------------------------------------------------
# Watch primitive stand-in
# ---------------------------------------------------------------------------


class FakeWatchSource:
    """Watch primitive that records subscriptions and lets tests emit changes.

    Args:
        delay: Seconds to sleep inside each subscription, to widen races.
        fail: Raise OSError instead of subscribing.

    """

    def __init__(self, delay: float = 0.0, fail: bool = False) -> None:
        self.delay = delay
        self.fail = fail
        self.calls: list[Path] = []
        self._callback: Callable[[str, str], None] | None = None
        self._lock = threading.Lock()

    @property
    def subscriptions(self) -> int:
        with self._lock:
            return len(self.calls)

    def __call__(self, root: Path, callback: Callable[[str, str], None]) -> None:
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            msg = "watch limit reached"
            raise OSError(msg)
        with self._lock:
            self.calls.append(root)
            self._callback = callback

    def emit(self, raw_kind: str, path: str) -> None:
        assert self._callback is not None, "source was never subscribed"
        self._callback(raw_kind, path)


def make_request(path: str, query: str = "", method: str = "GET") -> Request:
    """A bare Starlette request, for calling endpoint handlers directly."""
    return Request({
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "query_string": query.encode(),
        "headers": [],
    })


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A small site: pages, assets, a nested dir, and hidden noise."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text("<h1>home</h1>")
    (root / "404.html").write_text("<h1>missing</h1>")
    (root / "about.html").write_text("<h1>about</h1>")
    (root / "app.js").write_text("console.log('app');")
    docs = root / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>docs</h1>")
    (docs / "guide.md").write_text("# Guide\n")
    git = root / ".git"
    git.mkdir()
    (git / "config").write_text("[core]\n")
    (root / ".env").write_text("SECRET=1\n")
    return root


@pytest.fixture
def text_root(tmp_path: Path) -> Path:
    """Exactly a.txt, b.txt and c.md."""
    root = tmp_path / "text"
    root.mkdir()
    (root / "a.txt").write_text("AAA")
    (root / "b.txt").write_text("BBB")
    (root / "c.md").write_text("CCC")
    return root


@pytest.fixture
def fake_source() -> FakeWatchSource:
    return FakeWatchSource()


@pytest.fixture
def make_app(fake_source: FakeWatchSource) -> Callable[..., Starlette]:
    """Build the app over a root, wired to the fake watch source."""

    def factory(root: Path, **overrides: Any) -> Starlette:
        config = ProwlConfig(root=root, **overrides)
        return create_app(config, source=fake_source, event_log=EventLog())

    return factory


@pytest.fixture
def make_client(make_app: Callable[..., Starlette]) -> Callable[..., TestClient]:
    """Build a TestClient over a root; server errors come back as 500s."""

    def factory(root: Path, **overrides: Any) -> TestClient:
        return TestClient(make_app(root, **overrides), raise_server_exceptions=False)

    return factory
