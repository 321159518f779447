"""Prowl application — wiring config, watch hub, and routes together.

``create_app`` builds the Starlette application; ``dev`` runs it under
uvicorn for local development.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING

from starlette.applications import Starlette

from prowl.config_loader import load_config
from prowl.http.router import create_routes, failure_handler
from prowl.observability.log import EventLog
from prowl.watch.hub import WatchHub
from prowl.watch.source import WatchfilesSource

if TYPE_CHECKING:
    from prowl.config import ProwlConfig
    from prowl.watch.hub import WatchSource


def create_app(
    config: ProwlConfig,
    *,
    source: WatchSource | None = None,
    event_log: EventLog | None = None,
) -> Starlette:
    """Build the ASGI application for *config*.

    The config, watch hub and event log are exposed on ``app.state``.

    Args:
        config: Server configuration.
        source: Filesystem watch primitive; defaults to watchfiles.  The
            hub calls it at most once, on the first notification client.
        event_log: Event store; a fresh one sized by ``config.log_events``
            is created when omitted.

    """
    if event_log is None:
        event_log = EventLog(max_events=config.log_events)
    if source is None:
        source = WatchfilesSource(debounce_ms=config.watch_debounce_ms)
    hub = WatchHub(config.root, source, event_log=event_log)

    app = Starlette(
        routes=create_routes(config, hub, event_log=event_log),
        exception_handlers={Exception: failure_handler(event_log)},
    )
    app.state.config = config
    app.state.hub = hub
    app.state.event_log = event_log
    return app


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Start the live-reloading development server.

    Args:
        root: Directory to serve.
        **kwargs: Override ProwlConfig fields.

    Raises:
        ConfigError: If the configuration is invalid.

    """
    import uvicorn

    from prowl.banner import print_banner

    t0 = time.perf_counter()
    config = load_config(Path(root), **kwargs)
    config.validate()
    app = create_app(config)
    load_ms = (time.perf_counter() - t0) * 1000

    print_banner(config, load_ms=load_ms)

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            log_level="warning",
            ws="none",
        )
    )
    server.run()
