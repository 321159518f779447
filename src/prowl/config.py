"""Prowl configuration.

ProwlConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from prowl._errors import ConfigError


@dataclass(frozen=True, slots=True)
class ProwlConfig:
    """Configuration for a Prowl server instance.

    Attributes:
        root: Directory whose files are served.  Always resolved to an
              absolute path on construction.
        fallback: Filename served as the last-resort default page.
        host: Bind address for the dev server.
        port: Bind port for the dev server.
        hot_module_url: Module imported by the synthesized ``/sw.js``.
        chunk_size: Bytes read per chunk when streaming a file.
        max_pending_events: Per-connection bound on undelivered change
            notifications before the connection is dropped.
        watch_debounce_ms: Debounce window handed to watchfiles.
        log_events: Capacity of the in-memory event log.

    """

    root: Path = field(default_factory=Path.cwd)
    fallback: str = "index.html"
    host: str = "127.0.0.1"
    port: int = 3000
    hot_module_url: str = "https://esm.sh/v135/hot"
    chunk_size: int = 64 * 1024
    max_pending_events: int = 256
    watch_debounce_ms: int = 50
    log_events: int = 10_000

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        root = Path(self.root)
        if not root.is_absolute():
            root = root.resolve()
        object.__setattr__(self, "root", root)

    @property
    def url(self) -> str:
        """Base URL the dev server listens on."""
        return f"http://{self.host}:{self.port}"

    def validate(self) -> None:
        """Check values that can only be judged against the filesystem.

        Raises:
            ConfigError: If the root is not a directory or a numeric
                setting is out of range.

        """
        if not self.root.is_dir():
            msg = f"Root directory does not exist: {self.root}"
            raise ConfigError(msg)
        if not 0 <= self.port <= 65535:
            msg = f"Port out of range: {self.port}"
            raise ConfigError(msg)
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ConfigError(msg)
        if self.max_pending_events <= 0:
            msg = f"max_pending_events must be positive, got {self.max_pending_events}"
            raise ConfigError(msg)
        if not self.fallback or "/" in self.fallback or "\\" in self.fallback:
            msg = f"fallback must be a plain filename, got {self.fallback!r}"
            raise ConfigError(msg)
