"""Prowl — a live-reloading static file server for local development.

Serves a directory, tells connected browsers when files change, and lets
them fetch the file index or many files at once by glob.

Quick start::

    import prowl

    prowl.dev("my-site/")

Embedding the ASGI app::

    from prowl import ProwlConfig, create_app

    app = create_app(ProwlConfig(root=Path("my-site")))

Endpoints::

    /@hot-notify   text/event-stream of fs-notify events
    /@hot-index    JSON array of every served file
    /@hot-glob     files matching ?pattern=, concatenated

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "ProwlConfig",
    "__version__",
    "create_app",
    "dev",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import prowl`` fast: nothing below is imported until used.
    """
    if name == "ProwlConfig":
        from prowl.config import ProwlConfig

        return ProwlConfig

    if name == "create_app":
        from prowl.app import create_app

        return create_app

    if name == "dev":
        from prowl.app import dev

        return dev

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
