"""Prowl error hierarchy.

All prowl-specific errors inherit from ProwlError for easy catching.
"""


class ProwlError(Exception):
    """Base error for all prowl operations."""


class ConfigError(ProwlError):
    """Invalid or missing configuration."""


class FilesystemError(ProwlError):
    """Directory listing or watch subscription failed."""
