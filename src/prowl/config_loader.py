"""Load ProwlConfig from prowl.yaml or prowl.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

from pathlib import Path

from prowl.config import ProwlConfig

_KNOWN_KEYS = frozenset({
    "fallback", "host", "port", "hot_module_url", "chunk_size",
    "max_pending_events", "watch_debounce_ms", "log_events",
})


def load_config(root: Path, **overrides: object) -> ProwlConfig:
    """Load ProwlConfig from root, optionally merging a config file.

    Looks for prowl.yaml, prowl.yml, or prowl.toml in root. If found, loads
    and merges with overrides. Overrides take precedence; ``None`` overrides
    are ignored so unset CLI flags do not mask file values.
    """
    file_config = _read_prowl_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return ProwlConfig(root=root, **merged)


def _read_prowl_config(root: Path) -> dict[str, object]:
    """Read prowl config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("prowl.yaml", "prowl.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "prowl.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_prowl_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_prowl_section(data)


def _flatten_prowl_section(data: dict[str, object]) -> dict[str, object]:
    """Extract prowl.* keys and known top-level keys into one mapping."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("prowl")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
