"""Configuration support for the Noema interpreter."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

from .errors import DEFAULT_PATH, MAX_MESSAGE_LENGTH, ConfigError

CONFIG_CANDIDATES = ("noema.toml", ".noemarc")

ENV_ALIAS_MAP = {
    "NOEMA_MAX_VARIABLES": "max_variables",
}


@dataclass(frozen=True)
class NoemaConfig:
    """Limits applied to a single run of the pipeline."""

    max_variables: int = 1000
    max_token_length: int = 255
    max_message_length: int = MAX_MESSAGE_LENGTH
    max_indent_depth: int = 256
    max_expression_depth: int = 32
    default_path: str = DEFAULT_PATH


_INT_FIELDS = {f.name for f in fields(NoemaConfig) if f.type in ("int", int)}


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise ConfigError("TOML parsing requires Python 3.11 or later.", path=str(path))
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    return data.get("noema") or {}


def _coerce_limit(name: str, raw: Any, source: Optional[str]) -> int:
    if isinstance(raw, bool):
        raise ConfigError(f"'{name}' must be a positive integer", path=source)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a positive integer", path=source) from None
    if value <= 0:
        raise ConfigError(f"'{name}' must be a positive integer", path=source)
    return value


def config_from_mapping(data: Mapping[str, Any], source: Optional[str] = None) -> NoemaConfig:
    """Build a config from a raw mapping, ignoring unknown keys."""
    values: Dict[str, Any] = {}
    for key, raw in data.items():
        if key in _INT_FIELDS:
            values[key] = _coerce_limit(key, raw, source)
        elif key == "default_path":
            values[key] = str(raw)
    return NoemaConfig(**values)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_CANDIDATES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_config(root: Optional[Path] = None, explicit: Optional[Path] = None) -> NoemaConfig:
    """Load the configuration for ``root`` (defaults when no file exists)."""
    root = (root or Path.cwd()).resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return NoemaConfig()

    try:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"cannot read configuration: {exc}", path=str(config_path)) from exc

    if not isinstance(data, dict):
        raise ConfigError("configuration must be a table of settings", path=str(config_path))
    return config_from_mapping(data, source=str(config_path))


def apply_env_overrides(config: NoemaConfig, environ: Optional[Mapping[str, str]] = None) -> NoemaConfig:
    environ = os.environ if environ is None else environ
    overrides: Dict[str, int] = {}
    for env_name, field_name in ENV_ALIAS_MAP.items():
        raw = environ.get(env_name)
        if raw:
            overrides[field_name] = _coerce_limit(field_name, raw, env_name)
    if not overrides:
        return config
    return replace(config, **overrides)


__all__ = [
    "NoemaConfig",
    "CONFIG_CANDIDATES",
    "ENV_ALIAS_MAP",
    "config_from_mapping",
    "locate_config_file",
    "load_config",
    "apply_env_overrides",
]
