from __future__ import annotations

import logging
import os
import threading
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable

import yaml

logger = logging.getLogger(__name__)

_cache_lock = threading.Lock()
_cached: dict[str, Any] | None = None
_cached_path: str | None = None

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _project_root() -> Path:
    # src/utils/config_loader.py -> src/utils -> src -> project root
    return Path(__file__).resolve().parents[2]


def default_config_path() -> Path:
    return _project_root() / "config" / "config.yaml"


def default_config() -> dict[str, Any]:
    return {
        "app": {"verbose": False},
        "logging": {"level": "INFO"},
    }


def deep_merge(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = deepcopy(base)
    for k, v in patch.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)  # type: ignore[arg-type]
        else:
            out[k] = deepcopy(v)
    return out


def parse_bool(value: str, *, name: str) -> bool:
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean string (1/0, true/false, yes/no, on/off); got {value!r}")


def _apply_env_overrides(cfg: dict[str, Any]) -> None:
    """Override selected YAML settings with QUANTUMTRADER_* environment variables."""
    app = cfg.setdefault("app", {})
    if os.getenv("QUANTUMTRADER_VERBOSE") is not None:
        app["verbose"] = parse_bool(os.environ["QUANTUMTRADER_VERBOSE"], name="QUANTUMTRADER_VERBOSE")

    log_cfg = cfg.setdefault("logging", {})
    if os.getenv("QUANTUMTRADER_LOG_LEVEL"):
        log_cfg["level"] = os.environ["QUANTUMTRADER_LOG_LEVEL"].strip().upper()


def _validate_bool(v: Any, *, name: str) -> None:
    if not isinstance(v, bool):
        raise ValueError(f"{name} must be boolean")


def _validate_log_level(v: Any) -> None:
    if not isinstance(v, str) or v.strip().upper() not in LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")


_ALLOWED_KEYS: dict[str, Callable[[Any], None]] = {
    "app.verbose": lambda v: _validate_bool(v, name="app.verbose"),
    "logging.level": _validate_log_level,
}


def _flatten(cfg: dict[str, Any], *, prefix: str = "") -> list[tuple[str, Any]]:
    out: list[tuple[str, Any]] = []
    for k, v in cfg.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.extend(_flatten(v, prefix=key))
        else:
            out.append((key, v))
    return out


def validate_config(cfg: dict[str, Any]) -> None:
    """Reject unknown sections/keys and badly typed values."""
    for section, body in cfg.items():
        if body is not None and not isinstance(body, dict):
            raise ValueError(f"Config section {section!r} must be a mapping")
    # Disallow unknown keys; keeps the configuration surface explicit.
    for path, value in _flatten(cfg):
        validator = _ALLOWED_KEYS.get(path)
        if validator is None:
            raise ValueError(f"Unsupported config key: {path}")
        validator(value)


def _resolve_path(config_path: str | Path | None) -> tuple[Path, bool]:
    """Return (path, explicit). Only an explicitly named file is required to exist."""
    if config_path:
        return Path(config_path), True
    env_path = os.getenv("QUANTUMTRADER_CONFIG")
    if env_path:
        return Path(env_path), True
    return default_config_path(), False


def load_config(config_path: str | Path | None = None, *, force_reload: bool = False) -> dict[str, Any]:
    """
    Load the YAML config once and reuse it across the process.

    - Reads `config/config.yaml` by default; a missing default file means built-in defaults.
    - `config_path` or QUANTUMTRADER_CONFIG name a file that must exist.
    - Applies environment overrides, then validates against the allowed keys.
    - Returns a deep copy so callers can safely mutate local copies.
    """
    global _cached, _cached_path

    path, explicit = _resolve_path(config_path)
    path_str = str(path.resolve())

    with _cache_lock:
        if not force_reload and _cached is not None and _cached_path == path_str:
            return deepcopy(_cached)

        file_cfg: Any = {}
        if path.exists():
            with path.open("r", encoding="utf-8") as f:
                file_cfg = yaml.safe_load(f) or {}
        elif explicit:
            raise FileNotFoundError(f"Config file not found: {path}")

        if not isinstance(file_cfg, dict):
            raise ValueError(f"Config must be a YAML mapping (dict); got {type(file_cfg).__name__}")

        validate_config(file_cfg)
        # An empty section (`app:` with nothing under it) means "use the defaults".
        file_cfg = {k: v for k, v in file_cfg.items() if v is not None}
        cfg = deep_merge(default_config(), file_cfg)
        _apply_env_overrides(cfg)
        validate_config(cfg)

        _cached = cfg
        _cached_path = path_str
        logger.debug("Loaded config from %s", path_str if path.exists() else "<defaults>")
        return deepcopy(cfg)
