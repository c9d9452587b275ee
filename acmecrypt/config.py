#!/usr/bin/env python3
# acmecrypt/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in the config directory: .env, config.ini, config.json, config.toml
  3) ACME_CRYPT_* environment variables

The config directory is ACME_CRYPT_CONFIG_DIR, else $XDG_CONFIG_HOME/acmecrypt,
else ~/.config/acmecrypt. Keys inside files may omit the ACME_CRYPT_ prefix
(`backend = "gpg"` is the same as ACME_CRYPT_BACKEND=gpg).

Validation:
  - BACKEND: non-empty name, lowercased (default "gpg")
  - RCPT: None or str (required later by the gpg backend, not here)
  - GPG / 9P: executable names, non-empty
  - FSYS: None or normalized path of a mounted acme file system
  - PLUGINS: comma separated module names
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE: None or normalized path
"""

from dataclasses import dataclass, field
from typing import Any, Mapping
from pathlib import Path
import configparser
import json
import os
import re
import tomllib

from acmecrypt.errors import ConfigError

PREFIX = "ACME_CRYPT_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "ACME_CRYPT_BACKEND": "gpg",
    "ACME_CRYPT_RCPT": None,
    "ACME_CRYPT_GPG": "gpg",
    "ACME_CRYPT_FSYS": None,        # e.g. /mnt/acme; unset → plan9port `9p`
    "ACME_CRYPT_9P": "9p",
    "ACME_CRYPT_PLUGINS": "",
    "ACME_CRYPT_LOG_LEVEL": None,   # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "ACME_CRYPT_LOG_FILE": None,
}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    backend: str = "gpg"
    recipient: str | None = None
    gpg_program: str = "gpg"
    # Forwarded to child processes as DISPLAY; empty when unset
    display: str = ""
    acme_fsys: Path | None = None
    ninep_program: str = "9p"
    plugins: tuple[str, ...] = ()
    log_level: str | None = None
    log_file_path: Path | None = None

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out
    except UnicodeDecodeError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc

    line_re = re.compile(r"""^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def config_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    explicit = env.get("ACME_CRYPT_CONFIG_DIR")
    if explicit:
        return Path(os.path.expanduser(explicit))
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "acmecrypt"


def _find_config_files(environ: Mapping[str, str] | None = None) -> list[Path]:
    base = config_dir(environ)
    return [
        base / ".env",
        base / "config.ini",
        base / "config.json",
        base / "config.toml",
    ]


# ---------- normalization & coercion ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = str(k).upper()
        out[key if key.startswith(PREFIX) else PREFIX + key] = v
    return out


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val).strip()


def _as_program(val: Any, key: str) -> str:
    prog = _as_opt_str(val)
    if prog is None:
        raise ConfigError(f"{key} must name an executable")
    return prog


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ConfigError(
            f"ACME_CRYPT_LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


def _as_module_list(val: Any) -> tuple[str, ...]:
    if val is None:
        return ()
    items = val if isinstance(val, (list, tuple)) else str(val).split(",")
    return tuple(s for s in (str(i).strip() for i in items) if s)


# ---------- merge & load ----------

def _merge_sources(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(env):
        if not file.is_file():
            continue
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only our own prefix
    env_overrides = {k: v for k, v in env.items() if k.startswith(PREFIX)}
    merged.update(env_overrides)
    return merged


def _validate_and_build(config: dict[str, Any], environ: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if environ is None else environ

    backend = _as_opt_str(config.get("ACME_CRYPT_BACKEND")) or DEFAULTS["ACME_CRYPT_BACKEND"]

    recognized = set(DEFAULTS.keys()) | {"ACME_CRYPT_CONFIG_DIR"}
    extra = {k: v for k, v in config.items() if k not in recognized}

    return AppConfig(
        backend=backend.lower(),
        recipient=_as_opt_str(config.get("ACME_CRYPT_RCPT")),
        gpg_program=_as_program(config.get("ACME_CRYPT_GPG"), "ACME_CRYPT_GPG"),
        display=env.get("DISPLAY", ""),
        acme_fsys=_as_opt_path(config.get("ACME_CRYPT_FSYS")),
        ninep_program=_as_program(config.get("ACME_CRYPT_9P"), "ACME_CRYPT_9P"),
        plugins=_as_module_list(config.get("ACME_CRYPT_PLUGINS")),
        log_level=_as_log_level(config.get("ACME_CRYPT_LOG_LEVEL")),
        log_file_path=_as_opt_path(config.get("ACME_CRYPT_LOG_FILE")),
        extra=extra,
    )


# ---------- public API ----------

def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects (no directory creation).
    """
    raw = _merge_sources(environ)
    return _validate_and_build(raw, environ)
