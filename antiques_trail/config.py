from __future__ import annotations

# antiques_trail/config.py
import os
import yaml

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULTS = {
    "db_path": None,
    "test_db_path": None,
    "log_level": "INFO",
    "log_file": None,
    "cors_origins": [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
}


def project_root() -> str:
    return _PROJECT_ROOT


def _read_config_yaml(path: str | None = None) -> dict:
    cfg_path = path or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return cfg if isinstance(cfg, dict) else {}


def get_settings(path: str | None = None) -> dict:
    """Settings merged from DEFAULTS, config.yaml and environment.

    Only known keys are kept; blank strings in the yaml count as unset.
    """
    raw = _read_config_yaml(path)
    out = dict(DEFAULTS)
    for k in ("db_path", "test_db_path", "log_file"):
        v = raw.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    lvl = raw.get("log_level")
    if isinstance(lvl, str) and lvl.strip():
        out["log_level"] = lvl.strip().upper()
    origins = raw.get("cors_origins")
    if isinstance(origins, list):
        out["cors_origins"] = [str(o) for o in origins if o]

    env_level = os.environ.get("LOG_LEVEL")
    if env_level:
        out["log_level"] = env_level.upper()
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)
