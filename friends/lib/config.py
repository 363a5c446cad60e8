import logging
from functools import lru_cache

import yaml

from . import paths

logger = logging.getLogger(__name__)

BACKENDS = ("sqlite", "memory")

DEFAULTS: dict = {
    "backend": "sqlite",
    "db_file": "friends.db",
    "timeout": 5.0,
    "skills_timeout": 10.0,
    "host": "127.0.0.1",
    "port": 3000,
    "log_level": "INFO",
}

_TYPES: dict[str, tuple[type, ...]] = {
    "backend": (str,),
    "db_file": (str,),
    "timeout": (int, float),
    "skills_timeout": (int, float),
    "host": (str,),
    "port": (int,),
    "log_level": (str,),
}


def _validate_config(cfg: dict) -> None:
    """Validate config structure. Fail fast on invalid types."""
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a dict, got {type(cfg).__name__}")

    for key, value in cfg.items():
        expected = _TYPES.get(key)
        if expected is None:
            logger.warning(f"Ignoring unknown config key '{key}'")
            continue
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ValueError(f"Config '{key}' must be {expected[0].__name__}, got {value!r}")

    if "backend" in cfg and cfg["backend"] not in BACKENDS:
        raise ValueError(f"Config 'backend' must be one of {', '.join(BACKENDS)}")
    for key in ("timeout", "skills_timeout"):
        if key in cfg and cfg[key] <= 0:
            raise ValueError(f"Config '{key}' must be positive")


def clear_cache():
    load_config.cache_clear()


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load config.yaml merged over DEFAULTS; DEFAULTS alone if the file is missing."""
    path = paths.config_file()
    if not path.exists():
        return dict(DEFAULTS)
    with open(path) as f:
        cfg = yaml.safe_load(f) or {}
    _validate_config(cfg)
    return {**DEFAULTS, **{k: v for k, v in cfg.items() if k in DEFAULTS}}


def get(key: str):
    return load_config()[key]


def init_config() -> bool:
    """Write default config.yaml if missing. Returns True if written."""
    target = paths.config_file()
    if target.exists():
        return False

    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w") as f:
        yaml.safe_dump(DEFAULTS, f, sort_keys=False)
    clear_cache()
    return True
