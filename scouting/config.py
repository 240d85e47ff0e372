"""Application settings loading."""

import logging
from pathlib import Path

import yaml

from .constants import (
    BASE_DIR,
    CONFIG_FILE,
    DEFAULT_DATA_DIR,
    MAX_UPLOAD_MB,
    REQUEST_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)

DEFAULT_SERVER_SETTINGS = {
    "host": "127.0.0.1",
    "port": 5000,
    "data_dir": str(DEFAULT_DATA_DIR),
    "max_upload_mb": MAX_UPLOAD_MB,
}

DEFAULT_CLIENT_SETTINGS = {
    "base_url": "http://127.0.0.1:5000/api",
    "timeout": REQUEST_TIMEOUT_SECONDS,
    "data_dir": str(DEFAULT_DATA_DIR / "client"),
}


def _section(cfg: dict, name: str, defaults: dict) -> dict:
    """Merge one top-level config section over its defaults."""
    value = cfg.get(name, {}) or {}
    if not isinstance(value, dict):
        logger.warning("[Config] %s config was not an object; using defaults", name)
        value = {}
    merged = dict(defaults)
    merged.update(value)
    return merged


def load_settings(config_file: Path | None = None) -> tuple[dict, dict]:
    """Load server and client settings.

    Returns:
        Tuple of (server_cfg, client_cfg)

    Expected YAML structure:
        server:
          host: "0.0.0.0"
          port: 8080
          data_dir: "data"
          max_upload_mb: 10

        client:
          base_url: "http://127.0.0.1:5000/api"
          timeout: 10
          data_dir: "data/client"
    """
    path = Path(config_file or CONFIG_FILE)
    cfg = {}
    if path.exists():
        try:
            with path.open("r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
            logger.debug("[Config] Loaded configuration from %s", path)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("[Config] Failed to load config (%s): %s", path, exc)
            cfg = {}
    else:
        logger.info("[Config] No config file at %s; using defaults", path)

    if not isinstance(cfg, dict):
        logger.warning("[Config] Config root was not an object; using defaults")
        cfg = {}

    server = _section(cfg, "server", DEFAULT_SERVER_SETTINGS)
    client = _section(cfg, "client", DEFAULT_CLIENT_SETTINGS)

    # Relative data dirs resolve against the project root
    for section in (server, client):
        data_dir = Path(section["data_dir"])
        if not data_dir.is_absolute():
            data_dir = BASE_DIR / data_dir
        section["data_dir"] = str(data_dir)

    return server, client
