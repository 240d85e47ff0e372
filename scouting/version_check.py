"""Application version lookup."""

import logging
import tomllib
from pathlib import Path

logger = logging.getLogger(__name__)

# Read version from pyproject.toml
_BASE_DIR = Path(__file__).resolve().parent.parent
_PYPROJECT_PATH = _BASE_DIR / "pyproject.toml"

try:
    with open(_PYPROJECT_PATH, "rb") as f:
        _pyproject_data = tomllib.load(f)
    CURRENT_VERSION = _pyproject_data["project"]["version"]
except (OSError, KeyError, tomllib.TOMLDecodeError) as e:
    logger.warning("Could not read version from pyproject.toml: %s", e)
    CURRENT_VERSION = "0.0.0"
