"""Centralized config loading: read once at import time.

Point AETHER_CONFIG at another YAML file to override settings; keys it leaves
out keep the values from the bundled aether/config.yaml.
"""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env from project root (parent of aether/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"


def load_config(override_path: Path | None = None) -> dict:
    """Read the bundled config, then layer ``override_path`` on top if given."""
    config = yaml.safe_load(DEFAULT_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    if override_path is not None:
        config.update(yaml.safe_load(Path(override_path).read_text(encoding="utf-8")) or {})
    return config


_config = load_config(os.environ.get("AETHER_CONFIG"))


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config
