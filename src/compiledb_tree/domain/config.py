from __future__ import annotations

"""
Configuration Domain Management.

Handles the explorer settings: defaults, JSON persistence in the user data
directory, and merging of stored values over the defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from compiledb_tree.domain.constants import (
    ANCHOR_PARENT,
    CURRENT_CONFIG_VERSION,
    DEFAULT_DATABASE_CANDIDATES,
)
from compiledb_tree.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default explorer configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Workspace
        "project_root": os.getcwd(),
        "database_candidates": list(DEFAULT_DATABASE_CANDIDATES),
        "path_anchor": ANCHOR_PARENT,

        # Synchronization
        "watch": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the stored configuration merged over the defaults.

    A missing or corrupted file yields the defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    stored = data.get("settings", {})
    if isinstance(stored, dict):
        config.update({k: v for k, v in stored.items() if k in config})
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
    """
    state = {"version": CURRENT_CONFIG_VERSION, "settings": config}
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
