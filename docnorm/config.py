"""
Configuration loading for Docnorm.

Configuration is a JSON document. The default ships inside the package at
``docnorm/config/config.json``; callers may point at their own copy.
"""

import json
from pathlib import Path
from typing import Optional, Union

from .utilities import Print

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "config.json"


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to config.json. If None, uses the packaged default.

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the configuration file does not exist
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Pass an existing config.json or omit the path to use the packaged default."
        )

    with open(config_path, encoding='utf-8') as f:
        config = json.load(f)

    Print("DEBUG", f"Loaded configuration v{config.get('version', 'unknown')} from {config_path}")
    return config


def section(config: dict, family: str, name: str) -> dict:
    """Return the engine-specific block ``config[family][name]``, or {} when absent."""
    return config.get(family, {}).get(name, {}) or {}
