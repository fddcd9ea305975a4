"""Configuration module."""

import os
from pathlib import Path
from typing import Any, Dict

import yaml


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config/settings.yaml

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_dir = Path(__file__).parent
        config_path = config_dir / "settings.yaml"

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    for section in ("extraction", "export", "logging"):
        config.setdefault(section, {})

    # Override with environment variables if present
    if "LOG_LEVEL" in os.environ:
        config["logging"]["level"] = os.environ["LOG_LEVEL"]

    if "MAX_FILE_SIZE_MB" in os.environ:
        config["extraction"]["max_file_size_mb"] = float(os.environ["MAX_FILE_SIZE_MB"])

    if "FILE_ENCODING" in os.environ:
        config["extraction"]["encoding"] = os.environ["FILE_ENCODING"]

    if "EXPORT_DIR" in os.environ:
        config["export"]["output_dir"] = os.environ["EXPORT_DIR"]

    return config


def max_file_bytes(config: Dict[str, Any]) -> int:
    """Size limit from config, in bytes."""
    return int(config["extraction"].get("max_file_size_mb", 20) * 1024 * 1024)
