# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Configuration loading for jobline.

Config file lookup order:
1. Explicit path argument
2. JOBLINE_CONFIG environment variable
3. ~/.jobline/config.yaml

Example config.yaml:
    jobs_modules:
      - myproject.jobs
    lines_dir: lines
    log_level: INFO
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from jobline.compiler import load_job_lines_dir
from jobline.errors import ConfigError
from jobline.loader import load_jobs_module
from jobline.registry import Registry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.jobline/config.yaml"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_config_path(config_path: Optional[str] = None) -> Path:
    """Resolve the config file path."""
    if config_path:
        return Path(config_path).expanduser()
    env_path = os.environ.get("JOBLINE_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_PATH).expanduser()


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and validate the configuration file.

    Args:
        config_path: Optional explicit path

    Returns:
        Config dict with jobs_modules, lines_dir (absolute, or None) and log_level

    Raises:
        FileNotFoundError: If the config file does not exist
        ConfigError: If the file is not valid YAML or has an invalid structure
    """
    path = get_config_path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")

    modules = data.get("jobs_modules") or []
    if not isinstance(modules, list) or not all(isinstance(m, str) for m in modules):
        raise ConfigError("jobs_modules must be a list of module names")

    lines_dir = data.get("lines_dir")
    if lines_dir is not None:
        lines_path = Path(str(lines_dir)).expanduser()
        if not lines_path.is_absolute():
            lines_path = path.parent / lines_path
        lines_dir = lines_path.resolve()

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(f"Invalid log_level: {log_level}")

    return {
        "path": path,
        "jobs_modules": modules,
        "lines_dir": lines_dir,
        "log_level": log_level,
    }


def build_registry(config: Dict[str, Any]) -> Registry:
    """Build a Registry from loaded config: jobs modules first, then line files."""
    registry = Registry()
    for module_name in config.get("jobs_modules", []):
        load_jobs_module(registry, module_name)

    lines_dir = config.get("lines_dir")
    if lines_dir:
        for line in load_job_lines_dir(lines_dir):
            registry.register_job_line(line)
        logger.debug(f"Loaded job lines from {lines_dir}")
    return registry
