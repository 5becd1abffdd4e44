# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Client config loading from mantajobs.yaml and the environment.

This module provides:
- load_config(): Load YAML config, apply environment overrides, return typed ClientConfig
- find_config_file(): Locate the default config file
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from marshmallow import ValidationError

from .schema import ClientConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "mantajobs.yaml"

# Environment variable -> config key
ENV_OVERRIDES = {
    "MANTA_URL": "endpoint",
    "MANTA_USER": "account",
    "MANTA_TIMEOUT": "timeout",
}


def find_config_file() -> Path | None:
    """
    Locate the default config file.

    Searches for:
    1. ./mantajobs.yaml
    2. ~/.mantajobs.yaml

    Returns None if neither exists (graceful degradation).
    """
    search_paths = [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / f".{CONFIG_FILENAME}",
    ]

    for path in search_paths:
        if path.exists():
            return path

    logger.debug("No %s found - using environment only", CONFIG_FILENAME)
    return None


def apply_env_overrides(raw_config: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """
    Overlay MANTA_* environment variables on a raw config dict.

    Args:
        raw_config: Config loaded from YAML (not mutated)
        environ: Environment mapping (usually os.environ)

    Returns:
        New dict with environment values taking precedence
    """
    config = dict(raw_config)
    for env_var, key in ENV_OVERRIDES.items():
        value = environ.get(env_var)
        if value:
            config[key] = value
            logger.debug(f"Applied {env_var} -> {key}")
    return config


def load_config(path: Path | str | None = None, environ: Mapping[str, str] | None = None) -> ClientConfig:
    """
    Load and validate the client config.

    Returns a fully typed, frozen ClientConfig ready to share across calls.

    Args:
        path: YAML config file; when None the default locations are searched
        environ: Environment mapping for MANTA_* overrides (default: os.environ)

    Returns:
        ClientConfig frozen dataclass

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValueError: If config validation fails
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        path = find_config_file()

    raw_config: dict[str, Any] = {}
    if path is not None:
        with open(path) as f:
            raw_config = yaml.safe_load(f) or {}
        if not isinstance(raw_config, dict):
            raise ValueError(f"Invalid client config in {path}: expected a mapping")

    resolved = apply_env_overrides(raw_config, os.environ if environ is None else environ)

    source = path or "environment"
    try:
        config = ClientConfig.Schema().load(resolved)
    except ValidationError as e:
        raise ValueError(f"Invalid client config in {source}: {e.messages}") from e

    assert isinstance(config, ClientConfig)
    logger.info(f"Loaded client config for account {config.account} from {source}")
    return config
