#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Qatch - Configuration package.

Optional JSON or YAML file with backup and logging defaults plus preset
patch pairs. Validation runs in two steps: the bundled JSON schema
(jsonschema) and the typed models (pydantic).
"""

from .models import (
    BackupConfig,
    LoggingConfig,
    PatchPairConfig,
    QatchConfig,
    validate_config,
)
from .io import CONFIG_ENV_VAR, get_config_path, load_config, load_config_data, save_config
from .schema import validate_config_schema

__all__ = [
    'BackupConfig',
    'LoggingConfig',
    'PatchPairConfig',
    'QatchConfig',
    'validate_config',
    'CONFIG_ENV_VAR',
    'get_config_path',
    'load_config',
    'load_config_data',
    'save_config',
    'validate_config_schema',
]
