"""Config I/O utilities."""

from __future__ import annotations

import json
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pydantic
import yaml

from ..exceptions import ConfigurationError, ValidationError
from .models import QatchConfig, validate_config
from .schema import validate_config_schema

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "QATCH_CONFIG"
YAML_SUFFIXES = (".yaml", ".yml")


def get_config_path(explicit: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Explicit path first, then QATCH_CONFIG; None when neither is set."""
    if explicit:
        return Path(explicit)
    env_value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value)
    return None


def _parse_text(text: str, path: Path) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def load_config_data(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON or YAML config file into a dict and check it against the schema."""
    path = Path(config_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}", file_path=str(path)) from exc

    try:
        data = _parse_text(text, path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot parse config file {path}: {exc}", "CONFIG_PARSE_ERROR",
                                 file_path=str(path)) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Config root must be a mapping", file_path=str(path))

    ok, error = validate_config_schema(data)
    if not ok:
        logger.warning("Config schema validation failed: %s", error)
        raise ValidationError(f"Invalid config {path}: {error}", file_path=str(path))
    return data


def load_config(config_path: Optional[Union[str, Path]] = None) -> QatchConfig:
    """Load and validate the config; defaults when no config file is configured."""
    path = get_config_path(config_path)
    if path is None:
        return QatchConfig()

    data = load_config_data(path)
    try:
        config = validate_config(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid config {path}: {exc}", file_path=str(path)) from exc

    logger.debug("Loaded config from %s (%d preset pattern(s))", path, len(config.patches))
    return config


def save_config(config: QatchConfig, config_path: Union[str, Path]) -> Path:
    """Write the config as JSON or YAML depending on the file suffix."""
    path = Path(config_path)
    data = config.model_dump(by_alias=True, exclude_none=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                yaml.safe_dump(data, f, sort_keys=False)
            else:
                json.dump(data, f, indent=2)
    except OSError as exc:
        raise ConfigurationError(f"Cannot write config file {path}: {exc}", file_path=str(path)) from exc
    return path
