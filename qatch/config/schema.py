"""Config schema validation helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import jsonschema


def default_schema_path() -> Path:
    return Path(__file__).resolve().parent / "config-schema.json"


def validate_config_schema(
    config_data: Dict[str, Any],
    schema_path: Optional[Union[str, Path]] = None,
) -> Tuple[bool, Optional[str]]:
    """Validate ``config_data`` against the bundled JSON schema.

    Returns ``(ok, error_message)``.
    """
    path = Path(schema_path) if schema_path is not None else default_schema_path()
    with path.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    try:
        jsonschema.validate(instance=config_data, schema=schema)
        return True, None
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        return False, f"{location}: {exc.message}"
