"""JSON Schemas for the YAML/JSON files read and written alongside CND files.

Schemas are packaged next to this module as ``<name>.json`` and validated with
``jsonschema``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema


# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[str] = None


def get_schema_path(name: str) -> Path:
    return Path(__file__).parent / f"{name}.json"


def load_schema(name: str) -> dict:
    """Load a packaged JSON Schema by name.

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    if name in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[name]

    schema_path = get_schema_path(name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found for '{name}': {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    _SCHEMA_CACHE[name] = schema
    return schema


def validate_against_schema(data: Any, schema_name: str) -> List[SchemaIssue]:
    """Validate *data* and return every issue found, in document order."""
    schema = load_schema(schema_name)
    validator = jsonschema.Draft7Validator(schema)

    issues = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path))):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        issues.append(SchemaIssue(message=error.message, yaml_path=path))
    return issues