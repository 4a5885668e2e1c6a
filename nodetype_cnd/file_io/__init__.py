"""File I/O related utilities.

This package groups small modules that read namespace seed files and write
parsed definitions back to disk as JSON or YAML payloads.
"""

from ..models.definition_payload import SCHEMA_VERSION
from .namespace_file import load_namespace_file, namespaces_from_data
from .definition_json import (
    build_definitions_payload,
    node_type_data,
    save_definitions_payload,
    load_definitions_payload,
)

__all__ = [
    "SCHEMA_VERSION",
    "load_namespace_file",
    "namespaces_from_data",
    "build_definitions_payload",
    "node_type_data",
    "save_definitions_payload",
    "load_definitions_payload",
]
