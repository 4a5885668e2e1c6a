"""Data model for node type definitions.

Names, namespace mappings, paths, typed values and the immutable definition
records returned by the reader.
"""

from .qname import QName, RESIDUAL_NAME, NT_BASE
from .namespaces import NamespaceMapping, NamespaceConflictPolicy, BUILTIN_NAMESPACES
from .path import ItemPath, PathElement, parse_path
from .property_types import PropertyType, OnParentVersionAction, Value
from .definitions import (
    PropertyDefinition,
    ChildNodeDefinition,
    NodeTypeDefinition,
    CndParseResult,
)

__all__ = [
    "QName",
    "RESIDUAL_NAME",
    "NT_BASE",
    "NamespaceMapping",
    "NamespaceConflictPolicy",
    "BUILTIN_NAMESPACES",
    "ItemPath",
    "PathElement",
    "parse_path",
    "PropertyType",
    "OnParentVersionAction",
    "Value",
    "PropertyDefinition",
    "ChildNodeDefinition",
    "NodeTypeDefinition",
    "CndParseResult",
]
