import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from ..models.definition_payload import (
    SCHEMA_VERSION,
    ChildNodeDefinitionData,
    DefinitionPayload,
    NodeTypeDefinitionData,
    PropertyDefinitionData,
)
from ..models.definitions import (
    ChildNodeDefinition,
    CndParseResult,
    NodeTypeDefinition,
    PropertyDefinition,
)
from ..models.namespaces import NamespaceMapping
from ..values.converter import format_value
from ..utils.source_location import SourceLocation, format_source

logger = logging.getLogger(__name__)


def _property_data(prop: PropertyDefinition, ns: NamespaceMapping) -> PropertyDefinitionData:
    return {
        "name": ns.render(prop.name),
        "required_type": prop.required_type.value,
        "default_values": [format_value(v, ns) for v in prop.default_values],
        "value_constraints": [c.definition for c in prop.value_constraints],
        "autocreated": prop.autocreated,
        "mandatory": prop.mandatory,
        "protected": prop.protected,
        "multiple": prop.multiple,
        "primary": prop.primary,
        "on_parent_version": prop.on_parent_version.value,
    }


def _child_node_data(child: ChildNodeDefinition, ns: NamespaceMapping) -> ChildNodeDefinitionData:
    default_type = child.default_primary_type
    return {
        "name": ns.render(child.name),
        "required_primary_types": [ns.render(t) for t in child.required_primary_types],
        "default_primary_type": ns.render(default_type) if default_type else None,
        "autocreated": child.autocreated,
        "mandatory": child.mandatory,
        "protected": child.protected,
        "primary": child.primary,
        "same_name_siblings": child.allows_same_name_siblings,
        "on_parent_version": child.on_parent_version.value,
    }


def node_type_data(definition: NodeTypeDefinition, namespaces: NamespaceMapping) -> NodeTypeDefinitionData:
    """Flatten one definition into plain JSON-compatible data with prefixed names."""
    primary = definition.primary_item_name
    return {
        "name": namespaces.render(definition.name),
        "supertypes": [namespaces.render(s) for s in definition.supertypes],
        "orderable": definition.orderable_child_nodes,
        "mixin": definition.mixin,
        "primary_item": namespaces.render(primary) if primary else None,
        "properties": [_property_data(p, namespaces) for p in definition.property_definitions],
        "child_nodes": [_child_node_data(c, namespaces) for c in definition.child_node_definitions],
    }


def build_definitions_payload(results: Mapping[str, CndParseResult]) -> DefinitionPayload:
    """Build a schema-versioned export payload from parse results keyed by source.

    All names are rendered through one merged mapping, so every prefixed name
    in the payload resolves through the payload's ``namespaces``. When two
    sources bind a prefix to different URIs the first binding is kept and
    names in the other namespace are written as ``{uri}local``.
    """

    merged = NamespaceMapping(include_builtins=False)
    for source, result in results.items():
        for prefix, uri in result.namespaces.as_dict().items():
            if prefix in merged and merged.get_uri(prefix) != uri:
                logger.warning(
                    f"Prefix '{prefix}' of {source} is bound to '{uri}', "
                    f"export keeps '{merged.get_uri(prefix)}'"
                )
                continue
            merged.declare(prefix, uri)

    node_types = []
    for result in results.values():
        node_types.extend(node_type_data(d, merged) for d in result.definitions)

    return {
        "schema_version": SCHEMA_VERSION,
        "metadata": {
            "sources": [str(s) for s in results],
            "generated_at": datetime.now(timezone.utc).isoformat(),
        },
        "namespaces": merged.as_dict(),
        "node_types": node_types,
    }


def save_definitions_payload(output_path: str, payload: Dict[str, Any]) -> None:
    """Save a payload as YAML (``.yaml``/``.yml``) or JSON (anything else)."""

    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            if Path(output_path).suffix in (".yaml", ".yml"):
                yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True)
            else:
                json.dump(payload, f, indent=2, ensure_ascii=True)
        logger.info(f"Saved node type definitions: {output_path}")
    except OSError as e:
        src = SourceLocation(file_path=Path(output_path))
        logger.error(f"Failed to save node type definitions: {output_path}: {e}{format_source(src)}")
        raise


def load_definitions_payload(input_path: str) -> Dict[str, Any]:
    """Load an exported payload (JSON or YAML)."""

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            if Path(input_path).suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        src = SourceLocation(file_path=Path(input_path))
        logger.error(f"Failed to load node type definitions: {input_path}: {e}{format_source(src)}")
        raise
