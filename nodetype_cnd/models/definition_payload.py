from __future__ import annotations

from typing import Dict, List, Optional, TypedDict


# Version for the on-disk definition export payload.
SCHEMA_VERSION = "1.0"


class PropertyDefinitionData(TypedDict, total=False):
    name: str
    required_type: str
    default_values: List[str]
    value_constraints: List[str]
    autocreated: bool
    mandatory: bool
    protected: bool
    multiple: bool
    primary: bool
    on_parent_version: str


class ChildNodeDefinitionData(TypedDict, total=False):
    name: str
    required_primary_types: List[str]
    default_primary_type: Optional[str]
    autocreated: bool
    mandatory: bool
    protected: bool
    primary: bool
    same_name_siblings: bool
    on_parent_version: str


class NodeTypeDefinitionData(TypedDict, total=False):
    name: str
    supertypes: List[str]
    orderable: bool
    mixin: bool
    primary_item: Optional[str]
    properties: List[PropertyDefinitionData]
    child_nodes: List[ChildNodeDefinitionData]


class DefinitionMetadata(TypedDict, total=False):
    sources: List[str]
    generated_at: str


class DefinitionPayload(TypedDict):
    schema_version: str
    metadata: DefinitionMetadata
    namespaces: Dict[str, str]
    node_types: List[NodeTypeDefinitionData]
