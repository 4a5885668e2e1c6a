# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Immutable node type definition records produced by the CND reader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .namespaces import NamespaceMapping
from .property_types import OnParentVersionAction, PropertyType, Value
from .qname import NT_BASE, QName

if TYPE_CHECKING:
    from ..values.constraints import ValueConstraint


@dataclass(frozen=True)
class PropertyDefinition:
    name: QName
    declaring_node_type: QName
    required_type: PropertyType = PropertyType.STRING
    default_values: Tuple[Value, ...] = ()
    value_constraints: Tuple["ValueConstraint", ...] = ()
    autocreated: bool = False
    mandatory: bool = False
    protected: bool = False
    multiple: bool = False
    primary: bool = False
    on_parent_version: OnParentVersionAction = OnParentVersionAction.COPY

    @property
    def is_residual(self) -> bool:
        return self.name.is_residual


@dataclass(frozen=True)
class ChildNodeDefinition:
    name: QName
    declaring_node_type: QName
    required_primary_types: Tuple[QName, ...] = (NT_BASE,)
    default_primary_type: Optional[QName] = None
    autocreated: bool = False
    mandatory: bool = False
    protected: bool = False
    primary: bool = False
    allows_same_name_siblings: bool = False
    on_parent_version: OnParentVersionAction = OnParentVersionAction.COPY

    @property
    def is_residual(self) -> bool:
        return self.name.is_residual


@dataclass(frozen=True)
class NodeTypeDefinition:
    """A fully resolved node type.

    Member sequences are always tuples; a type that declares no members has
    empty tuples and ``has_members`` False.
    """

    name: QName
    supertypes: Tuple[QName, ...] = ()
    orderable_child_nodes: bool = False
    mixin: bool = False
    primary_item_name: Optional[QName] = None
    property_definitions: Tuple[PropertyDefinition, ...] = ()
    child_node_definitions: Tuple[ChildNodeDefinition, ...] = ()

    @property
    def has_members(self) -> bool:
        return bool(self.property_definitions or self.child_node_definitions)

    def get_property(self, name: QName) -> Optional[PropertyDefinition]:
        return next((p for p in self.property_definitions if p.name == name), None)

    def get_child_node(self, name: QName) -> Optional[ChildNodeDefinition]:
        return next((c for c in self.child_node_definitions if c.name == name), None)


@dataclass(frozen=True)
class CndParseResult:
    """Definitions in declaration order plus the namespace mapping after the parse."""

    definitions: Tuple[NodeTypeDefinition, ...]
    namespaces: NamespaceMapping

    def __iter__(self):
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def get(self, name: QName) -> Optional[NodeTypeDefinition]:
        """Return the last definition named *name*, if any."""
        found = None
        for definition in self.definitions:
            if definition.name == name:
                found = definition
        return found
