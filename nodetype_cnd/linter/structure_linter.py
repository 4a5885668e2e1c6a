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

"""Structure linter for parsed node type definitions.

The reader accepts some definitions that are legal but almost always a
mistake. This linter reports them as warnings:

- a supertype listed more than once,
- two property definitions (or two child node definitions) with the same
  non-residual name in one node type,
- a node type name defined more than once in the same file.
"""

from collections import Counter
from typing import Iterable, List

from ..models.definitions import CndParseResult, NodeTypeDefinition
from ..models.namespaces import NamespaceMapping
from ..models.qname import QName
from .report import LintResult


def _duplicates(names: Iterable[QName]) -> List[QName]:
    counts = Counter(names)
    return [name for name, count in counts.items() if count > 1 and not name.is_residual]


class StructureLinter:
    """Linter for definitions that parse but are suspicious."""

    def lint(self, parsed: CndParseResult, result: LintResult):
        """Lint the definitions of one parsed file.

        Args:
            parsed: Successful parse result of the file
            result: LintResult to add warnings to
        """
        ns = parsed.namespaces

        for name in _duplicates(d.name for d in parsed.definitions):
            result.add_warning(f"Node type '{ns.render(name)}' is defined more than once")

        for definition in parsed.definitions:
            self._lint_definition(definition, ns, result)

    @staticmethod
    def _lint_definition(definition: NodeTypeDefinition, ns: NamespaceMapping, result: LintResult):
        type_name = ns.render(definition.name)

        for name in _duplicates(definition.supertypes):
            result.add_warning(
                f"Node type '{type_name}' lists supertype '{ns.render(name)}' more than once"
            )
        if definition.name in definition.supertypes:
            result.add_warning(f"Node type '{type_name}' lists itself as a supertype")

        for name in _duplicates(p.name for p in definition.property_definitions):
            result.add_warning(
                f"Node type '{type_name}' defines property '{ns.render(name)}' more than once"
            )
        for name in _duplicates(c.name for c in definition.child_node_definitions):
            result.add_warning(
                f"Node type '{type_name}' defines child node '{ns.render(name)}' more than once"
            )
