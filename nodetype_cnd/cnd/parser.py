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

"""Recursive-descent parser for compact node type definitions.

Grammar::

    cnd            ::= { ns_decl | node_type_def }
    ns_decl        ::= "<" prefix "=" uri ">"
    node_type_def  ::= "[" name "]" [ ">" name {"," name} ]
                       [ options ] { property_def | child_def }
    options        ::= orderable [ mixin ] | mixin [ orderable ]
    property_def   ::= "-" (name|"*") [ "(" type ")" ] [ "=" val {"," val} ]
                       { attr } [ "<" expr {"," expr} ]
    child_def      ::= "+" (name|"*") [ "(" name {"," name} ")" ]
                       [ "=" name ] { attr }

The parser holds a single lookahead token. The first error aborts the parse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple, TypeVar

from ..exceptions import (
    CndParseError,
    GrammarError,
    NameResolutionError,
    NamespaceConflictError,
    SemanticError,
    ValueConversionError,
)
from ..models.definitions import (
    ChildNodeDefinition,
    CndParseResult,
    NodeTypeDefinition,
    PropertyDefinition,
)
from ..models.namespaces import NamespaceConflictPolicy, NamespaceMapping
from ..models.property_types import OnParentVersionAction, PropertyType, Value
from ..models.qname import NT_BASE, RESIDUAL_NAME, QName
from ..values.constraints import ValueConstraint, create_constraint
from ..values.converter import convert_value
from .keywords import (
    ATTRIBUTES,
    ON_PARENT_VERSION_ACTIONS,
    OPTIONS,
    PROPERTY_TYPES,
    Attribute,
    NodeTypeOption,
)
from .lexer import Lexer, Token, TokenKind

logger = logging.getLogger(__name__)

K = TypeVar("K")

# Symbols that double as keyword spellings
_KEYWORD_SYMBOLS = frozenset("*!")


@dataclass
class _ItemAttributes:
    autocreated: bool = False
    mandatory: bool = False
    protected: bool = False
    multiple: bool = False
    primary: bool = False
    on_parent_version: OnParentVersionAction = OnParentVersionAction.COPY


@dataclass
class _NodeTypeContext:
    """State shared by the members of the node type being parsed."""

    name: QName
    primary_item_name: Optional[QName] = None


class CndParser:
    """Parse CND text from a :class:`Lexer` into node type definitions."""

    def __init__(
        self,
        lexer: Lexer,
        namespaces: NamespaceMapping,
        on_namespace_conflict: NamespaceConflictPolicy = NamespaceConflictPolicy.ERROR,
    ):
        self._lexer = lexer
        self._namespaces = namespaces
        self._on_namespace_conflict = on_namespace_conflict
        self._token: Token = lexer.next_token()

    def parse(self) -> CndParseResult:
        definitions: List[NodeTypeDefinition] = []
        while not self._token.is_eof:
            if self._token.is_symbol("<"):
                self._namespace_declaration()
                continue
            definitions.append(self._node_type_definition())

        logger.info(
            f"Parsed {len(definitions)} node type definition(s) from "
            f"{self._lexer.system_id or '<string>'}"
        )
        return CndParseResult(tuple(definitions), self._namespaces)

    # ---- token helpers ------------------------------------------------------

    def _next(self) -> Token:
        self._token = self._lexer.next_token()
        return self._token

    def _fail(self, error_type, message: str, token: Optional[Token] = None) -> None:
        token = token or self._token
        raise error_type(message, self._lexer.location(token.line, token.column))

    def _expect_symbol(self, symbol: str, message: str) -> None:
        if not self._token.is_symbol(symbol):
            self._fail(GrammarError, f"{message}, found {self._token.describe()}")
        self._next()

    def _expect_string(self, what: str) -> Token:
        if self._token.kind != TokenKind.STRING:
            self._fail(GrammarError, f"Expected {what}, found {self._token.describe()}")
        return self._token

    def _keyword(self, table: Mapping[str, K]) -> Optional[K]:
        token = self._token
        if token.kind == TokenKind.STRING or (
            token.kind == TokenKind.SYMBOL and token.text in _KEYWORD_SYMBOLS
        ):
            return table.get(token.text)
        return None

    def _relocated(self, exc: CndParseError, token: Token, prefix: str = "") -> CndParseError:
        """Re-create *exc* with the location of *token*."""
        return type(exc)(f"{prefix}{exc.message}", self._lexer.location(token.line, token.column))

    def _resolve(self, token: Token) -> QName:
        try:
            return self._namespaces.resolve(token.text)
        except NameResolutionError as exc:
            raise self._relocated(exc, token, f"Error while parsing '{token.text}': ") from exc

    def _render(self, name: QName) -> str:
        return self._namespaces.render(name)

    # ---- namespace declarations ---------------------------------------------

    def _namespace_declaration(self) -> None:
        start = self._token
        self._next()
        prefix = self._token
        if prefix.kind != TokenKind.STRING:
            self._fail(GrammarError, f"Missing prefix in namespace declaration, found {prefix.describe()}")
        self._next()
        self._expect_symbol("=", "Missing '=' in namespace declaration")
        uri = self._token
        if uri.kind != TokenKind.STRING:
            self._fail(GrammarError, f"Missing URI in namespace declaration, found {uri.describe()}")
        self._next()
        self._expect_symbol(">", "Missing '>' in namespace declaration")

        try:
            self._namespaces.declare(prefix.text, uri.text, on_conflict=self._on_namespace_conflict)
        except (NameResolutionError, NamespaceConflictError) as exc:
            raise self._relocated(exc, start) from exc

    # ---- node type definitions ----------------------------------------------

    def _node_type_definition(self) -> NodeTypeDefinition:
        name = self._node_type_name()
        supertypes = self._supertypes()
        orderable, mixin = self._options()

        context = _NodeTypeContext(name=name)
        properties, child_nodes = self._item_definitions(context)

        definition = NodeTypeDefinition(
            name=name,
            supertypes=supertypes,
            orderable_child_nodes=orderable,
            mixin=mixin,
            primary_item_name=context.primary_item_name,
            property_definitions=tuple(properties),
            child_node_definitions=tuple(child_nodes),
        )
        logger.debug(
            f"Parsed node type '{self._render(name)}' with {len(properties)} "
            f"property and {len(child_nodes)} child node definition(s)"
        )
        return definition

    def _node_type_name(self) -> QName:
        self._expect_symbol("[", "Missing '[' delimiter for beginning of node type name")
        name = self._resolve(self._expect_string("node type name"))
        self._next()
        self._expect_symbol("]", "Missing ']' delimiter for end of node type name")
        return name

    def _name_list(self, what: str) -> Tuple[QName, ...]:
        """Parse ``name {, name}``; the current token is the first name."""
        names = [self._resolve(self._expect_string(what))]
        self._next()
        while self._token.is_symbol(","):
            self._next()
            names.append(self._resolve(self._expect_string(what)))
            self._next()
        return tuple(names)

    def _supertypes(self) -> Tuple[QName, ...]:
        # Duplicates are kept so the definition reads back exactly as declared.
        if not self._token.is_symbol(">"):
            return ()
        self._next()
        return self._name_list("supertype name")

    def _options(self) -> Tuple[bool, bool]:
        orderable = mixin = False
        option = self._keyword(OPTIONS)
        if option is None:
            return orderable, mixin
        self._next()
        orderable = option == NodeTypeOption.ORDERABLE
        mixin = option == NodeTypeOption.MIXIN

        second = self._keyword(OPTIONS)
        if second is not None and second != option:
            orderable = mixin = True
            self._next()
        return orderable, mixin

    def _item_definitions(
        self, context: _NodeTypeContext
    ) -> Tuple[List[PropertyDefinition], List[ChildNodeDefinition]]:
        properties: List[PropertyDefinition] = []
        child_nodes: List[ChildNodeDefinition] = []
        while True:
            if self._token.is_symbol("-"):
                self._next()
                properties.append(self._property_definition(context))
            elif self._token.is_symbol("+"):
                self._next()
                child_nodes.append(self._child_node_definition(context))
            else:
                return properties, child_nodes

    def _item_name(self, what: str) -> QName:
        if self._token.is_symbol("*"):
            self._next()
            return RESIDUAL_NAME
        name = self._resolve(self._expect_string(what))
        self._next()
        return name

    # ---- property definitions -----------------------------------------------

    def _property_definition(self, context: _NodeTypeContext) -> PropertyDefinition:
        name = self._item_name("property name")
        required_type = self._property_type()
        default_values = self._default_values(required_type)
        attributes = self._attributes(context, name)
        constraints = self._value_constraints(required_type)

        return PropertyDefinition(
            name=name,
            declaring_node_type=context.name,
            required_type=required_type,
            default_values=default_values,
            value_constraints=constraints,
            autocreated=attributes.autocreated,
            mandatory=attributes.mandatory,
            protected=attributes.protected,
            multiple=attributes.multiple,
            primary=attributes.primary,
            on_parent_version=attributes.on_parent_version,
        )

    def _property_type(self) -> PropertyType:
        if not self._token.is_symbol("("):
            return PropertyType.STRING
        self._next()
        required_type = self._keyword(PROPERTY_TYPES)
        if required_type is None:
            self._fail(GrammarError, f"Unknown property type {self._token.describe()} specified")
        self._next()
        self._expect_symbol(")", "Missing ')' delimiter for end of property type")
        return required_type

    def _literal_list(self, what: str) -> List[Token]:
        """Parse ``literal {, literal}``; the current token is the list marker."""
        literals = []
        while True:
            self._next()
            literals.append(self._expect_string(what))
            self._next()
            if not self._token.is_symbol(","):
                return literals

    def _default_values(self, required_type: PropertyType) -> Tuple[Value, ...]:
        if not self._token.is_symbol("="):
            return ()
        values = []
        for token in self._literal_list("default value"):
            try:
                values.append(convert_value(token.text, required_type, self._namespaces))
            except ValueConversionError as exc:
                raise self._relocated(exc, token) from exc
        return tuple(values)

    def _value_constraints(self, required_type: PropertyType) -> Tuple[ValueConstraint, ...]:
        if not self._token.is_symbol("<"):
            return ()
        constraints = []
        for token in self._literal_list("constraint expression"):
            try:
                constraints.append(create_constraint(required_type, token.text, self._namespaces))
            except ValueConversionError as exc:
                raise self._relocated(exc, token) from exc
        return tuple(constraints)

    # ---- child node definitions ---------------------------------------------

    def _child_node_definition(self, context: _NodeTypeContext) -> ChildNodeDefinition:
        name = self._item_name("child node name")
        required_types = self._required_types()
        default_type = self._default_type()
        attributes = self._attributes(context, name)

        return ChildNodeDefinition(
            name=name,
            declaring_node_type=context.name,
            required_primary_types=required_types,
            default_primary_type=default_type,
            autocreated=attributes.autocreated,
            mandatory=attributes.mandatory,
            protected=attributes.protected,
            primary=attributes.primary,
            allows_same_name_siblings=attributes.multiple,
            on_parent_version=attributes.on_parent_version,
        )

    def _required_types(self) -> Tuple[QName, ...]:
        if not self._token.is_symbol("("):
            return (NT_BASE,)
        self._next()
        types = self._name_list("required primary type")
        self._expect_symbol(")", "Missing ')' delimiter for end of required primary types")
        return types

    def _default_type(self) -> Optional[QName]:
        if not self._token.is_symbol("="):
            return None
        self._next()
        default_type = self._resolve(self._expect_string("default primary type"))
        self._next()
        return default_type

    # ---- attributes ---------------------------------------------------------

    def _attributes(self, context: _NodeTypeContext, item_name: QName) -> _ItemAttributes:
        attributes = _ItemAttributes()
        while True:
            attribute = self._keyword(ATTRIBUTES)
            action = self._keyword(ON_PARENT_VERSION_ACTIONS)
            if attribute is None and action is None:
                return attributes

            if action is not None:
                attributes.on_parent_version = action
            elif attribute == Attribute.PRIMARY:
                if context.primary_item_name is not None:
                    self._fail(
                        SemanticError,
                        f"More than one primary item specified in node type "
                        f"'{self._render(context.name)}'",
                    )
                context.primary_item_name = item_name
                attributes.primary = True
            elif attribute == Attribute.AUTOCREATED:
                attributes.autocreated = True
            elif attribute == Attribute.MANDATORY:
                attributes.mandatory = True
            elif attribute == Attribute.PROTECTED:
                attributes.protected = True
            elif attribute == Attribute.MULTIPLE:
                attributes.multiple = True
            self._next()
