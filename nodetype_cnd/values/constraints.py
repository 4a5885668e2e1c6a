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

"""Value constraints of property definitions.

Constraint syntax depends on the required type of the property:

* STRING, UNDEFINED: a regular expression the whole value must match.
* LONG, DOUBLE, DATE: a range ``[lo, hi]`` / ``(lo, hi)``; brackets are
  inclusive, parentheses exclusive, and one bound may be left empty.
* BINARY: a range over the length of the value in bytes.
* BOOLEAN: ``true`` or ``false``.
* NAME: a name the value must equal.
* PATH: a path the value must equal, or ``prefix/*`` for any descendant.
* REFERENCE: the name of a node type the referenced node must have.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Pattern

from ..exceptions import CndParseError, ValueConversionError
from ..models.namespaces import NamespaceMapping
from ..models.path import ItemPath, parse_path
from ..models.property_types import PropertyType, Value
from ..models.qname import QName
from .converter import parse_boolean, parse_date, parse_double, parse_long


_RANGE_RE = re.compile(r"\s*(?P<open>[\[(])\s*(?P<lo>[^,]*?)\s*,\s*(?P<hi>[^,]*?)\s*(?P<close>[\])])\s*")


@dataclass(frozen=True)
class ValueConstraint:
    """Base class; ``definition`` keeps the constraint text as written."""

    definition: str
    required_type: PropertyType

    def is_satisfied_by(self, value: Value) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class PatternConstraint(ValueConstraint):
    pattern: Pattern[str]

    def is_satisfied_by(self, value: Value) -> bool:
        if not isinstance(value.value, str):
            return False
        return self.pattern.fullmatch(value.value) is not None


@dataclass(frozen=True)
class RangeConstraint(ValueConstraint):
    lower: Optional[Any]
    upper: Optional[Any]
    lower_inclusive: bool = True
    upper_inclusive: bool = True

    def is_satisfied_by(self, value: Value) -> bool:
        if value.type != self.required_type:
            return False
        candidate = len(value.value) if self.required_type == PropertyType.BINARY else value.value
        if self.lower is not None:
            if candidate < self.lower or (candidate == self.lower and not self.lower_inclusive):
                return False
        if self.upper is not None:
            if candidate > self.upper or (candidate == self.upper and not self.upper_inclusive):
                return False
        return True


@dataclass(frozen=True)
class BooleanConstraint(ValueConstraint):
    expected: bool

    def is_satisfied_by(self, value: Value) -> bool:
        return value.type == PropertyType.BOOLEAN and value.value is self.expected


@dataclass(frozen=True)
class NameConstraint(ValueConstraint):
    name: QName

    def is_satisfied_by(self, value: Value) -> bool:
        return value.type == PropertyType.NAME and value.value == self.name


@dataclass(frozen=True)
class PathConstraint(ValueConstraint):
    path: ItemPath
    deep: bool = False

    def is_satisfied_by(self, value: Value) -> bool:
        if value.type != PropertyType.PATH:
            return False
        if self.deep:
            return self.path.is_ancestor_of(value.value)
        return value.value == self.path


@dataclass(frozen=True)
class ReferenceConstraint(ValueConstraint):
    node_type: QName

    def is_satisfied_by(self, value: Value) -> bool:
        """A reference value alone does not say which node types its target
        has; use :meth:`is_satisfied_by_node_types` once the node is known."""
        return False

    def is_satisfied_by_node_types(self, node_types: Iterable[QName]) -> bool:
        return self.node_type in set(node_types)


def _unsigned_long(text: str) -> int:
    number = parse_long(text)
    if number < 0:
        raise ValueError(f"length bound '{text}' must not be negative")
    return number


_BOUND_PARSERS: Dict[PropertyType, Callable[[str], Any]] = {
    PropertyType.LONG: parse_long,
    PropertyType.DOUBLE: parse_double,
    PropertyType.DATE: parse_date,
    PropertyType.BINARY: _unsigned_long,
}


def _range_constraint(required_type: PropertyType, text: str) -> RangeConstraint:
    m = _RANGE_RE.fullmatch(text)
    if m is None:
        raise ValueError("expected a range such as '[min, max]' or '(min, max)'")

    parse_bound = _BOUND_PARSERS[required_type]
    lower = parse_bound(m.group("lo")) if m.group("lo") else None
    upper = parse_bound(m.group("hi")) if m.group("hi") else None
    if lower is None and upper is None:
        raise ValueError("a range needs at least one bound")
    if lower is not None and upper is not None and lower > upper:
        raise ValueError("lower bound is greater than upper bound")

    return RangeConstraint(
        definition=text,
        required_type=required_type,
        lower=lower,
        upper=upper,
        lower_inclusive=m.group("open") == "[",
        upper_inclusive=m.group("close") == "]",
    )


def _pattern_constraint(required_type: PropertyType, text: str) -> PatternConstraint:
    try:
        pattern = re.compile(text)
    except re.error as exc:
        raise ValueError(f"invalid regular expression: {exc}") from exc
    return PatternConstraint(definition=text, required_type=required_type, pattern=pattern)


def _path_constraint(text: str, namespaces: NamespaceMapping) -> PathConstraint:
    deep = text.endswith("/*")
    path_text = text[:-2] if deep else text
    if deep and not path_text:
        path_text = "/"
    return PathConstraint(
        definition=text,
        required_type=PropertyType.PATH,
        path=parse_path(path_text, namespaces),
        deep=deep,
    )


def create_constraint(
    required_type: PropertyType, text: str, namespaces: NamespaceMapping
) -> ValueConstraint:
    """Build the constraint object for *text* given the property's required type.

    Raises:
        ValueConversionError: If *text* is not a valid constraint expression
            for a value of *required_type*.
    """
    try:
        if required_type in (PropertyType.STRING, PropertyType.UNDEFINED):
            return _pattern_constraint(required_type, text)
        if required_type in _BOUND_PARSERS:
            return _range_constraint(required_type, text)
        if required_type == PropertyType.BOOLEAN:
            return BooleanConstraint(definition=text, required_type=required_type, expected=parse_boolean(text))
        if required_type == PropertyType.NAME:
            return NameConstraint(definition=text, required_type=required_type, name=namespaces.resolve(text))
        if required_type == PropertyType.PATH:
            return _path_constraint(text, namespaces)
        if required_type == PropertyType.REFERENCE:
            return ReferenceConstraint(definition=text, required_type=required_type, node_type=namespaces.resolve(text))
    except (ValueError, CndParseError) as exc:
        reason = exc.message if isinstance(exc, CndParseError) else str(exc)
        raise ValueConversionError(
            f"'{text}' is not a valid constraint expression for a value of type {required_type}: {reason}"
        ) from exc
    raise ValueConversionError(f"Constraints are not supported for type {required_type}")
