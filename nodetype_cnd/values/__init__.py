"""Typed value conversion and value constraints."""

from .converter import convert_value, parse_date
from .constraints import (
    ValueConstraint,
    PatternConstraint,
    RangeConstraint,
    BooleanConstraint,
    NameConstraint,
    PathConstraint,
    ReferenceConstraint,
    create_constraint,
)

__all__ = [
    "convert_value",
    "parse_date",
    "ValueConstraint",
    "PatternConstraint",
    "RangeConstraint",
    "BooleanConstraint",
    "NameConstraint",
    "PathConstraint",
    "ReferenceConstraint",
    "create_constraint",
]
