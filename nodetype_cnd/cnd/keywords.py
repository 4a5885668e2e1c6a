"""Accepted spellings of CND keywords.

Every grammar concept has its own table mapping each accepted spelling to an
enum variant. The same spelling may appear in more than one table (``m`` is
both the mixin option and the mandatory attribute); the parser decides which
table applies from its position in the grammar. Lookups are case-sensitive.
"""

from enum import Enum
from typing import Dict

from ..models.property_types import OnParentVersionAction, PropertyType


class NodeTypeOption(Enum):
    ORDERABLE = "orderable"
    MIXIN = "mixin"


class Attribute(Enum):
    PRIMARY = "primary"
    AUTOCREATED = "autocreated"
    MANDATORY = "mandatory"
    PROTECTED = "protected"
    MULTIPLE = "multiple"


def _spellings(word: str) -> tuple:
    # "STRING", "String", "string"
    return (word.upper(), word.capitalize(), word.lower())


OPTIONS: Dict[str, NodeTypeOption] = {
    "orderable": NodeTypeOption.ORDERABLE,
    "ord": NodeTypeOption.ORDERABLE,
    "o": NodeTypeOption.ORDERABLE,
    "mixin": NodeTypeOption.MIXIN,
    "mix": NodeTypeOption.MIXIN,
    "m": NodeTypeOption.MIXIN,
}

PROPERTY_TYPES: Dict[str, PropertyType] = {
    spelling: property_type
    for property_type in PropertyType
    for spelling in _spellings(property_type.value)
}
PROPERTY_TYPES["*"] = PropertyType.UNDEFINED

ATTRIBUTES: Dict[str, Attribute] = {
    "primary": Attribute.PRIMARY,
    "pri": Attribute.PRIMARY,
    "!": Attribute.PRIMARY,
    "autocreated": Attribute.AUTOCREATED,
    "aut": Attribute.AUTOCREATED,
    "a": Attribute.AUTOCREATED,
    "mandatory": Attribute.MANDATORY,
    "man": Attribute.MANDATORY,
    "m": Attribute.MANDATORY,
    "protected": Attribute.PROTECTED,
    "pro": Attribute.PROTECTED,
    "p": Attribute.PROTECTED,
    "multiple": Attribute.MULTIPLE,
    "mul": Attribute.MULTIPLE,
    "*": Attribute.MULTIPLE,
}

ON_PARENT_VERSION_ACTIONS: Dict[str, OnParentVersionAction] = {
    spelling: action
    for action in OnParentVersionAction
    for spelling in _spellings(action.value)
}
