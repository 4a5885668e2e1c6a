from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PropertyType(str, Enum):
    """Required value type of a property definition."""

    STRING = "String"
    BINARY = "Binary"
    LONG = "Long"
    DOUBLE = "Double"
    BOOLEAN = "Boolean"
    DATE = "Date"
    NAME = "Name"
    PATH = "Path"
    REFERENCE = "Reference"
    UNDEFINED = "Undefined"

    def __str__(self) -> str:
        return self.value


class OnParentVersionAction(str, Enum):
    """Behavior of an item when its parent node is versioned."""

    COPY = "COPY"
    VERSION = "VERSION"
    INITIALIZE = "INITIALIZE"
    COMPUTE = "COMPUTE"
    IGNORE = "IGNORE"
    ABORT = "ABORT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Value:
    """A typed value.

    The Python type of ``value`` follows ``type``: str for STRING, REFERENCE and
    UNDEFINED, bytes for BINARY, int for LONG, float for DOUBLE, bool for
    BOOLEAN, an aware datetime for DATE, QName for NAME and ItemPath for PATH.
    """

    type: PropertyType
    value: Any
