from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ..exceptions import NameResolutionError
from .qname import QName

if TYPE_CHECKING:
    from .namespaces import NamespaceMapping


_INDEX_RE = re.compile(r"(?P<name>.+?)\[(?P<index>\d+)\]")


@dataclass(frozen=True)
class PathElement:
    """One segment of an item path: a name with an optional same-name-sibling index.

    ``name`` is None for the special ``.`` and ``..`` segments.
    """

    name: Optional[QName]
    index: Optional[int] = None
    special: Optional[str] = None

    def render(self, namespaces: "NamespaceMapping") -> str:
        if self.special:
            return self.special
        text = namespaces.render(self.name)
        if self.index is not None:
            text += f"[{self.index}]"
        return text


CURRENT = PathElement(None, special=".")
PARENT = PathElement(None, special="..")


@dataclass(frozen=True)
class ItemPath:
    """A resolved item path such as ``/jcr:system/ex:config[2]``."""

    elements: Tuple[PathElement, ...]
    absolute: bool = False

    @property
    def is_root(self) -> bool:
        return self.absolute and not self.elements

    def is_ancestor_of(self, other: "ItemPath") -> bool:
        """True if *other* lies strictly below this path."""
        if self.absolute != other.absolute:
            return False
        if len(other.elements) <= len(self.elements):
            return False
        return other.elements[: len(self.elements)] == self.elements

    def render(self, namespaces: "NamespaceMapping") -> str:
        body = "/".join(element.render(namespaces) for element in self.elements)
        return f"/{body}" if self.absolute else body


def parse_path(text: str, namespaces: "NamespaceMapping") -> ItemPath:
    """Parse a path literal, resolving each segment name through *namespaces*.

    Raises:
        NameResolutionError: If the path is empty, has empty segments, a bad
            index, or a segment name that cannot be resolved.
    """
    if not text:
        raise NameResolutionError("Empty path")
    if text == "/":
        return ItemPath((), absolute=True)

    absolute = text.startswith("/")
    body = text[1:] if absolute else text
    elements = []
    for segment in body.split("/"):
        if not segment:
            raise NameResolutionError(f"Empty path segment in '{text}'")
        if segment == ".":
            elements.append(CURRENT)
            continue
        if segment == "..":
            elements.append(PARENT)
            continue

        index = None
        match = _INDEX_RE.fullmatch(segment)
        if match:
            index = int(match.group("index"))
            if index < 1:
                raise NameResolutionError(f"Invalid index {index} in path '{text}', indexes start at 1")
            segment = match.group("name")
        elements.append(PathElement(namespaces.resolve(segment), index))

    return ItemPath(tuple(elements), absolute=absolute)
