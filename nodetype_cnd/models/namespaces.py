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

"""Namespace prefix mapping and qualified name resolution.

A :class:`NamespaceMapping` maps short prefixes to namespace URIs. It is seeded
with the built-in repository namespaces and grows with every ``<prefix = uri>``
declaration read from CND text. Names such as ``nt:base`` are resolved to
:class:`~nodetype_cnd.models.qname.QName` instances through the mapping, and
qualified names are rendered back to prefixed text with the canonical prefix of
their namespace (the first prefix declared for it).

The mapping has no internal locking; sharing one instance between parses is
only supported when those parses run one after the other.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional

from ..exceptions import NameResolutionError, NamespaceConflictError
from .qname import JCR_URI, MIX_URI, NT_URI, SV_URI, XML_URI, QName

logger = logging.getLogger(__name__)


BUILTIN_NAMESPACES: Dict[str, str] = {
    "": "",
    "jcr": JCR_URI,
    "nt": NT_URI,
    "mix": MIX_URI,
    "sv": SV_URI,
    "xml": XML_URI,
}

_PREFIX_RE = re.compile(r"[^\W\d][\w.\-]*")
_ILLEGAL_LOCAL_CHARS = set("/:[]*|'\"")


class NamespaceConflictPolicy(str, Enum):
    """What to do when a prefix is redeclared with a different URI."""

    ERROR = "error"
    IGNORE = "ignore"
    OVERRIDE = "override"


class NamespaceMapping:
    """Mutable prefix -> namespace URI table."""

    def __init__(self, mappings: Optional[Mapping[str, str]] = None, *, include_builtins: bool = True):
        self._prefix_to_uri: Dict[str, str] = {}
        self._uri_to_prefix: Dict[str, str] = {}
        if include_builtins:
            for prefix, uri in BUILTIN_NAMESPACES.items():
                self.declare(prefix, uri)
        for prefix, uri in (mappings or {}).items():
            self.declare(prefix, uri)

    # ---- declarations -------------------------------------------------------

    def declare(
        self,
        prefix: str,
        uri: str,
        on_conflict: NamespaceConflictPolicy = NamespaceConflictPolicy.ERROR,
    ) -> bool:
        """Map *prefix* to *uri*.

        Returns True when the mapping changed. Redeclaring an identical pair is a
        no-op. A prefix already bound to another URI is handled per *on_conflict*.

        Raises:
            NameResolutionError: If the prefix or URI is malformed.
            NamespaceConflictError: On a conflicting redeclaration under
                ``NamespaceConflictPolicy.ERROR``.
        """
        self._check_declaration(prefix, uri)

        current = self._prefix_to_uri.get(prefix)
        if current == uri:
            return False

        if current is not None:
            if on_conflict == NamespaceConflictPolicy.ERROR:
                raise NamespaceConflictError(
                    f"Namespace prefix '{prefix}' is already mapped to '{current}', "
                    f"cannot remap it to '{uri}'"
                )
            if on_conflict == NamespaceConflictPolicy.IGNORE:
                logger.warning(
                    f"Ignoring redeclaration of prefix '{prefix}' as '{uri}' "
                    f"(kept '{current}')"
                )
                return False
            logger.warning(f"Remapping prefix '{prefix}' from '{current}' to '{uri}'")
            self._unbind(prefix, current)

        self._prefix_to_uri[prefix] = uri
        self._uri_to_prefix.setdefault(uri, prefix)
        logger.debug(f"Declared namespace '{prefix}' -> '{uri}'")
        return True

    def _unbind(self, prefix: str, uri: str) -> None:
        del self._prefix_to_uri[prefix]
        if self._uri_to_prefix.get(uri) != prefix:
            return
        del self._uri_to_prefix[uri]
        for other_prefix, other_uri in self._prefix_to_uri.items():
            if other_uri == uri:
                self._uri_to_prefix[uri] = other_prefix
                break

    @staticmethod
    def _check_declaration(prefix: str, uri: str) -> None:
        if not isinstance(prefix, str) or not isinstance(uri, str):
            raise NameResolutionError(
                f"Namespace prefix and URI must be strings, got {prefix!r} = {uri!r}"
            )
        if prefix and not _PREFIX_RE.fullmatch(prefix):
            raise NameResolutionError(f"Invalid namespace prefix '{prefix}'")
        if prefix and not uri:
            raise NameResolutionError(f"Namespace prefix '{prefix}' cannot be mapped to an empty URI")

    # ---- lookups ------------------------------------------------------------

    def get_uri(self, prefix: str) -> str:
        try:
            return self._prefix_to_uri[prefix]
        except KeyError:
            raise NameResolutionError(f"Unknown namespace prefix '{prefix}'") from None

    def get_prefix(self, uri: str) -> str:
        """Return the canonical prefix for *uri*."""
        try:
            return self._uri_to_prefix[uri]
        except KeyError:
            raise NameResolutionError(f"No prefix declared for namespace '{uri}'") from None

    def has_prefix(self, prefix: str) -> bool:
        return prefix in self._prefix_to_uri

    def resolve(self, text: str) -> QName:
        """Resolve ``prefix:local`` (or a bare ``local``) to a qualified name."""
        if not isinstance(text, str) or not text:
            raise NameResolutionError("Empty name")
        if text != text.strip():
            raise NameResolutionError(f"Illegal leading or trailing whitespace in name '{text}'")

        if ":" in text:
            prefix, _, local_name = text.partition(":")
            if not prefix:
                raise NameResolutionError(f"Empty namespace prefix in name '{text}'")
            if not _PREFIX_RE.fullmatch(prefix):
                raise NameResolutionError(f"Invalid namespace prefix '{prefix}' in name '{text}'")
        else:
            prefix, local_name = "", text

        self._check_local_name(local_name, text)

        if prefix not in self._prefix_to_uri:
            raise NameResolutionError(f"Unknown namespace prefix '{prefix}' in name '{text}'")
        return QName(self._prefix_to_uri[prefix], local_name)

    @staticmethod
    def _check_local_name(local_name: str, text: str) -> None:
        if not local_name:
            raise NameResolutionError(f"Empty local name in '{text}'")
        if local_name in (".", ".."):
            raise NameResolutionError(f"'{local_name}' is not a valid local name in '{text}'")
        for ch in local_name:
            if ch in _ILLEGAL_LOCAL_CHARS or ch.isspace():
                raise NameResolutionError(f"Illegal character {ch!r} in name '{text}'")

    def to_prefixed(self, qname: QName) -> str:
        """Render *qname* as ``prefix:local`` using the canonical prefix."""
        if qname.is_residual:
            return "*"
        prefix = self.get_prefix(qname.namespace_uri)
        if not prefix:
            return qname.local_name
        return f"{prefix}:{qname.local_name}"

    def render(self, qname: QName) -> str:
        """Like :meth:`to_prefixed`, but falls back to ``{uri}local`` when no
        prefix is bound to the namespace (for example after a remap)."""
        try:
            return self.to_prefixed(qname)
        except NameResolutionError:
            return str(qname)

    # ---- container protocol -------------------------------------------------

    def copy(self) -> "NamespaceMapping":
        clone = NamespaceMapping(include_builtins=False)
        clone._prefix_to_uri = dict(self._prefix_to_uri)
        clone._uri_to_prefix = dict(self._uri_to_prefix)
        return clone

    def as_dict(self) -> Dict[str, str]:
        return dict(self._prefix_to_uri)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._prefix_to_uri

    def __iter__(self) -> Iterator[str]:
        return iter(self._prefix_to_uri)

    def __len__(self) -> int:
        return len(self._prefix_to_uri)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamespaceMapping):
            return NotImplemented
        return (
            self._prefix_to_uri == other._prefix_to_uri
            and self._uri_to_prefix == other._uri_to_prefix
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"NamespaceMapping({self._prefix_to_uri!r})"
