from __future__ import annotations

from dataclasses import dataclass


JCR_URI = "http://www.jcp.org/jcr/1.0"
NT_URI = "http://www.jcp.org/jcr/nt/1.0"
MIX_URI = "http://www.jcp.org/jcr/mix/1.0"
SV_URI = "http://www.jcp.org/jcr/sv/1.0"
XML_URI = "http://www.w3.org/XML/1998/namespace"


@dataclass(frozen=True, order=True)
class QName:
    """A namespace URI plus local name, the resolved form of every item name."""

    namespace_uri: str
    local_name: str

    @property
    def is_residual(self) -> bool:
        return self == RESIDUAL_NAME

    def __str__(self) -> str:
        if self.is_residual:
            return "*"
        return f"{{{self.namespace_uri}}}{self.local_name}"


# Wildcard item name, written `*` in CND text. The local name `*` can never be
# produced by name resolution, so it never equals a concrete name.
RESIDUAL_NAME = QName("", "*")

NT_BASE = QName(NT_URI, "base")
