"""Reader for compact node type definitions (CND).

Parses CND text into immutable node type definition records::

    from nodetype_cnd import parse_cnd

    result = parse_cnd("<ex = 'http://example.com/ns'> [ex:File] > nt:base")
    for definition in result.definitions:
        ...

The returned ``result.namespaces`` includes the ``ex`` declaration and can be
passed as ``namespaces=`` to the next parse.
"""

__version__ = "0.1.0"

from .exceptions import (
    CndError,
    CndParseError,
    ConfigurationError,
    GrammarError,
    LexError,
    NameResolutionError,
    NamespaceConflictError,
    SemanticError,
    ValueConversionError,
)
from .models import (
    NT_BASE,
    RESIDUAL_NAME,
    ChildNodeDefinition,
    CndParseResult,
    NamespaceConflictPolicy,
    NamespaceMapping,
    NodeTypeDefinition,
    OnParentVersionAction,
    PropertyDefinition,
    PropertyType,
    QName,
    Value,
)
from .cnd import (
    CndParseOutcome,
    parse_cnd,
    read_cnd_file,
    try_parse_cnd,
    try_read_cnd_file,
)

__all__ = [
    "__version__",
    "CndError",
    "CndParseError",
    "ConfigurationError",
    "GrammarError",
    "LexError",
    "NameResolutionError",
    "NamespaceConflictError",
    "SemanticError",
    "ValueConversionError",
    "NT_BASE",
    "RESIDUAL_NAME",
    "ChildNodeDefinition",
    "CndParseResult",
    "NamespaceConflictPolicy",
    "NamespaceMapping",
    "NodeTypeDefinition",
    "OnParentVersionAction",
    "PropertyDefinition",
    "PropertyType",
    "QName",
    "Value",
    "CndParseOutcome",
    "parse_cnd",
    "read_cnd_file",
    "try_parse_cnd",
    "try_read_cnd_file",
]
