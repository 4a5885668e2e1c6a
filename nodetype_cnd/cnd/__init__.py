"""CND scanner, parser and reader entry points."""

from .lexer import Lexer, Token, TokenKind, tokenize
from .parser import CndParser
from .reader import (
    CndParseOutcome,
    parse_cnd,
    read_cnd_file,
    try_parse_cnd,
    try_read_cnd_file,
)

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
    "CndParser",
    "CndParseOutcome",
    "parse_cnd",
    "read_cnd_file",
    "try_parse_cnd",
    "try_read_cnd_file",
]
