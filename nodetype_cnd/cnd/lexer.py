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

"""Lexical scanner for CND text.

Produces one token at a time: single-character symbols, strings (unquoted runs
of letters, digits, ``:`` and ``_``, or single-quoted text with backslash
escapes) and a final EOF token. Whitespace and ``//`` / ``/* */`` comments only
separate tokens.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from ..exceptions import LexError
from ..utils.source_location import SourceLocation


SYMBOLS = frozenset("<>=[]-+(),*!")
QUOTE = "'"

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


class TokenKind(enum.Enum):
    SYMBOL = "symbol"
    STRING = "string"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    ``text`` is the symbol character, or the string content with quotes removed
    and escapes decoded. ``line`` and ``column`` are 1-based and point at the
    first character of the token.
    """

    kind: TokenKind
    text: str
    line: int
    column: int
    quoted: bool = False

    def is_symbol(self, symbol: str) -> bool:
        return self.kind == TokenKind.SYMBOL and self.text == symbol

    @property
    def is_eof(self) -> bool:
        return self.kind == TokenKind.EOF

    def describe(self) -> str:
        if self.kind == TokenKind.EOF:
            return "end of input"
        return f"'{self.text}'"


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in ":_"


class Lexer:
    """Forward-only CND scanner."""

    def __init__(self, source: Union[str, TextIO], system_id: Optional[str] = None):
        if not isinstance(source, str):
            source = source.read()
        self._source = source
        self._system_id = system_id
        self._pos = 0
        self._line = 1
        self._column = 1
        self._done = False

    @property
    def system_id(self) -> Optional[str]:
        return self._system_id

    def location(self, line: int, column: int) -> SourceLocation:
        file_path = Path(self._system_id) if self._system_id else None
        return SourceLocation(file_path=file_path, line=line, column=column)

    def fail(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        raise LexError(message, self.location(line or self._line, column or self._column))

    # ---- character access -----------------------------------------------------

    def _current(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    # ---- scanning -------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                while self._pos < len(self._source) and self._current() != "\n":
                    self._advance()
            elif ch == "/" and self._peek() == "*":
                line, column = self._line, self._column
                self._advance()
                self._advance()
                while not (self._current() == "*" and self._peek() == "/"):
                    if self._pos >= len(self._source):
                        self.fail("Unterminated comment", line, column)
                    self._advance()
                self._advance()
                self._advance()
            else:
                return

    def next_token(self) -> Token:
        """Scan and return the next token; EOF is returned repeatedly at the end."""
        self._skip_whitespace_and_comments()
        line, column = self._line, self._column

        if self._pos >= len(self._source):
            self._done = True
            return Token(TokenKind.EOF, "", line, column)

        ch = self._current()
        if ch in SYMBOLS:
            self._advance()
            return Token(TokenKind.SYMBOL, ch, line, column)
        if ch == QUOTE:
            return self._scan_quoted(line, column)
        if _is_word_char(ch):
            start = self._pos
            while self._pos < len(self._source) and _is_word_char(self._current()):
                self._advance()
            return Token(TokenKind.STRING, self._source[start:self._pos], line, column)

        self.fail(f"Unexpected character {ch!r}", line, column)

    def _scan_quoted(self, line: int, column: int) -> Token:
        self._advance()  # opening quote
        chars = []
        while True:
            if self._pos >= len(self._source):
                self.fail("Unterminated quoted string", line, column)
            ch = self._advance()
            if ch == QUOTE:
                return Token(TokenKind.STRING, "".join(chars), line, column, quoted=True)
            if ch == "\\":
                if self._pos >= len(self._source):
                    self.fail("Unterminated quoted string", line, column)
                escaped = self._advance()
                chars.append(_ESCAPES.get(escaped, escaped))
            else:
                chars.append(ch)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while not self._done:
            yield self.next_token()


def tokenize(source: Union[str, TextIO], system_id: Optional[str] = None) -> list:
    """Return all tokens of *source*, ending with a single EOF token."""
    return list(Lexer(source, system_id))
