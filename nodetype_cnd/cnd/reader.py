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

"""Entry points for reading CND text and files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union

from ..config import ReaderConfig, reader_config
from ..exceptions import CndError, CndParseError
from ..models.definitions import CndParseResult
from ..models.namespaces import NamespaceMapping
from ..utils.source_location import SourceLocation
from .lexer import Lexer
from .parser import CndParser

logger = logging.getLogger(__name__)


def parse_cnd(
    source: Union[str, TextIO],
    system_id: str = "<string>",
    namespaces: Optional[NamespaceMapping] = None,
    config: Optional[ReaderConfig] = None,
) -> CndParseResult:
    """Parse CND text into node type definitions.

    Args:
        source: CND text or a text stream.
        system_id: Identifier used only to label diagnostics, e.g. a file name.
        namespaces: Mapping to start from. It is copied, so the caller's
            instance is left untouched; the returned result carries the copy
            extended with this input's declarations, ready to pass into the
            next parse.
        config: Reader configuration, defaults to the global ``reader_config``.

    Returns:
        The definitions in declaration order and the final namespace mapping.

    Raises:
        CndParseError: On the first lexical, grammar, name, value or semantic
            error. No partial result is returned.
    """
    config = config or reader_config
    mapping = namespaces.copy() if namespaces is not None else NamespaceMapping()
    lexer = Lexer(source, system_id)
    parser = CndParser(lexer, mapping, on_namespace_conflict=config.namespace_conflict)
    return parser.parse()


def read_cnd_file(
    file_path: Union[str, Path],
    namespaces: Optional[NamespaceMapping] = None,
    config: Optional[ReaderConfig] = None,
) -> CndParseResult:
    """Read and parse a UTF-8 encoded CND file; its path labels diagnostics."""
    path = Path(file_path)
    logger.debug(f"Reading node type definitions: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CndParseError(f"Failed to read CND file: {exc}", SourceLocation(file_path=path)) from exc
    return parse_cnd(content, str(path), namespaces=namespaces, config=config)


@dataclass(frozen=True)
class CndParseOutcome:
    """Result of a parse that reports failure as a value instead of raising."""

    ok: bool
    result: Optional[CndParseResult] = None
    error: Optional[CndError] = None

    @property
    def message(self) -> str:
        if self.ok:
            return f"Parsed {len(self.result)} node type definition(s)."
        return str(self.error)


def try_parse_cnd(
    source: Union[str, TextIO],
    system_id: str = "<string>",
    namespaces: Optional[NamespaceMapping] = None,
    config: Optional[ReaderConfig] = None,
) -> CndParseOutcome:
    """Like :func:`parse_cnd`, but returns a :class:`CndParseOutcome`."""
    try:
        return CndParseOutcome(ok=True, result=parse_cnd(source, system_id, namespaces, config))
    except CndError as exc:
        logger.debug(f"Parse of {system_id} failed: {exc}")
        return CndParseOutcome(ok=False, error=exc)


def try_read_cnd_file(
    file_path: Union[str, Path],
    namespaces: Optional[NamespaceMapping] = None,
    config: Optional[ReaderConfig] = None,
) -> CndParseOutcome:
    """Like :func:`read_cnd_file`, but returns a :class:`CndParseOutcome`."""
    try:
        return CndParseOutcome(ok=True, result=read_cnd_file(file_path, namespaces, config))
    except CndError as exc:
        logger.debug(f"Parse of {file_path} failed: {exc}")
        return CndParseOutcome(ok=False, error=exc)
