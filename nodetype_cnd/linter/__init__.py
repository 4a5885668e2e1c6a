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

"""Linter package for compact node type definition files."""

from pathlib import Path
from typing import List, Optional

from ..cnd.reader import try_read_cnd_file
from ..config import ReaderConfig
from ..exceptions import CndParseError
from ..models.namespaces import NamespaceMapping
from .report import LintResult
from .structure_linter import StructureLinter

__all__ = ['lint_files', 'LintResult', 'StructureLinter']


def lint_files(
    file_paths: List[Path],
    namespaces: Optional[NamespaceMapping] = None,
    config: Optional[ReaderConfig] = None,
) -> List[LintResult]:
    """Lint a list of CND files.

    Each file is parsed independently, starting from *namespaces* (or the
    built-in mapping).

    Args:
        file_paths: List of file paths to lint
        namespaces: Optional seed namespace mapping
        config: Optional reader configuration

    Returns:
        List of LintResult objects, one per file
    """
    results = []

    structure_linter = StructureLinter()

    for file_path in file_paths:
        result = LintResult(file_path)

        outcome = try_read_cnd_file(file_path, namespaces=namespaces, config=config)
        if not outcome.ok:
            error = outcome.error
            if isinstance(error, CndParseError):
                result.add_error(error.message, line=error.line, column=error.column)
            else:
                result.add_error(str(error))
            results.append(result)
            continue

        result.parse_result = outcome.result
        try:
            structure_linter.lint(outcome.result, result)
        except Exception as e:
            result.add_error(f"Unexpected error during linting: {str(e)}")

        results.append(result)

    return results
