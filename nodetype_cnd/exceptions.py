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

"""Custom exceptions for the compact node type definition reader."""

from typing import Optional

from .utils.source_location import SourceLocation, format_source


class CndError(Exception):
    """Base exception for node type definition related errors."""
    pass


class ConfigurationError(CndError):
    """Exception raised for invalid reader configuration or namespace files."""
    pass


class CndParseError(CndError):
    """Base exception for errors raised while reading CND text.

    Carries the source location (input identifier, 1-based line and column)
    of the offending token when it is known.
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location or SourceLocation()
        super().__init__(f"{message}{format_source(self.location)}")

    @property
    def line(self) -> Optional[int]:
        return self.location.line

    @property
    def column(self) -> Optional[int]:
        return self.location.column

    @property
    def system_id(self) -> Optional[str]:
        if self.location.file_path is None:
            return None
        return str(self.location.file_path)


class LexError(CndParseError):
    """Exception raised for a malformed character stream."""
    pass


class GrammarError(CndParseError):
    """Exception raised when the token stream does not match the grammar."""
    pass


class NameResolutionError(CndParseError):
    """Exception raised for undeclared prefixes or malformed names."""
    pass


class ValueConversionError(CndParseError, ValueError):
    """Exception raised when a literal is not valid for the declared type.

    Also raised for constraint expressions that are malformed for the type.
    """
    pass


class SemanticError(CndParseError):
    """Exception raised for cross-member rule violations."""
    pass


class NamespaceConflictError(CndParseError):
    """Exception raised when a prefix is redeclared with a different URI."""
    pass
