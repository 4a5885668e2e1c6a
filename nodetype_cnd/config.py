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

"""Configuration management for the node type definition reader."""

import os
import logging
from dataclasses import dataclass

from .exceptions import ConfigurationError
from .models.namespaces import NamespaceConflictPolicy
from .utils.logging_utils import configure_split_stream_logging, parse_level

logger = logging.getLogger(__name__)


@dataclass
class ReaderConfig:
    """Configuration class for reading node type definitions."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    namespace_conflict: NamespaceConflictPolicy = NamespaceConflictPolicy.ERROR
    cache_enabled: bool = False

    @classmethod
    def from_env(cls, strict: bool = True) -> 'ReaderConfig':
        """Create configuration from environment variables.

        With ``strict=False`` an invalid namespace conflict policy is logged
        and replaced by ``error`` instead of raising ConfigurationError.
        """
        raw_policy = os.getenv('NODETYPE_CND_NAMESPACE_CONFLICT', 'error')
        try:
            namespace_conflict = parse_conflict_policy(raw_policy)
        except ConfigurationError as e:
            if strict:
                raise
            logger.warning(f"{e}; falling back to '{NamespaceConflictPolicy.ERROR.value}'")
            namespace_conflict = NamespaceConflictPolicy.ERROR

        return cls(
            log_level=os.getenv('NODETYPE_CND_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('NODETYPE_CND_PRINT_LEVEL', 'WARNING'),
            namespace_conflict=namespace_conflict,
            cache_enabled=os.getenv('NODETYPE_CND_CACHE_ENABLED', 'false').lower() == 'true',
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = parse_level(self.log_level, logging.INFO)
        stderr_level = parse_level(self.print_level, logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('nodetype_cnd')


def parse_conflict_policy(raw: str) -> NamespaceConflictPolicy:
    """Parse a namespace conflict policy name (``error``, ``ignore``, ``override``)."""
    try:
        return NamespaceConflictPolicy(str(raw).strip().lower())
    except ValueError as exc:
        valid = ", ".join(p.value for p in NamespaceConflictPolicy)
        raise ConfigurationError(
            f"Invalid namespace conflict policy '{raw}'. Valid policies: {valid}"
        ) from exc


# Global configuration instance
reader_config = ReaderConfig.from_env(strict=False)
