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

"""YAML configuration parser with caching support."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Union, Optional, Tuple

from ..config import reader_config
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """YAML parser with caching and source locations."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else reader_config.cache_enabled
        self._cache: Dict[Path, Tuple[Any, SourceMap]] = {}

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str) -> SourceMap:
        """Build a mapping from YAML JSON-pointer-like paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # safe_load reports the error with its own location
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{cls._json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def load_config_from_string_with_source(self, content: str) -> Tuple[Any, SourceMap]:
        """Load YAML from string content and return (data, source_map).

        source_map keys are JSON-pointer-like YAML paths (e.g. "/namespaces/ex").
        Values contain 1-based line/column.
        """
        try:
            config_data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Failed to parse YAML content: {exc}") from exc
        if config_data is None:
            config_data = {}
        return config_data, self._build_source_map_from_yaml(content)

    def load_config_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a YAML file and return (data, source_map)."""
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigurationError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading configuration (with source) from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading configuration file (with source): {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Failed to read configuration file {path}: {exc}") from exc

        try:
            loaded = self.load_config_from_string_with_source(content)
        except ConfigurationError as exc:
            raise ConfigurationError(f"{path}: {exc}") from exc

        if self.cache_enabled:
            self._cache[path] = loaded
        return loaded

    def load_config(self, file_path: Union[str, Path]) -> Any:
        """Load a YAML file, discarding source locations."""
        return self.load_config_with_source(file_path)[0]

    def clear_cache(self):
        """Clear the configuration cache."""
        self._cache.clear()
        logger.debug("Configuration cache cleared")


# Global parser instance
yaml_parser = YamlParser()
