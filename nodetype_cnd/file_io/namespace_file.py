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

"""Namespace seed files.

A seed file declares prefixes up front so CND files can use them without their
own ``<prefix = uri>`` lines::

    namespaces:
      ex: http://example.com/ns
      cms: http://example.com/cms/1.0
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from ..exceptions import CndParseError, ConfigurationError
from ..models.namespaces import NamespaceConflictPolicy, NamespaceMapping
from ..parsers.yaml_parser import YamlParser, yaml_parser
from ..schema import validate_against_schema
from ..utils.source_location import format_source, lookup_source

logger = logging.getLogger(__name__)


def namespaces_from_data(
    data: Any,
    *,
    source_map: Optional[dict] = None,
    file_path: Optional[Path] = None,
    base: Optional[NamespaceMapping] = None,
) -> NamespaceMapping:
    """Build a mapping from already loaded seed-file data.

    Raises:
        ConfigurationError: If the data does not match the seed-file schema or a
            declaration is invalid or conflicts with *base*.
    """
    issues = validate_against_schema(data, "namespaces")
    if issues:
        details = "; ".join(
            f"{issue.message}{format_source(lookup_source(source_map, issue.yaml_path, file_path))}"
            for issue in issues
        )
        raise ConfigurationError(f"Invalid namespace file: {details}")

    mapping = base.copy() if base is not None else NamespaceMapping()
    for prefix, uri in data["namespaces"].items():
        try:
            mapping.declare(prefix, uri, on_conflict=NamespaceConflictPolicy.ERROR)
        except CndParseError as exc:
            loc = lookup_source(source_map, f"/namespaces/{prefix}", file_path)
            raise ConfigurationError(f"{exc.message}{format_source(loc)}") from exc
    return mapping


def load_namespace_file(
    file_path: Union[str, Path],
    base: Optional[NamespaceMapping] = None,
    parser: Optional[YamlParser] = None,
) -> NamespaceMapping:
    """Load a YAML seed file into a new :class:`NamespaceMapping`.

    The mapping starts from *base* (copied) or from the built-in namespaces.
    """
    path = Path(file_path)
    data, source_map = (parser or yaml_parser).load_config_with_source(path)
    mapping = namespaces_from_data(data, source_map=source_map, file_path=path, base=base)
    logger.info(f"Loaded {len(data['namespaces'])} namespace(s) from {path}")
    return mapping
