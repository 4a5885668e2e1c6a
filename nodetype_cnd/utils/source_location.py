from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based
    yaml_path: Optional[str] = None


def lookup_source(
    source_map: Optional[Dict[str, Dict[str, int]]],
    yaml_path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Resolve a JSON-pointer-like YAML path against a source map."""
    if not source_map or yaml_path is None:
        return SourceLocation(file_path=file_path, yaml_path=yaml_path)

    entry = source_map.get(yaml_path)
    if not entry:
        return SourceLocation(file_path=file_path, yaml_path=yaml_path)

    return SourceLocation(
        file_path=file_path,
        yaml_path=yaml_path,
        line=entry.get("line"),
        column=entry.get("column"),
    )


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        if loc.line is not None and loc.column is not None:
            parts.append(f"source= {loc.file_path}:{loc.line}:{loc.column} ")
        elif loc.line is not None:
            parts.append(f"source= {loc.file_path}:{loc.line} ")
        else:
            parts.append(f"source= {loc.file_path} ")
    elif loc.line is not None:
        parts.append(f"line= {loc.line}:{loc.column or 1} ")

    if loc.yaml_path:
        parts.append(f"yaml_path= {loc.yaml_path} ")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
