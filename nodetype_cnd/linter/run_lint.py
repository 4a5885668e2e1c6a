#!/usr/bin/env python3
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

"""CLI entry point for linting compact node type definition files."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from ..config import reader_config
from ..exceptions import ConfigurationError
from ..file_io.definition_json import build_definitions_payload, save_definitions_payload
from ..file_io.namespace_file import load_namespace_file
from . import LintResult, lint_files

CND_EXTENSION = '.cnd'


def find_cnd_files(paths: List[str]) -> List[Path]:
    """Find all CND files in given paths."""
    cnd_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.suffix == CND_EXTENSION:
                cnd_files.append(path)
            else:
                print(f"Warning: File does not have a {CND_EXTENSION} extension: {path}", file=sys.stderr)
        elif path.is_dir():
            cnd_files.extend(path.rglob(f'*{CND_EXTENSION}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(cnd_files))


def _location(entry: dict) -> str:
    if 'line' not in entry:
        return ""
    if 'column' in entry:
        return f":{entry['line']}:{entry['column']}"
    return f":{entry['line']}"


def print_results(results: List[LintResult], output_format: str) -> None:
    """Print results in the requested format."""
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [
                {
                    'file': str(r.file_path),
                    'errors': r.errors,
                    'warnings': r.warnings,
                }
                for r in results
            ]
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(
                    f"::error file={result.file_path},line={error.get('line', 1)},"
                    f"col={error.get('column', 1)}::{error['message']}"
                )
            for warning in result.warnings:
                print(
                    f"::warning file={result.file_path},line={warning.get('line', 1)},"
                    f"col={warning.get('column', 1)}::{warning['message']}"
                )
    else:  # human-readable
        for result in results:
            if result.errors or result.warnings:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    print(f"  ERROR{_location(error)}: {error['message']}")
                for warning in result.warnings:
                    print(f"  WARNING{_location(warning)}: {warning['message']}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint compact node type definition (CND) files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--namespaces',
        metavar='FILE',
        help='YAML file with namespace prefixes available to every CND file',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--export',
        metavar='FILE',
        help='Write the parsed definitions to FILE (JSON, or YAML for .yaml/.yml)',
    )

    args = parser.parse_args(argv)

    config = reader_config
    if args.format != 'human':
        # INFO records go to stdout, which carries the machine-readable report
        config = replace(reader_config, log_level='WARNING')
    config.set_logging()

    if not args.paths:
        args.paths = ['.']

    namespaces = None
    if args.namespaces:
        try:
            namespaces = load_namespace_file(args.namespaces)
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)

    cnd_files = find_cnd_files(args.paths)

    if not cnd_files:
        print("No CND files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(cnd_files, namespaces=namespaces, config=config)
    print_results(results, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)

    if args.export:
        payload = build_definitions_payload(
            {str(r.file_path): r.parse_result for r in results if r.parse_result is not None}
        )
        save_definitions_payload(args.export, payload)

    if args.format == 'human':
        print("Lint succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
