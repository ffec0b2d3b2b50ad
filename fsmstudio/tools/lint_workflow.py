#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
lint_workflow.py - Lint a workflow definition and optionally print its diagram layout

Reads an FSM YAML file (statesClass/eventsClass/states.on_event), a snapshot
YAML file or a snapshot JSON file, and reports:

ERRORS (the workflow cannot be submitted):
- duplicate state names (case-insensitive)
- empty or duplicate event names within a state
- transition targets that are not declared states

WARNINGS (completeness hints):
- transitions with no actions
- states with no outgoing events
- states unreachable from the start state

Usage:
    python -m fsmstudio.tools.lint_workflow workflow.yaml [--json] [--strict]
    python -m fsmstudio.tools.lint_workflow workflow.yaml --layout --direction TB

Exit codes:
    0 - No errors (and no warnings with --strict)
    1 - Errors found (or --strict and warnings found)
    2 - File missing or not parseable
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from fsmstudio.diagram import layout_graph
from fsmstudio.spec import SpecParseError, load_workflow_file, lint_workflow_spec
from fsmstudio.spec.model import resolve_start_state
from fsmstudio.validator.errors import LintResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LINT_FAILED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lint_workflow",
        description="Lint a payment lifecycle workflow (FSM YAML or snapshot JSON)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  clean
  1  errors found (or warnings with --strict)
  2  file missing or not parseable
        """,
    )
    parser.add_argument(
        "file",
        type=Path,
        help="Workflow file (.yaml, .yml or .json)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors",
    )
    parser.add_argument(
        "--layout",
        action="store_true",
        help="Include the diagram layout payload",
    )
    parser.add_argument(
        "--direction",
        choices=["LR", "TB"],
        default="LR",
        help="Layout direction (default: LR)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _print_text_report(path: Path, result: LintResult, start_state: Optional[str]) -> None:
    print(f"Workflow: {path}")
    print(f"Start state: {start_state or '(none)'}")

    if result.errors:
        print(f"\n{'='*60}")
        print("ERRORS")
        print(f"{'='*60}\n")
        for issue in result.errors:
            print(f"  {issue.format()}")

    if result.warnings:
        print(f"\n{'-'*60}")
        print("WARNINGS")
        print(f"{'-'*60}\n")
        for issue in result.warnings:
            print(f"  {issue.format()}")

    print(f"\nSummary: {len(result.errors)} errors, {len(result.warnings)} warnings")


def _print_layout_summary(payload: Dict[str, Any]) -> None:
    print(f"\n{'='*60}")
    print("LAYOUT")
    print(f"{'='*60}\n")
    for node in payload["nodes"]:
        position = node["position"]
        print(f"  {node['type']:<9} {node['id']:<32} x={position['x']:.0f} y={position['y']:.0f}")
    for edge in payload["edges"]:
        print(f"  edge      {edge['id']} [{edge['data']['kind']}]")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        spec = load_workflow_file(args.file)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except SpecParseError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    result = lint_workflow_spec(spec)
    start_state = resolve_start_state(spec)
    layout_payload = None
    if args.layout:
        layout_payload = layout_graph(spec, direction=args.direction).model_dump(mode="json")

    if args.json:
        report: Dict[str, Any] = {
            "file": str(args.file),
            "startState": start_state,
            **result.to_dict(),
        }
        if layout_payload is not None:
            report["layout"] = layout_payload
        print(json.dumps(report, indent=2))
    else:
        _print_text_report(args.file, result, start_state)
        if layout_payload is not None:
            _print_layout_summary(layout_payload)

    if result.has_errors():
        if not args.json:
            print("\nFAILED")
        return EXIT_LINT_FAILED
    if args.strict and result.has_warnings():
        if not args.json:
            print("\nFAILED (strict mode): warnings present")
        return EXIT_LINT_FAILED
    if not args.json:
        print("\nPASSED")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
