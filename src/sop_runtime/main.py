"""CLI entrypoint for the SOP runtime.

Validates definition documents and drives a test case through one, printing
what each action would notify and how far the case has come.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sop_runtime import __version__
from sop_runtime.config import RuntimeSettings
from sop_runtime.engine import (
    ConfigurationError,
    DefinitionError,
    TransitionError,
    create_object,
    estimate_progress,
    preview_audit_entry,
    transition,
    validate,
)
from sop_runtime.engine.audit_export import audit_to_csv
from sop_runtime.engine.samples import PURCHASE_ORDER_APPROVAL
from sop_runtime.engine.schema import load_definition
from sop_runtime.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TRANSITION_REFUSED = 1
EXIT_CONFIGURATION = 2
EXIT_INVALID_DEFINITION = 3


class _StartStep(argparse.Action):
    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        steps = list(getattr(namespace, self.dest, None) or [])
        steps.append({"edge_id": values, "fields": {}, "documents": []})
        setattr(namespace, self.dest, steps)


class _AttachToStep(argparse.Action):
    """Attach a --field/--document to the most recent --action."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        steps = getattr(namespace, "steps", None)
        if not steps:
            parser.error(f"{option_string} must follow an --action")
        step = steps[-1]
        if self.dest == "field":
            key, sep, value = str(values).partition("=")
            if not sep or not key.strip():
                parser.error(f"{option_string} expects KEY=VALUE, got {values!r}")
            step["fields"][key.strip()] = value
        else:
            step["documents"].append(values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sop-runtime",
        description="Validate SOP definitions and simulate cases moving through them",
    )
    parser.add_argument("--version", action="version", version=f"sop-runtime {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_cmd = subparsers.add_parser("validate", help="Check a definition before publishing")
    validate_cmd.add_argument("definition", type=Path, help="Path to a definition JSON file")
    validate_cmd.add_argument("--json", action="store_true", help="Print the result as JSON")

    sample = subparsers.add_parser("sample", help="Print the bundled sample definition")
    sample.add_argument(
        "--output", type=Path, default=None, help="Write to this file instead of stdout"
    )

    run = subparsers.add_parser(
        "run",
        help="Create a case and apply actions to it in order",
    )
    run.add_argument("definition", type=Path, help="Path to a definition JSON file")
    run.add_argument("--name", default=None, help="Case name (generated when omitted)")
    run.add_argument(
        "--action",
        dest="steps",
        action=_StartStep,
        metavar="EDGE_ID",
        help="Edge id to take; repeat for each step",
    )
    run.add_argument(
        "--field",
        action=_AttachToStep,
        metavar="KEY=VALUE",
        help="Field value for the preceding --action",
    )
    run.add_argument(
        "--document",
        action=_AttachToStep,
        metavar="NAME",
        help="Document attached to the preceding --action",
    )
    run.add_argument("--actor", default=None, help="Actor recorded on the audit trail")
    run.add_argument("--role", default=None, help="Role the actor plays")
    run.add_argument(
        "--csv", type=Path, default=None, help="Write the audit trail to this CSV file"
    )
    run.add_argument("--json", action="store_true", help="Print the final case as JSON")

    return parser


def _cmd_validate(args: argparse.Namespace) -> int:
    definition = load_definition(args.definition)
    result = validate(definition)
    if args.json:
        print(json.dumps(result.to_json(), indent=2, ensure_ascii=False))
    elif result.valid:
        print(f"{definition.name or args.definition}: valid")
    else:
        print(f"{definition.name or args.definition}: {len(result.errors)} problem(s)")
        for error in result.errors:
            print(f"  - {error}")
    return EXIT_OK if result.valid else EXIT_INVALID_DEFINITION


def _cmd_sample(args: argparse.Namespace) -> int:
    text = json.dumps(PURCHASE_ORDER_APPROVAL, indent=2, ensure_ascii=False) + "\n"
    if args.output is None:
        sys.stdout.write(text)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote sample definition to {args.output}")
    return EXIT_OK


def _cmd_run(args: argparse.Namespace, settings: RuntimeSettings) -> int:
    definition = load_definition(args.definition)
    obj = create_object(definition, args.name)
    actor = args.actor or settings.default_actor
    role = args.role or settings.default_role

    start = definition.node_by_id(obj.current_node_id)
    print(f"Created {obj.name} at {start.display_label if start else obj.current_node_id}")

    exit_code = EXIT_OK
    for step in args.steps or []:
        try:
            result = transition(
                definition,
                obj,
                step["edge_id"],
                field_values=step["fields"],
                documents_attached=step["documents"],
                actor=actor,
                role=role,
                enforce_roles=settings.enforce_roles,
            )
        except TransitionError as e:
            print(f"Action {step['edge_id']!r} refused: {e}", file=sys.stderr)
            exit_code = EXIT_TRANSITION_REFUSED
            break

        obj = result.updated_object
        entry = result.audit_entry
        print(f"{entry.from_status_label} -> {entry.to_status_label} via {entry.action}")
        for preview in preview_audit_entry(entry):
            print(f"  {preview.formatted}")

    progress = estimate_progress(definition, obj)
    suffix = "" if progress.end_reachable else " (no End node reachable)"
    print(f"Progress: {progress.steps}/{progress.total} ({progress.percentage}%){suffix}")
    if obj.is_complete:
        print(f"{obj.name} is complete")

    if args.csv is not None:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        args.csv.write_text(audit_to_csv(obj.audit), encoding="utf-8")
        logger.info("Audit trail exported", extra={"path": str(args.csv), "rows": len(obj.audit)})

    if args.json:
        print(json.dumps(obj.to_json(), indent=2, ensure_ascii=False, default=str))

    return exit_code


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = RuntimeSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIGURATION

    configure_logging(settings.log_level)

    try:
        if args.command == "validate":
            return _cmd_validate(args)
        if args.command == "sample":
            return _cmd_sample(args)
        if args.command == "run":
            return _cmd_run(args, settings)
    except DefinitionError as e:
        logger.error("Definition could not be loaded", extra={"error": str(e)})
        print(f"Invalid definition: {e}", file=sys.stderr)
        return EXIT_INVALID_DEFINITION
    except ConfigurationError as e:
        print(f"Cannot start a case: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    parser.error(f"Unknown command: {args.command}")
    return EXIT_CONFIGURATION


if __name__ == "__main__":
    raise SystemExit(main())
