#!/usr/bin/env python3
"""Programmatic walk through the bundled Purchase Order Approval SOP.

This demonstrates using the runtime functions directly:

* validate a definition
* create a case and move it through a few actions
* preview the notifications each action triggers
* print progress and the audit trail as CSV

Field values are passed as arguments (not read from `.env`).
"""

from __future__ import annotations

import argparse
from typing import Sequence

from sop_runtime.config import RuntimeSettings
from sop_runtime.engine import (
    TransitionError,
    create_object,
    estimate_progress,
    preview_audit_entry,
    transition,
    validate,
)
from sop_runtime.engine.audit_export import audit_to_csv
from sop_runtime.engine.samples import purchase_order_approval
from sop_runtime.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk a purchase order through the sample SOP.")
    parser.add_argument("--name", default="PO-1001", help="Case name")
    parser.add_argument("--amount", default="750", help="PO amount")
    parser.add_argument("--vendor", default="Acme Supplies", help="Vendor name")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = RuntimeSettings()
    configure_logging(settings.log_level)

    definition = purchase_order_approval()
    result = validate(definition)
    if not result.valid:
        for error in result.errors:
            print(f"- {error}")
        return 3

    obj = create_object(definition, args.name)
    steps: list[tuple[str, dict[str, object]]] = [
        ("e-start-draft", {"PO Number": args.name, "Vendor": args.vendor, "Amount": args.amount}),
        ("e-draft-review", {"Justification": "Quarterly restock"}),
        ("e-review-decision", {}),
        ("e-under1k", {}),
    ]

    for edge_id, fields in steps:
        try:
            step = transition(
                definition,
                obj,
                edge_id,
                field_values=fields,
                actor=settings.default_actor,
                role=settings.default_role,
            )
        except TransitionError as exc:
            print(f"{edge_id}: {exc}")
            return 1
        obj = step.updated_object
        print(f"{step.audit_entry.from_status_label} -> {step.audit_entry.to_status_label}")
        for preview in preview_audit_entry(step.audit_entry):
            print(f"  {preview.formatted}")

    progress = estimate_progress(definition, obj)
    print(f"Progress: {progress.percentage}%")
    print(audit_to_csv(obj.audit))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
