"""Audit trail filtering and CSV rendering for export."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from .model import AuditEntry

CSV_HEADERS: tuple[str, ...] = (
    "Timestamp",
    "Object",
    "From Status",
    "Action",
    "To Status",
    "Actor",
    "Role",
    "Fields",
    "Documents",
    "Notifications",
)


def audit_row(entry: AuditEntry) -> list[str]:
    """One CSV row, in `CSV_HEADERS` order."""

    fields = "; ".join(f"{key}={value}" for key, value in entry.field_values.items())
    return [
        entry.timestamp.isoformat(),
        entry.object_name,
        entry.from_status_label,
        entry.action,
        entry.to_status_label,
        entry.actor or "N/A",
        entry.role or "N/A",
        fields,
        "; ".join(entry.documents_attached),
        str(len(entry.notifications)),
    ]


def audit_to_csv(entries: Iterable[AuditEntry]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow(audit_row(entry))
    return buffer.getvalue()


def filter_audit(
    entries: Iterable[AuditEntry],
    *,
    object_name: str | None = None,
    action: str | None = None,
    status: str | None = None,
) -> list[AuditEntry]:
    """Keep entries matching every given filter; `status` matches either side."""

    out: list[AuditEntry] = []
    for entry in entries:
        if object_name and entry.object_name != object_name:
            continue
        if action and entry.action != action:
            continue
        if status and status not in (entry.from_status_label, entry.to_status_label):
            continue
        out.append(entry)
    return out
