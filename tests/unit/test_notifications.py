"""Unit tests for notification previews."""

from __future__ import annotations

from datetime import datetime

from sop_runtime.engine.factory import create_object
from sop_runtime.engine.model import (
    Channel,
    Definition,
    Edge,
    EdgeNotificationEvent,
    Node,
    NodeKind,
    NodeNotificationEvent,
    NotificationSpec,
    Recipient,
)
from sop_runtime.engine.notifications import (
    DEFAULT_TEMPLATE,
    format_notification,
    preview_audit_entry,
    render_template,
)
from sop_runtime.engine.transitions import transition


def test_one_preview_per_channel() -> None:
    spec = NotificationSpec(
        enabled=True,
        channels=(Channel.EMAIL, Channel.SMS, Channel.IN_APP),
        recipient=Recipient.ASSIGNEE,
        template="{objectName} moved to {toStatus}",
    )

    previews = format_notification(spec, {"objectName": "PO-1", "toStatus": "Review"})

    assert [p.channel for p in previews] == ["Email", "SMS", "In-App"]
    assert [p.icon for p in previews] == ["\U0001f4e7", "\U0001f4f1", "\U0001f514"]
    assert {p.recipient for p in previews} == {"Assignee"}
    assert {p.body for p in previews} == {"PO-1 moved to Review"}
    assert previews[0].subject == "PO-1 → Review"
    assert previews[0].formatted == "\U0001f4e7 Email to [Assignee]: PO-1 moved to Review"


def test_missing_values_fall_back_without_raising() -> None:
    template = "{objectName}|{fromStatus}|{toStatus}|{action}|{actor}|{timestamp}|{other}"

    body = render_template(template, {"fromStatus": "", "action": None})

    assert body == "Unknown|N/A|N/A|N/A|Unknown|N/A|{other}"


def test_every_occurrence_is_replaced() -> None:
    assert render_template("{action}/{action}", {"action": "Go"}) == "Go/Go"


def test_empty_template_uses_default() -> None:
    spec = NotificationSpec(enabled=True, channels=(Channel.WEBHOOK,), template="")

    (preview,) = format_notification(spec, {"toStatus": "Done"})

    assert DEFAULT_TEMPLATE == "Status changed to {toStatus}"
    assert preview.body == "Status changed to Done"
    assert preview.channel == "Webhook"
    assert preview.recipient == "Owner"


def test_no_channels_means_no_previews() -> None:
    assert format_notification(NotificationSpec(enabled=True, channels=()), {}) == []


def test_preview_audit_entry_uses_captured_context(fixed_now: datetime) -> None:
    on_trigger = NotificationSpec(
        enabled=True,
        channels=(Channel.EMAIL,),
        template="{actor} did {action}: {fromStatus} -> {toStatus} ({role})",
    )
    on_enter = NotificationSpec(
        enabled=True,
        channels=(Channel.SMS,),
        recipient=Recipient.ADMIN,
        template="{objectName} now in {status} at {timestamp}",
    )
    definition = Definition(
        nodes=(
            Node(id="S", kind=NodeKind.START, label="Start"),
            Node(
                id="E",
                kind=NodeKind.END,
                label="Done",
                notifications={NodeNotificationEvent.ON_ENTER: on_enter},
            ),
        ),
        edges=(
            Edge(
                id="finish",
                source="S",
                target="E",
                label="Finish",
                notifications={EdgeNotificationEvent.ON_TRIGGER: on_trigger},
            ),
        ),
    )
    obj = create_object(definition, "Case 9", now=fixed_now)
    entry = transition(
        definition, obj, "finish", actor="carol", role="Clerk", now=fixed_now
    ).audit_entry

    previews = preview_audit_entry(entry)

    assert [p.body for p in previews] == [
        "carol did Finish: Start -> Done (Clerk)",
        f"Case 9 now in Done at {fixed_now.isoformat()}",
    ]
    assert previews[1].formatted.startswith("\U0001f4f1 SMS to [Admin]: ")
