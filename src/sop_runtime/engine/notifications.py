"""Notification previews.

Nothing is delivered. A preview shows what each configured channel would send,
with template placeholders filled from the values captured at trigger time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .model import AuditEntry, Channel, NotificationSpec, Recipient

DEFAULT_TEMPLATE = "Status changed to {toStatus}"

NOT_AVAILABLE = "N/A"
UNKNOWN = "Unknown"

CHANNEL_ICONS: dict[Channel, str] = {
    Channel.EMAIL: "\N{E-MAIL SYMBOL}",
    Channel.SMS: "\N{MOBILE PHONE}",
    Channel.WEBHOOK: "\N{BELL}",
    Channel.IN_APP: "\N{BELL}",
}

CHANNEL_NAMES: dict[Channel, str] = {
    Channel.EMAIL: "Email",
    Channel.SMS: "SMS",
    Channel.WEBHOOK: "Webhook",
    Channel.IN_APP: "In-App",
}

RECIPIENT_NAMES: dict[Recipient, str] = {
    Recipient.OWNER: "Owner",
    Recipient.ASSIGNEE: "Assignee",
    Recipient.ADMIN: "Admin",
    Recipient.CUSTOM: "Custom",
}


@dataclass(frozen=True, slots=True)
class NotificationPreview:
    icon: str
    channel: str
    recipient: str
    subject: str
    body: str
    formatted: str

    def to_json(self) -> dict[str, str]:
        return {
            "icon": self.icon,
            "channel": self.channel,
            "recipient": self.recipient,
            "subject": self.subject,
            "body": self.body,
            "formatted": self.formatted,
        }


def _value(context: Mapping[str, object], key: str) -> str | None:
    raw = context.get(key)
    if raw is None:
        return None
    text = str(raw)
    return text or None


def template_variables(context: Mapping[str, object]) -> dict[str, str]:
    """Map every supported placeholder to its value or a fallback."""

    from_status = _value(context, "fromStatus")
    to_status = _value(context, "toStatus")
    return {
        "{objectName}": _value(context, "objectName") or UNKNOWN,
        "{objectId}": _value(context, "objectId") or NOT_AVAILABLE,
        "{fromStatus}": from_status or NOT_AVAILABLE,
        "{toStatus}": to_status or NOT_AVAILABLE,
        "{status}": to_status or from_status or NOT_AVAILABLE,
        "{action}": _value(context, "action") or NOT_AVAILABLE,
        "{actor}": _value(context, "actor") or UNKNOWN,
        "{role}": _value(context, "role") or NOT_AVAILABLE,
        "{timestamp}": _value(context, "timestamp") or NOT_AVAILABLE,
    }


def render_template(template: str, context: Mapping[str, object]) -> str:
    text = template or DEFAULT_TEMPLATE
    for token, value in template_variables(context).items():
        text = text.replace(token, value)
    return text


def format_notification(
    spec: NotificationSpec, context: Mapping[str, object]
) -> list[NotificationPreview]:
    """Render one preview per channel of `spec`. Never raises on missing values."""

    variables = template_variables(context)
    body = render_template(spec.template, context)
    recipient = RECIPIENT_NAMES[spec.recipient]
    subject = f"{variables['{objectName}']} \N{RIGHTWARDS ARROW} {variables['{toStatus}']}"

    previews: list[NotificationPreview] = []
    for channel in spec.channels:
        icon = CHANNEL_ICONS[channel]
        name = CHANNEL_NAMES[channel]
        previews.append(
            NotificationPreview(
                icon=icon,
                channel=name,
                recipient=recipient,
                subject=subject,
                body=body,
                formatted=f"{icon} {name} to [{recipient}]: {body}",
            )
        )
    return previews


def preview_audit_entry(entry: AuditEntry) -> list[NotificationPreview]:
    """Expand every notification recorded on an audit entry into previews.

    Node events only capture `nodeLabel`; it stands in for both statuses.
    """

    previews: list[NotificationPreview] = []
    for event in entry.notifications:
        captured = event.context
        node_label = captured.get("nodeLabel")
        context: dict[str, object] = {
            "objectName": entry.object_name,
            "objectId": entry.object_id,
            "actor": entry.actor,
            "role": entry.role,
            "timestamp": entry.timestamp.isoformat(),
            "fromStatus": captured.get("fromStatus") or node_label or entry.from_status_label,
            "toStatus": captured.get("toStatus") or node_label or entry.to_status_label,
            # entry.action is never empty: unlabeled edges are recorded as "Continue".
            "action": captured.get("action") or entry.action,
        }
        previews.extend(format_notification(event.spec, context))
    return previews
