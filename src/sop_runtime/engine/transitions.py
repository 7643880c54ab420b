"""The state-machine step: apply one action to one case.

`transition` is a pure function of its arguments. It either returns a complete
result or raises `TransitionError` before building anything, so the caller's
case value is never partially updated.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from .errors import TransitionError, TransitionFailure
from .model import (
    AuditEntry,
    CaseObject,
    Definition,
    DocumentRequirement,
    Edge,
    EdgeNotificationEvent,
    FieldRequirement,
    Node,
    NodeKind,
    NodeNotificationEvent,
    NotificationEvent,
    NotificationKind,
    PathEntry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransitionResult:
    updated_object: CaseObject
    audit_entry: AuditEntry
    notifications: tuple[NotificationEvent, ...]


@dataclass(frozen=True, slots=True)
class AvailableAction:
    """An action a case can take from where it currently sits."""

    edge_id: str
    label: str
    description: str
    target_node_id: str
    target_node: Node | None
    required_roles: tuple[str, ...]
    required_fields: tuple[FieldRequirement, ...]
    required_documents: tuple[DocumentRequirement, ...]


def available_actions(definition: Definition, obj: CaseObject) -> list[AvailableAction]:
    return [
        AvailableAction(
            edge_id=edge.id,
            label=edge.display_label,
            description=edge.description,
            target_node_id=edge.target,
            target_node=definition.node_by_id(edge.target),
            required_roles=edge.required_roles,
            required_fields=edge.required_fields,
            required_documents=edge.required_documents,
        )
        for edge in definition.outgoing(obj.current_node_id)
    ]


def _is_blank(value: object) -> bool:
    return value is None or not str(value).strip()


def _check_role(edge: Edge, role: str | None) -> None:
    if not edge.required_roles or role in edge.required_roles:
        return
    required = ", ".join(edge.required_roles)
    raise TransitionError(
        f"Role '{role or ''}' not authorized. Required: {required}",
        reason=TransitionFailure.ROLE_NOT_AUTHORIZED,
        missing=edge.required_roles,
    )


def _check_fields(edge: Edge, field_values: Mapping[str, object]) -> None:
    missing = tuple(
        f.name for f in edge.required_fields if _is_blank(field_values.get(f.name))
    )
    if missing:
        raise TransitionError(
            f"Missing required fields: {', '.join(missing)}",
            reason=TransitionFailure.MISSING_FIELDS,
            missing=missing,
        )


def _check_documents(edge: Edge, documents: Iterable[str]) -> None:
    attached = set(documents)
    missing = tuple(d.name for d in edge.required_documents if d.name not in attached)
    if missing:
        raise TransitionError(
            f"Missing required documents: {', '.join(missing)}",
            reason=TransitionFailure.MISSING_DOCUMENTS,
            missing=missing,
        )


def compose_notifications(
    edge: Edge, from_node: Node, to_node: Node
) -> tuple[NotificationEvent, ...]:
    """Collect the enabled notifications in firing order: action, exit, enter."""

    events: list[NotificationEvent] = []

    on_trigger = edge.notification(EdgeNotificationEvent.ON_TRIGGER)
    if on_trigger is not None and on_trigger.enabled:
        events.append(
            NotificationEvent(
                kind=NotificationKind.ACTION,
                event_key=EdgeNotificationEvent.ON_TRIGGER,
                spec=on_trigger,
                context={
                    "action": edge.display_label,
                    "fromStatus": from_node.display_label,
                    "toStatus": to_node.display_label,
                },
            )
        )

    on_exit = from_node.notification(NodeNotificationEvent.ON_EXIT)
    if on_exit is not None and on_exit.enabled:
        events.append(
            NotificationEvent(
                kind=NotificationKind.NODE_EXIT,
                event_key=NodeNotificationEvent.ON_EXIT,
                spec=on_exit,
                context={"nodeLabel": from_node.display_label},
            )
        )

    on_enter = to_node.notification(NodeNotificationEvent.ON_ENTER)
    if on_enter is not None and on_enter.enabled:
        events.append(
            NotificationEvent(
                kind=NotificationKind.NODE_ENTER,
                event_key=NodeNotificationEvent.ON_ENTER,
                spec=on_enter,
                context={"nodeLabel": to_node.display_label},
            )
        )

    return tuple(events)


def transition(
    definition: Definition,
    obj: CaseObject,
    edge_id: str,
    *,
    field_values: Mapping[str, object] | None = None,
    documents_attached: Iterable[str] = (),
    actor: str | None = None,
    role: str | None = None,
    enforce_roles: bool = True,
    now: datetime | None = None,
) -> TransitionResult:
    fields = dict(field_values or {})
    documents = tuple(documents_attached)

    try:
        edge = definition.edge_by_id(edge_id)
        if edge is None:
            raise TransitionError("Invalid action", reason=TransitionFailure.INVALID_ACTION)
        if edge.source != obj.current_node_id:
            raise TransitionError(
                "Action not available from current state",
                reason=TransitionFailure.NOT_AVAILABLE,
            )
        if enforce_roles:
            _check_role(edge, role)
        _check_fields(edge, fields)
        _check_documents(edge, documents)

        from_node = definition.node_by_id(edge.source)
        to_node = definition.node_by_id(edge.target)
        if from_node is None or to_node is None:
            raise TransitionError(
                "Target node not found in SOP definition",
                reason=TransitionFailure.INVALID_ACTION,
            )
    except TransitionError as e:
        logger.info(
            "Transition refused",
            extra={"object_id": obj.id, "edge_id": edge_id, "reason": e.reason.value},
        )
        raise

    timestamp = now or datetime.now(UTC)
    notifications = compose_notifications(edge, from_node, to_node)

    entry = AuditEntry(
        id=str(uuid.uuid4()),
        timestamp=timestamp,
        object_id=obj.id,
        object_name=obj.name,
        from_node_id=from_node.id,
        from_status_label=from_node.display_label,
        action=edge.display_label,
        to_node_id=to_node.id,
        to_status_label=to_node.display_label,
        field_values=fields,
        actor=actor,
        role=role,
        documents_attached=documents,
        notifications=notifications,
    )

    updated = CaseObject(
        id=obj.id,
        definition_id=obj.definition_id,
        name=obj.name,
        color=obj.color,
        created_at=obj.created_at,
        current_node_id=to_node.id,
        path=(*obj.path, PathEntry(node_id=to_node.id, edge_id=edge.id, timestamp=timestamp)),
        audit=(*obj.audit, entry),
        is_complete=to_node.kind == NodeKind.END,
    )

    logger.debug(
        "Transition applied",
        extra={
            "object_id": obj.id,
            "edge_id": edge.id,
            "from_node_id": from_node.id,
            "to_node_id": to_node.id,
            "notifications": len(notifications),
        },
    )
    return TransitionResult(updated_object=updated, audit_entry=entry, notifications=notifications)
