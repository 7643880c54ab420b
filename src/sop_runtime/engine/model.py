"""Immutable SOP definition and case values.

A `Definition` is the graph one SOP consists of: nodes are statuses, edges are
actions. A `CaseObject` is one instance travelling through that graph. Both are
plain frozen values; nothing here performs a transition.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType


class NodeKind(str, Enum):
    START = "start"
    STATUS = "status"
    DECISION = "decision"
    END = "end"


class Channel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    WEBHOOK = "webhook"
    IN_APP = "in_app"


class Recipient(str, Enum):
    OWNER = "owner"
    ASSIGNEE = "assignee"
    ADMIN = "admin"
    CUSTOM = "custom"


class NodeNotificationEvent(str, Enum):
    ON_ENTER = "onEnter"
    ON_EXIT = "onExit"
    ON_TIMEOUT = "onTimeout"


class EdgeNotificationEvent(str, Enum):
    ON_TRIGGER = "onTrigger"


class NotificationKind(str, Enum):
    ACTION = "action"
    NODE_EXIT = "node-exit"
    NODE_ENTER = "node-enter"


DEFAULT_ACTION_LABEL = "Continue"


def _frozen_mapping(value: Mapping) -> Mapping:
    return MappingProxyType(dict(value))


@dataclass(frozen=True, slots=True)
class NotificationSpec:
    enabled: bool = False
    channels: tuple[Channel, ...] = (Channel.EMAIL,)
    recipient: Recipient = Recipient.OWNER
    template: str = ""

    def to_json(self) -> dict[str, object]:
        return {
            "enabled": self.enabled,
            "channels": [c.value for c in self.channels],
            "recipient": self.recipient.value,
            "template": self.template,
        }


@dataclass(frozen=True, slots=True)
class PropertyRequirement:
    property_name: str
    required: bool = True


@dataclass(frozen=True, slots=True)
class FieldRequirement:
    name: str
    type: str = "text"


@dataclass(frozen=True, slots=True)
class DocumentRequirement:
    name: str
    type: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class Node:
    """A status in the graph.

    `sla_hours` is advisory and `sub_sop_id` is an opaque reference to another
    definition; neither is interpreted by the runtime.
    """

    id: str
    kind: NodeKind
    label: str = ""
    description: str = ""
    sla_hours: float | None = None
    required_properties: tuple[PropertyRequirement, ...] = ()
    notifications: Mapping[NodeNotificationEvent, NotificationSpec] = field(
        default_factory=dict, hash=False
    )
    sub_sop_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "notifications", _frozen_mapping(self.notifications))

    @property
    def display_label(self) -> str:
        return self.label or self.id

    def notification(self, event: NodeNotificationEvent) -> NotificationSpec | None:
        return self.notifications.get(event)


@dataclass(frozen=True, slots=True)
class Edge:
    """An action moving a case from `source` to `target`."""

    id: str
    source: str
    target: str
    label: str = ""
    description: str = ""
    required_roles: tuple[str, ...] = ()
    required_fields: tuple[FieldRequirement, ...] = ()
    required_documents: tuple[DocumentRequirement, ...] = ()
    notifications: Mapping[EdgeNotificationEvent, NotificationSpec] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "notifications", _frozen_mapping(self.notifications))

    @property
    def display_label(self) -> str:
        return self.label or DEFAULT_ACTION_LABEL

    def notification(self, event: EdgeNotificationEvent) -> NotificationSpec | None:
        return self.notifications.get(event)


@dataclass(frozen=True, slots=True)
class Definition:
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    id: str = ""
    name: str = ""
    description: str = ""

    def node_by_id(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def edge_by_id(self, edge_id: str) -> Edge | None:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def nodes_of_kind(self, kind: NodeKind) -> list[Node]:
        return [n for n in self.nodes if n.kind == kind]

    @property
    def start_nodes(self) -> list[Node]:
        return self.nodes_of_kind(NodeKind.START)

    @property
    def end_nodes(self) -> list[Node]:
        return self.nodes_of_kind(NodeKind.END)

    @property
    def start_node(self) -> Node | None:
        starts = self.start_nodes
        return starts[0] if starts else None

    def outgoing(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.source == node_id]

    def incoming(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.target == node_id]


@dataclass(frozen=True, slots=True)
class PathEntry:
    node_id: str
    edge_id: str | None
    timestamp: datetime

    def to_json(self) -> dict[str, object]:
        return {
            "node_id": self.node_id,
            "edge_id": self.edge_id,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """A notification triggered by one transition.

    `context` holds the substitution values captured when the event fired.
    """

    kind: NotificationKind
    event_key: NodeNotificationEvent | EdgeNotificationEvent
    spec: NotificationSpec
    context: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", _frozen_mapping(self.context))

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"kind": self.kind.value, "event": self.event_key.value}
        out.update(self.spec.to_json())
        out["context"] = dict(self.context)
        return out


@dataclass(frozen=True, slots=True)
class AuditEntry:
    id: str
    timestamp: datetime
    object_id: str
    object_name: str
    from_node_id: str
    from_status_label: str
    action: str
    to_node_id: str
    to_status_label: str
    field_values: Mapping[str, object] = field(default_factory=dict, hash=False)
    actor: str | None = None
    role: str | None = None
    documents_attached: tuple[str, ...] = ()
    notifications: tuple[NotificationEvent, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "field_values", _frozen_mapping(self.field_values))

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "object_id": self.object_id,
            "object_name": self.object_name,
            "from_node_id": self.from_node_id,
            "from_status": self.from_status_label,
            "action": self.action,
            "to_node_id": self.to_node_id,
            "to_status": self.to_status_label,
            "field_values": dict(self.field_values),
            "actor": self.actor,
            "role": self.role,
            "documents_attached": list(self.documents_attached),
            "notifications": [n.to_json() for n in self.notifications],
        }


@dataclass(frozen=True, slots=True)
class CaseObject:
    """A case travelling through a definition.

    Invariants: ``len(path) == len(audit) + 1``, ``path[0].edge_id is None`` and
    `is_complete` is true exactly when the current node is an end node.
    """

    id: str
    definition_id: str
    name: str
    current_node_id: str
    path: tuple[PathEntry, ...]
    audit: tuple[AuditEntry, ...] = ()
    is_complete: bool = False
    color: str = ""
    created_at: datetime | None = None

    @property
    def steps_taken(self) -> int:
        return max(len(self.path) - 1, 0)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "definition_id": self.definition_id,
            "name": self.name,
            "color": self.color,
            "current_node_id": self.current_node_id,
            "path": [p.to_json() for p in self.path],
            "audit": [a.to_json() for a in self.audit],
            "is_complete": self.is_complete,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
