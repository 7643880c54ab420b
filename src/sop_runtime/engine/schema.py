"""Read and write the designer's JSON definition document.

The document mirrors what the canvas stores: nodes and edges carry their
business attributes under a ``data`` object with camelCase keys. Parsing goes
through pydantic so that unknown node types, channels or notification event
keys are rejected instead of silently ignored.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import DefinitionError
from .model import (
    Channel,
    Definition,
    DocumentRequirement,
    Edge,
    EdgeNotificationEvent,
    FieldRequirement,
    Node,
    NodeKind,
    NodeNotificationEvent,
    NotificationSpec,
    PropertyRequirement,
    Recipient,
)


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NotificationSpecDoc(_Document):
    enabled: bool = False
    channels: list[Channel] = Field(default_factory=lambda: [Channel.EMAIL])
    recipient: Recipient = Recipient.OWNER
    template: str = ""

    def to_spec(self) -> NotificationSpec:
        return NotificationSpec(
            enabled=self.enabled,
            channels=tuple(self.channels),
            recipient=self.recipient,
            template=self.template,
        )


class PropertyRequirementDoc(_Document):
    property_name: str = Field(alias="propertyName")
    required: bool = True


class FieldRequirementDoc(_Document):
    name: str
    type: str = "text"


class DocumentRequirementDoc(_Document):
    name: str
    type: str = ""
    description: str = ""


class NodeDataDoc(_Document):
    label: str = ""
    description: str = ""
    sla_hours: float | None = Field(default=None, alias="slaHours")
    required_properties: list[PropertyRequirementDoc] = Field(
        default_factory=list, alias="requiredProperties"
    )
    notifications: dict[NodeNotificationEvent, NotificationSpecDoc] = Field(default_factory=dict)
    sub_sop_id: str | None = Field(default=None, alias="subSopId")


class EdgeDataDoc(_Document):
    label: str = ""
    description: str = ""
    required_roles: list[str] = Field(default_factory=list, alias="requiredRoles")
    required_fields: list[FieldRequirementDoc] = Field(
        default_factory=list, alias="requiredFields"
    )
    required_documents: list[DocumentRequirementDoc] = Field(
        default_factory=list, alias="requiredDocuments"
    )
    notifications: dict[EdgeNotificationEvent, NotificationSpecDoc] = Field(default_factory=dict)

    @field_validator("required_fields", mode="before")
    @classmethod
    def _accept_plain_field_names(cls, value: Any) -> Any:
        # Older documents list required fields as bare names.
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value


class NodeDoc(_Document):
    id: str
    type: NodeKind
    data: NodeDataDoc = Field(default_factory=NodeDataDoc)

    def to_node(self) -> Node:
        d = self.data
        return Node(
            id=self.id,
            kind=self.type,
            label=d.label,
            description=d.description,
            sla_hours=d.sla_hours,
            required_properties=tuple(
                PropertyRequirement(property_name=p.property_name, required=p.required)
                for p in d.required_properties
            ),
            notifications={k: v.to_spec() for k, v in d.notifications.items()},
            sub_sop_id=d.sub_sop_id,
        )


class EdgeDoc(_Document):
    id: str
    source: str
    target: str
    data: EdgeDataDoc = Field(default_factory=EdgeDataDoc)

    def to_edge(self) -> Edge:
        d = self.data
        return Edge(
            id=self.id,
            source=self.source,
            target=self.target,
            label=d.label,
            description=d.description,
            required_roles=tuple(d.required_roles),
            required_fields=tuple(FieldRequirement(name=f.name, type=f.type) for f in d.required_fields),
            required_documents=tuple(
                DocumentRequirement(name=doc.name, type=doc.type, description=doc.description)
                for doc in d.required_documents
            ),
            notifications={k: v.to_spec() for k, v in d.notifications.items()},
        )


class DefinitionDoc(_Document):
    id: str = ""
    name: str = ""
    description: str = ""
    nodes: list[NodeDoc] = Field(default_factory=list)
    edges: list[EdgeDoc] = Field(default_factory=list)


def _duplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for item in ids:
        if item in seen and item not in dupes:
            dupes.append(item)
        seen.add(item)
    return dupes


def parse_definition(raw: dict[str, Any]) -> Definition:
    """Build a `Definition` from a decoded JSON document.

    Raises:
        DefinitionError: the document is malformed, ids repeat, or an edge points
            at a node that does not exist.
    """

    try:
        doc = DefinitionDoc.model_validate(raw)
    except ValidationError as e:
        raise DefinitionError(f"Invalid SOP definition: {e}") from e

    node_ids = [n.id for n in doc.nodes]
    dupes = _duplicates(node_ids)
    if dupes:
        raise DefinitionError(f"Duplicate node ids: {', '.join(dupes)}")
    dupes = _duplicates([e.id for e in doc.edges])
    if dupes:
        raise DefinitionError(f"Duplicate edge ids: {', '.join(dupes)}")

    known = set(node_ids)
    for edge in doc.edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in known:
                raise DefinitionError(f'Edge "{edge.id}" references unknown node "{endpoint}"')

    return Definition(
        id=doc.id,
        name=doc.name,
        description=doc.description,
        nodes=tuple(n.to_node() for n in doc.nodes),
        edges=tuple(e.to_edge() for e in doc.edges),
    )


def load_definition(path: Path) -> Definition:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DefinitionError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise DefinitionError(f"{path} does not contain a definition object")
    return parse_definition(raw)


def _notifications_json(notifications: Any) -> dict[str, object]:
    return {event.value: spec.to_json() for event, spec in notifications.items()}


def dump_definition(definition: Definition) -> dict[str, object]:
    """Inverse of `parse_definition`."""

    nodes: list[dict[str, object]] = []
    for node in definition.nodes:
        data: dict[str, object] = {"label": node.label, "description": node.description}
        if node.sla_hours is not None:
            data["slaHours"] = node.sla_hours
        if node.required_properties:
            data["requiredProperties"] = [
                {"propertyName": p.property_name, "required": p.required}
                for p in node.required_properties
            ]
        if node.notifications:
            data["notifications"] = _notifications_json(node.notifications)
        if node.sub_sop_id is not None:
            data["subSopId"] = node.sub_sop_id
        nodes.append({"id": node.id, "type": node.kind.value, "data": data})

    edges: list[dict[str, object]] = []
    for edge in definition.edges:
        edge_data: dict[str, object] = {"label": edge.label, "description": edge.description}
        if edge.required_roles:
            edge_data["requiredRoles"] = list(edge.required_roles)
        if edge.required_fields:
            edge_data["requiredFields"] = [
                {"name": f.name, "type": f.type} for f in edge.required_fields
            ]
        if edge.required_documents:
            edge_data["requiredDocuments"] = [
                {"name": d.name, "type": d.type, "description": d.description}
                for d in edge.required_documents
            ]
        if edge.notifications:
            edge_data["notifications"] = _notifications_json(edge.notifications)
        edges.append(
            {"id": edge.id, "source": edge.source, "target": edge.target, "data": edge_data}
        )

    return {
        "id": definition.id,
        "name": definition.name,
        "description": definition.description,
        "nodes": nodes,
        "edges": edges,
    }
