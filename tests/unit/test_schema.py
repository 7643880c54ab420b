"""Unit tests for reading and writing definition documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from sop_runtime.engine.errors import DefinitionError
from sop_runtime.engine.model import (
    Channel,
    EdgeNotificationEvent,
    NodeKind,
    NodeNotificationEvent,
    Recipient,
)
from sop_runtime.engine.samples import PURCHASE_ORDER_APPROVAL, purchase_order_approval
from sop_runtime.engine.schema import dump_definition, load_definition, parse_definition
from sop_runtime.engine.validator import validate


def _doc(**overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "id": "d1",
        "name": "Doc",
        "nodes": [
            {"id": "s", "type": "start", "data": {"label": "Start"}},
            {
                "id": "a",
                "type": "status",
                "data": {
                    "label": "Active",
                    "slaHours": 4,
                    "subSopId": "other-sop",
                    "requiredProperties": [{"propertyName": "Owner", "required": True}],
                    "notifications": {
                        "onExit": {
                            "enabled": True,
                            "channels": ["sms", "webhook"],
                            "recipient": "custom",
                            "template": "bye {objectName}",
                        }
                    },
                },
            },
            {"id": "e", "type": "end", "data": {"label": "End"}},
        ],
        "edges": [
            {
                "id": "sa",
                "source": "s",
                "target": "a",
                "data": {
                    "label": "Open",
                    "requiredRoles": ["Clerk"],
                    "requiredFields": ["Reason", {"name": "Amount", "type": "number"}],
                    "requiredDocuments": [{"name": "Form", "type": "pdf"}],
                    "notifications": {"onTrigger": {"enabled": True}},
                },
            },
            {"id": "ae", "source": "a", "target": "e"},
        ],
    }
    doc.update(overrides)
    return doc


def test_parse_definition_reads_designer_document() -> None:
    definition = parse_definition(_doc())

    active = definition.node_by_id("a")
    assert active is not None
    assert active.kind is NodeKind.STATUS
    assert active.sla_hours == 4
    assert active.sub_sop_id == "other-sop"
    assert active.required_properties[0].property_name == "Owner"
    on_exit = active.notification(NodeNotificationEvent.ON_EXIT)
    assert on_exit is not None
    assert on_exit.channels == (Channel.SMS, Channel.WEBHOOK)
    assert on_exit.recipient is Recipient.CUSTOM

    edge = definition.edge_by_id("sa")
    assert edge is not None
    assert edge.required_roles == ("Clerk",)
    assert [(f.name, f.type) for f in edge.required_fields] == [
        ("Reason", "text"),
        ("Amount", "number"),
    ]
    assert edge.required_documents[0].name == "Form"
    on_trigger = edge.notification(EdgeNotificationEvent.ON_TRIGGER)
    assert on_trigger is not None
    assert on_trigger.channels == (Channel.EMAIL,)

    bare = definition.edge_by_id("ae")
    assert bare is not None
    assert bare.display_label == "Continue"


def test_unknown_notification_event_is_rejected() -> None:
    doc = _doc()
    doc["nodes"][1]["data"]["notifications"] = {"onEntr": {"enabled": True}}

    with pytest.raises(DefinitionError):
        parse_definition(doc)


def test_edge_notification_keys_are_closed() -> None:
    doc = _doc()
    doc["edges"][0]["data"]["notifications"] = {"onEnter": {"enabled": True}}

    with pytest.raises(DefinitionError):
        parse_definition(doc)


def test_unknown_node_type_is_rejected() -> None:
    doc = _doc()
    doc["nodes"][1]["type"] = "gateway"

    with pytest.raises(DefinitionError):
        parse_definition(doc)


def test_dangling_edge_is_rejected() -> None:
    doc = _doc()
    doc["edges"][1]["target"] = "missing"

    with pytest.raises(DefinitionError, match='unknown node "missing"'):
        parse_definition(doc)


def test_duplicate_ids_are_rejected() -> None:
    doc = _doc()
    doc["nodes"].append({"id": "a", "type": "status"})

    with pytest.raises(DefinitionError, match="Duplicate node ids: a"):
        parse_definition(doc)


def test_dump_then_parse_preserves_definition() -> None:
    definition = parse_definition(_doc())
    assert parse_definition(dump_definition(definition)) == definition


def test_load_definition_from_file(tmp_path: Path) -> None:
    path = tmp_path / "po.json"
    path.write_text(json.dumps(PURCHASE_ORDER_APPROVAL), encoding="utf-8")

    definition = load_definition(path)

    assert definition.name == "Purchase Order Approval"
    assert len(definition.nodes) == 11


def test_load_definition_rejects_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DefinitionError):
        load_definition(path)


def test_sample_definition_is_valid() -> None:
    definition = purchase_order_approval()
    assert validate(definition).valid
    assert [n.id for n in definition.end_nodes] == ["end-completed", "end-rejected"]
