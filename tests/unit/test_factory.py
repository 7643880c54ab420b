"""Unit tests for case creation."""

from __future__ import annotations

from datetime import datetime

import pytest

from sop_runtime.engine.errors import ConfigurationError
from sop_runtime.engine.factory import OBJECT_COLORS, create_object, default_object_name
from sop_runtime.engine.model import Definition, Node, NodeKind


def test_create_object_starts_on_start_node(
    review_definition: Definition, fixed_now: datetime
) -> None:
    obj = create_object(review_definition, "PO-1", "#fff", now=fixed_now)

    assert obj.name == "PO-1"
    assert obj.color == "#fff"
    assert obj.definition_id == "review"
    assert obj.current_node_id == "S"
    assert len(obj.path) == 1
    assert obj.path[0].node_id == "S"
    assert obj.path[0].edge_id is None
    assert obj.path[0].timestamp == fixed_now
    assert obj.audit == ()
    assert obj.is_complete is False


def test_create_object_generates_name_and_color(review_definition: Definition) -> None:
    a = create_object(review_definition)
    b = create_object(review_definition)

    assert a.name.startswith("Object ")
    assert a.color in OBJECT_COLORS
    assert a.id != b.id


def test_default_object_name_is_base36_millis(fixed_now: datetime) -> None:
    millis = int(fixed_now.timestamp() * 1000)
    prefix, suffix = default_object_name(fixed_now).split(" ")

    assert prefix == "Object"
    assert suffix == suffix.upper()
    assert int(suffix, 36) == millis


def test_create_object_without_start_node_fails() -> None:
    definition = Definition(nodes=(Node(id="E", kind=NodeKind.END, label="End"),), edges=())

    with pytest.raises(ConfigurationError, match="Start node"):
        create_object(definition, "x")
