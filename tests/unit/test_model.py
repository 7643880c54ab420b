"""Unit tests for the definition and case values."""

from __future__ import annotations

import pytest

from sop_runtime.engine.model import (
    Definition,
    NodeNotificationEvent,
    NotificationSpec,
)


def test_nodes_and_edges_can_be_held_in_sets(review_definition: Definition) -> None:
    assert len(set(review_definition.nodes)) == 4
    assert len(set(review_definition.edges)) == 3
    assert len({review_definition, review_definition}) == 1


def test_node_notifications_are_read_only(review_definition: Definition) -> None:
    node = review_definition.nodes[1]

    with pytest.raises(TypeError):
        node.notifications[NodeNotificationEvent.ON_ENTER] = NotificationSpec()  # type: ignore[index]
    assert node.notification(NodeNotificationEvent.ON_ENTER) is None
