"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from sop_runtime.engine.model import (
    Definition,
    Edge,
    FieldRequirement,
    Node,
    NodeKind,
)


def chain_definition(hops: int) -> Definition:
    """Start -> S1 -> ... -> End with exactly `hops` edges."""

    nodes = [Node(id="n0", kind=NodeKind.START, label="Start")]
    for i in range(1, hops):
        nodes.append(Node(id=f"n{i}", kind=NodeKind.STATUS, label=f"Step {i}"))
    nodes.append(Node(id=f"n{hops}", kind=NodeKind.END, label="End"))
    edges = [
        Edge(id=f"e{i + 1}", source=f"n{i}", target=f"n{i + 1}", label=f"Go {i + 1}")
        for i in range(hops)
    ]
    return Definition(id="chain", name="Chain", nodes=tuple(nodes), edges=tuple(edges))


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def review_definition() -> Definition:
    """Start -> Draft -> Review -> End, with Justification required to submit."""

    return Definition(
        id="review",
        name="Review flow",
        nodes=(
            Node(id="S", kind=NodeKind.START, label="Start"),
            Node(id="D", kind=NodeKind.STATUS, label="Draft"),
            Node(id="R", kind=NodeKind.STATUS, label="Review"),
            Node(id="E", kind=NodeKind.END, label="End"),
        ),
        edges=(
            Edge(id="e1", source="S", target="D", label="Create"),
            Edge(
                id="e2",
                source="D",
                target="R",
                label="Submit",
                required_fields=(FieldRequirement(name="Justification"),),
            ),
            Edge(id="e3", source="R", target="E", label="Close"),
        ),
    )


@pytest.fixture
def cyclic_definition() -> Definition:
    """A start feeding a two-status loop with no End node anywhere."""

    return Definition(
        id="loop",
        nodes=(
            Node(id="S", kind=NodeKind.START, label="Start"),
            Node(id="A", kind=NodeKind.STATUS, label="A"),
            Node(id="B", kind=NodeKind.STATUS, label="B"),
        ),
        edges=(
            Edge(id="sa", source="S", target="A"),
            Edge(id="ab", source="A", target="B"),
            Edge(id="ba", source="B", target="A"),
        ),
    )


@pytest.fixture
def make_chain() -> Callable[[int], Definition]:
    return chain_definition
