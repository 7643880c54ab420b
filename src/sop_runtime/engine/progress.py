from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from .model import CaseObject, Definition, NodeKind


@dataclass(frozen=True, slots=True)
class ProgressEstimate:
    """How far a case has come.

    `end_reachable` is false when no End node can be reached from Start; `total`
    is then the node count of the definition, an upper bound rather than a
    distance.
    """

    steps: int
    percentage: int
    total: int | None = None
    end_reachable: bool = True

    def to_json(self) -> dict[str, object]:
        return {
            "steps": self.steps,
            "total": self.total,
            "percentage": self.percentage,
            "end_reachable": self.end_reachable,
        }


def shortest_path_to_end(definition: Definition) -> int | None:
    """Minimal hop count from the Start node to any End node, or None."""

    start = definition.start_node
    if start is None:
        return None

    queue: deque[tuple[str, int]] = deque([(start.id, 0)])
    visited: set[str] = set()
    while queue:
        node_id, depth = queue.popleft()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = definition.node_by_id(node_id)
        if node is not None and node.kind == NodeKind.END:
            return depth

        for edge in definition.outgoing(node_id):
            if edge.target not in visited:
                queue.append((edge.target, depth + 1))
    return None


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def estimate_progress(definition: Definition, obj: CaseObject) -> ProgressEstimate:
    if not obj.path:
        return ProgressEstimate(steps=0, percentage=0)

    total = shortest_path_to_end(definition)
    end_reachable = total is not None
    if total is None:
        total = len(definition.nodes)

    steps = obj.steps_taken
    if total <= 0:
        percentage = 100 if obj.is_complete else 0
    else:
        percentage = min(100, _round_half_up(steps / total * 100))
    return ProgressEstimate(
        steps=steps, total=total, percentage=percentage, end_reachable=end_reachable
    )
