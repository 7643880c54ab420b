"""Structural checks run before a definition is published.

Problems are reported, never raised: an invalid graph can still be edited.
"""

from __future__ import annotations

from dataclasses import dataclass

from .model import Definition, NodeKind


@dataclass(frozen=True, slots=True)
class ValidationResult:
    errors: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_json(self) -> dict[str, object]:
        return {"valid": self.valid, "errors": list(self.errors)}


def validate(definition: Definition) -> ValidationResult:
    errors: list[str] = []

    starts = definition.start_nodes
    if not starts:
        errors.append("SOP must have at least one Start node")
    elif len(starts) > 1:
        errors.append("SOP should have only one Start node")

    if not definition.end_nodes:
        errors.append("SOP must have at least one End node")

    for node in starts:
        if not definition.outgoing(node.id):
            errors.append(f'Start node "{node.display_label}" has no outgoing connections')

    for node in definition.end_nodes:
        if not definition.incoming(node.id):
            errors.append(f'End node "{node.display_label}" has no incoming connections')

    for node in definition.nodes:
        if node.kind in (NodeKind.START, NodeKind.END):
            continue
        if not definition.incoming(node.id) and not definition.outgoing(node.id):
            errors.append(f'Node "{node.display_label}" is not connected to anything')

    return ValidationResult(errors=tuple(errors))
