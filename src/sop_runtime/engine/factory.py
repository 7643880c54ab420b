from __future__ import annotations

import logging
import random
import uuid
from datetime import UTC, datetime

from .errors import ConfigurationError
from .model import CaseObject, Definition, PathEntry

logger = logging.getLogger(__name__)

OBJECT_COLORS: tuple[str, ...] = (
    "#8B5CF6",
    "#3b82f6",
    "#06b6d4",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#ec4899",
    "#6366f1",
)

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def default_object_name(now: datetime) -> str:
    return f"Object {_base36(int(now.timestamp() * 1000))}"


def create_object(
    definition: Definition,
    name: str | None = None,
    color: str | None = None,
    *,
    now: datetime | None = None,
) -> CaseObject:
    """Create a case positioned on the definition's Start node."""

    start = definition.start_node
    if start is None:
        raise ConfigurationError("SOP has no Start node")

    created = now or datetime.now(UTC)
    obj = CaseObject(
        id=str(uuid.uuid4()),
        definition_id=definition.id,
        name=name or default_object_name(created),
        color=color or random.choice(OBJECT_COLORS),
        current_node_id=start.id,
        path=(PathEntry(node_id=start.id, edge_id=None, timestamp=created),),
        audit=(),
        is_complete=False,
        created_at=created,
    )
    logger.debug(
        "Case created",
        extra={"object_id": obj.id, "definition_id": definition.id, "node_id": start.id},
    )
    return obj
