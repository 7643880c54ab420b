"""SOP workflow runtime.

Stateless operations over immutable values:
- `validate` a definition graph before publishing it
- `create_object` to start a case on the Start node
- `transition` a case along one action, producing an audit entry and the
  notifications the action triggers
- `format_notification` to preview what a notification would say
- `estimate_progress` from the shortest Start-to-End path
"""

from .errors import (
    ConfigurationError,
    DefinitionError,
    SopRuntimeError,
    TransitionError,
    TransitionFailure,
)
from .factory import create_object
from .model import (
    AuditEntry,
    CaseObject,
    Channel,
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
    NotificationSpec,
    PathEntry,
    PropertyRequirement,
    Recipient,
)
from .notifications import NotificationPreview, format_notification, preview_audit_entry
from .progress import ProgressEstimate, estimate_progress
from .transitions import AvailableAction, TransitionResult, available_actions, transition
from .validator import ValidationResult, validate

__all__ = [
    "AuditEntry",
    "AvailableAction",
    "CaseObject",
    "Channel",
    "ConfigurationError",
    "Definition",
    "DefinitionError",
    "DocumentRequirement",
    "Edge",
    "EdgeNotificationEvent",
    "FieldRequirement",
    "Node",
    "NodeKind",
    "NodeNotificationEvent",
    "NotificationEvent",
    "NotificationKind",
    "NotificationPreview",
    "NotificationSpec",
    "PathEntry",
    "ProgressEstimate",
    "PropertyRequirement",
    "Recipient",
    "SopRuntimeError",
    "TransitionError",
    "TransitionFailure",
    "TransitionResult",
    "ValidationResult",
    "available_actions",
    "create_object",
    "estimate_progress",
    "format_notification",
    "preview_audit_entry",
    "transition",
    "validate",
]
