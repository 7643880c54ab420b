from __future__ import annotations

from enum import Enum


class SopRuntimeError(Exception):
    """Base class for errors raised by the SOP runtime."""


class DefinitionError(SopRuntimeError, ValueError):
    """A definition document could not be turned into a usable graph."""


class ConfigurationError(SopRuntimeError, ValueError):
    """A definition lacks something a case needs to exist (e.g. a Start node)."""


class TransitionFailure(str, Enum):
    INVALID_ACTION = "invalid_action"
    NOT_AVAILABLE = "not_available"
    ROLE_NOT_AUTHORIZED = "role_not_authorized"
    MISSING_FIELDS = "missing_fields"
    MISSING_DOCUMENTS = "missing_documents"


class TransitionError(SopRuntimeError, ValueError):
    """Raised before any output is produced when an action cannot be taken."""

    def __init__(
        self, message: str, *, reason: TransitionFailure, missing: tuple[str, ...] = ()
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.missing = missing
