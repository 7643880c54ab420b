"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest

from sop_runtime.logging import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_formatter_lifts_extra_fields() -> None:
    record = logging.LogRecord(
        "sop_runtime.engine.transitions", logging.INFO, __file__, 1, "Transition refused", None, None
    )
    record.edge_id = "e2"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "sop_runtime.engine.transitions"
    assert payload["message"] == "Transition refused"
    assert payload["extra"] == {"edge_id": "e2"}


def test_configure_logging_writes_json(restore_root_logger: None) -> None:
    stream = io.StringIO()
    configure_logging("debug", stream=stream)

    logging.getLogger("sop_runtime.test").debug("hello", extra={"object_id": "o1"})

    line = stream.getvalue().strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "hello"
    assert payload["extra"]["object_id"] == "o1"
