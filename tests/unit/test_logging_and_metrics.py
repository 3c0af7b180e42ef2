"""
Name: Logging / Metrics Tests

Responsibilities:
  - JSON log lines carry request context and redact connection strings
  - Transaction outcomes and normalized endpoints reach Prometheus
"""

import json
import logging

import pytest

from auditdb.context import clear_context, set_request_context
from auditdb.crosscutting.logger import JSONFormatter
from auditdb.crosscutting.metrics import (
    _normalize_endpoint,
    get_metrics_response,
    record_transaction,
)

pytestmark = pytest.mark.unit


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("auditdb", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_context():
    set_request_context(request_id="req-1", method="GET", path="/authors")
    try:
        line = JSONFormatter().format(_record("hello", user="alice"))
    finally:
        clear_context()

    payload = json.loads(line)
    assert payload["message"] == "hello"
    assert payload["request_id"] == "req-1"
    assert payload["method"] == "GET"
    assert payload["user"] == "alice"


def test_json_formatter_redacts_database_url():
    line = JSONFormatter().format(
        _record("boot", database_url="postgresql://u:secret@db/x")
    )

    assert "secret" not in line


def test_transaction_outcomes_are_counted():
    record_transaction("create author", "committed")

    body, _ = get_metrics_response()

    assert b'auditdb_transactions_total{name="create author",outcome="committed"}' in body


def test_numeric_path_segments_are_normalized():
    assert _normalize_endpoint("/authors/12/books/7") == "/authors/{id}/books/{id}"
