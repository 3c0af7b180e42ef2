"""
Name: Transactional Operation Wrapper Tests

Responsibilities:
  - Commit on success, rollback on any failure
  - Original error survives a failing rollback
  - Statement errors carry the transaction name and phase
  - Begin refuses a connection that is already inside a transaction
"""

import pytest
from psycopg.pq import TransactionStatus

from auditdb.crosscutting.exceptions import DatabaseError, NotFoundError
from auditdb.infrastructure.db.transaction import run_in_transaction

pytestmark = pytest.mark.unit


def test_success_commits_and_returns_result(fake_conn):
    def action(executor):
        executor.execute("INSERT INTO events VALUES (%s)", ("x",), phase="insert event")
        return 42

    assert run_in_transaction(fake_conn, action, name="t") == 42
    assert fake_conn.commits == 1
    assert fake_conn.rollbacks == 0
    assert fake_conn.info.transaction_status == TransactionStatus.IDLE


def test_action_error_rolls_back_and_propagates(fake_conn):
    def action(executor):
        executor.execute("INSERT INTO events VALUES (1)", phase="insert event")
        raise NotFoundError("authors", 1)

    with pytest.raises(NotFoundError):
        run_in_transaction(fake_conn, action, name="t")

    assert fake_conn.commits == 0
    assert fake_conn.rollbacks == 1


def test_statement_error_is_wrapped_with_phase(fake_conn):
    fake_conn.on("INSERT INTO events", error=RuntimeError("disk full"))

    def action(executor):
        executor.execute("INSERT INTO events VALUES (1)", phase="insert event")

    with pytest.raises(DatabaseError) as exc_info:
        run_in_transaction(fake_conn, action, name="create author")

    assert str(exc_info.value) == "create author: insert event: disk full"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.original_error is exc_info.value.__cause__
    assert fake_conn.rollbacks == 1


def test_rollback_failure_does_not_mask_original_error(fake_conn):
    fake_conn.rollback_error = RuntimeError("connection lost")

    def action(executor):
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom") as exc_info:
        run_in_transaction(fake_conn, action, name="t")

    assert any("rollback failed" in note for note in exc_info.value.__notes__)


def test_interrupt_rolls_back(fake_conn):
    def action(executor):
        executor.execute("INSERT INTO events VALUES (1)", phase="insert event")
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        run_in_transaction(fake_conn, action, name="t")

    assert fake_conn.rollbacks == 1
    assert fake_conn.commits == 0


def test_commit_failure_becomes_database_error(fake_conn):
    fake_conn.commit_error = RuntimeError("serialization failure")

    with pytest.raises(DatabaseError, match="t: commit transaction"):
        run_in_transaction(fake_conn, lambda executor: None, name="t")


def test_begin_requires_idle_connection(fake_conn):
    fake_conn.info.transaction_status = TransactionStatus.INTRANS

    with pytest.raises(DatabaseError, match="t: begin transaction"):
        run_in_transaction(fake_conn, lambda executor: None, name="t")

    assert fake_conn.executed == []


def test_fetch_helpers_return_rows(fake_conn):
    fake_conn.on("SELECT name FROM users", rows=[("alice",), ("bob",)])

    def action(executor):
        one = executor.fetchone("SELECT name FROM users", phase="query users")
        many = executor.fetchall("SELECT name FROM users", phase="query users")
        return one, many

    one, many = run_in_transaction(fake_conn, action, name="t")

    assert one == ("alice",)
    assert many == [("alice",), ("bob",)]


def test_rowcount_unavailable_is_database_error(fake_conn):
    fake_conn.on("DELETE FROM authors", rowcount=-1)

    def action(executor):
        return executor.rowcount("DELETE FROM authors WHERE id = %s", (1,), phase="d")

    with pytest.raises(DatabaseError, match="affected rows"):
        run_in_transaction(fake_conn, action, name="t")
