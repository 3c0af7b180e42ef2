"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test connection configuration (statement_timeout)
  - Test instrumented connections (healthcheck leaves the connection idle)

Notes:
  - Uses mocking for ConnectionPool
  - Tests pool singleton behavior
"""

from unittest.mock import MagicMock, patch

import pytest

from auditdb.infrastructure.db.errors import (
    DatabaseConnectionError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from auditdb.infrastructure.db.instrumentation import (
    InstrumentedConnectionPool,
    TimedConnection,
)


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_wraps_connection_pool(self):
        """init_pool should create a ConnectionPool behind the instrumented facade."""
        from auditdb.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("auditdb.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            kwargs = MockPool.call_args.kwargs
            assert kwargs["min_size"] == 2
            assert kwargs["max_size"] == 10
            assert isinstance(result, InstrumentedConnectionPool)

        reset_pool()

    def test_init_pool_twice_raises_error(self):
        from auditdb.infrastructure.db.pool import init_pool, reset_pool

        reset_pool()

        with patch("auditdb.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=2, max_size=10)

            with pytest.raises(PoolAlreadyInitializedError, match="already initialized"):
                init_pool("postgresql://test", min_size=2, max_size=10)

        reset_pool()

    def test_get_pool_without_init_raises_error(self):
        from auditdb.infrastructure.db.pool import get_pool, reset_pool

        reset_pool()

        with pytest.raises(PoolNotInitializedError, match="not initialized"):
            get_pool()

    def test_close_pool_clears_singleton(self):
        from auditdb.infrastructure.db.pool import (
            close_pool,
            get_pool,
            init_pool,
            reset_pool,
        )

        reset_pool()

        with patch("auditdb.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=2, max_size=10)
            close_pool()

            mock_pool.close.assert_called_once()

            with pytest.raises(PoolNotInitializedError):
                get_pool()

        reset_pool()

    def test_close_pool_is_idempotent(self):
        from auditdb.infrastructure.db.pool import close_pool, reset_pool

        reset_pool()
        close_pool()
        close_pool()


@pytest.mark.unit
class TestConfigureConnection:
    def test_sets_statement_timeout_and_commits(self):
        from auditdb.infrastructure.db.pool import _configure_connection

        conn = MagicMock()

        _configure_connection(conn)

        conn.execute.assert_called_once_with("SET statement_timeout = 30000")
        conn.commit.assert_called_once()

    def test_zero_timeout_skips_set(self, monkeypatch):
        from auditdb.crosscutting.config import get_settings
        from auditdb.infrastructure.db.pool import _configure_connection

        monkeypatch.setenv("DB_STATEMENT_TIMEOUT_MS", "0")
        get_settings.cache_clear()
        try:
            conn = MagicMock()
            _configure_connection(conn)
            conn.execute.assert_not_called()
        finally:
            monkeypatch.delenv("DB_STATEMENT_TIMEOUT_MS")
            get_settings.cache_clear()


@pytest.mark.unit
class TestInstrumentation:
    def _pool_with(self, conn, *, healthcheck=True):
        inner_ctx = MagicMock()
        inner_ctx.__enter__.return_value = conn
        inner_ctx.__exit__.return_value = False
        inner_pool = MagicMock()
        inner_pool.connection.return_value = inner_ctx
        return (
            InstrumentedConnectionPool(inner_pool, healthcheck=healthcheck),
            inner_ctx,
        )

    def test_healthcheck_rolls_back_to_idle(self):
        conn = MagicMock()
        pool, _ = self._pool_with(conn)

        with pool.connection() as timed:
            assert isinstance(timed, TimedConnection)

        conn.execute.assert_called_once_with("SELECT 1")
        conn.rollback.assert_called_once()

    def test_failed_healthcheck_releases_connection(self):
        conn = MagicMock()
        conn.execute.side_effect = RuntimeError("server closed the connection")
        pool, inner_ctx = self._pool_with(conn)

        with pytest.raises(DatabaseConnectionError, match="healthcheck"):
            with pool.connection():
                pass

        inner_ctx.__exit__.assert_called_once()

    def test_acquire_failure_is_connection_error(self):
        inner_ctx = MagicMock()
        inner_ctx.__enter__.side_effect = TimeoutError("pool exhausted")
        inner_pool = MagicMock()
        inner_pool.connection.return_value = inner_ctx
        pool = InstrumentedConnectionPool(inner_pool)

        with pytest.raises(DatabaseConnectionError, match="acquire"):
            with pool.connection():
                pass

    def test_timed_connection_delegates(self):
        conn = MagicMock()
        conn.execute.return_value = "cursor"
        timed = TimedConnection(conn, slow_query_seconds=10.0)

        assert timed.execute("SELECT 1", ()) == "cursor"
        timed.commit()

        conn.execute.assert_called_once_with("SELECT 1", ())
        conn.commit.assert_called_once()

    def test_slow_query_is_logged(self):
        conn = MagicMock()
        timed = TimedConnection(conn, slow_query_seconds=0.0)

        with patch("auditdb.infrastructure.db.instrumentation.logger") as mock_logger:
            timed.execute("UPDATE authors SET name = %s", ("x",))

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["extra"]["kind"] == "UPDATE"
