"""Infra DB: pool + errores tipados + transacciones."""

from .errors import (
    DatabaseConnectionError,
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .pool import close_pool, get_pool, init_pool
from .transaction import StatementExecutor, TransactionalAction, run_in_transaction

__all__ = [
    "init_pool",
    "get_pool",
    "close_pool",
    "run_in_transaction",
    "StatementExecutor",
    "TransactionalAction",
    "DatabasePoolError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
    "DatabaseConnectionError",
]
