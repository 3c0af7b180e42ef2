"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Errores del ciclo de vida del pool y de la adquisición de conexiones.

Todos son DatabaseError: la API los responde como 500 DATABASE_ERROR y un
caller del core los atrapa igual que un fallo de statement.
===============================================================================
"""

from ...crosscutting.exceptions import DatabaseError


class DatabasePoolError(DatabaseError):
    """Base: el pool no está en el estado que la operación necesita."""

    default_message = "database pool error"

    def __init__(self, message: str | None = None, **kwargs):
        super().__init__(message or self.default_message, **kwargs)


class PoolAlreadyInitializedError(DatabasePoolError):
    default_message = "pool already initialized"


class PoolNotInitializedError(DatabasePoolError):
    default_message = "pool not initialized, call init_pool() first"


class DatabaseConnectionError(DatabasePoolError):
    """Sin conexión usable: checkout fallido o healthcheck (SELECT 1) fallido."""

    default_message = "could not acquire a DB connection"
