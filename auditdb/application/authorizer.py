"""
===============================================================================
TARJETA CRC — application/authorizer.py
===============================================================================

Funciones:
  - authorize(conn, user) -> AuditHandle
  - open_handle(pool, user): context manager por request

Responsabilidades:
  - Auditar el INTENTO de autorización (READ sobre "auth"), pase o no pase.
  - Leer la allow-list completa y decidir.
  - Emitir el AuditHandle solo si el caller está en la lista.

Colaboradores:
  - infrastructure.db.transaction.run_in_transaction
  - infrastructure.repositories.postgres.user.list_user_names
  - infrastructure.repositories.postgres.audit_event.record_event
  - application.handle._issue_handle

Reglas:
  - El commit ocurre en ambos casos (aceptado/rechazado); Unauthorized se
    levanta después del commit.
  - Cualquier fallo de I/O -> rollback + DatabaseError.
===============================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from ..crosscutting.exceptions import UnauthorizedError
from ..crosscutting.logger import logger
from ..domain.audit import OBJECT_TYPE_AUTH, AuditOperation
from ..infrastructure.db.transaction import StatementExecutor, run_in_transaction
from ..infrastructure.repositories.postgres.audit_event import record_event
from ..infrastructure.repositories.postgres.user import list_user_names
from .handle import AuditHandle, _issue_handle


def authorize(conn, user: str) -> AuditHandle:
    """Chequea `user` contra la allow-list; devuelve el handle o levanta."""

    def action(executor: StatementExecutor) -> bool:
        record_event(
            executor,
            user=user,
            operation=AuditOperation.READ,
            object_type=OBJECT_TYPE_AUTH,
        )
        return user in list_user_names(executor)

    allowed = run_in_transaction(conn, action, name="authorization")
    if not allowed:
        logger.info("Authorization rejected", extra={"user": user})
        raise UnauthorizedError(user)

    logger.info("Authorization approved", extra={"user": user})
    return _issue_handle(conn, user)


@contextmanager
def open_handle(pool, user: str) -> Iterator[AuditHandle]:
    """Toma una conexión del pool, autoriza y la devuelve al salir."""
    with pool.connection() as conn:
        yield authorize(conn, user)
