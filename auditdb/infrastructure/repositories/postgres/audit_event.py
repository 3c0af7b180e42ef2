"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/audit_event.py
============================================================
Function: record_event
Class: PostgresAuditEventRepository

Responsibilities:
  - Escribir un evento de auditoría DENTRO de la transacción del caller
    (el evento y la fila de negocio se confirman juntos).
  - Consultar el log con filtros componibles (domain.filters).
  - Orden estable: por id (orden de inserción).

Collaborators:
  - domain.audit.AuditEvent / AuditOperation
  - domain.filters.build_where
  - infrastructure.db.transaction.StatementExecutor
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Append-only: no existe update/delete de eventos.
  - ts lo pone la DB (now()), nunca el caller.
  - Consultar el log NO escribe un evento.
  - Queries SIEMPRE parametrizadas.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.audit import AuditEvent, AuditOperation
from ....domain.filters import EventFilter, build_where
from ...db.transaction import StatementExecutor

_SELECT_EVENTS = """
    SELECT ts, username, operation, obj_type, obj_id
    FROM events
"""


def record_event(
    executor: StatementExecutor,
    *,
    user: str,
    operation: AuditOperation,
    object_type: str,
    object_id: Optional[int] = None,
) -> None:
    """Inserta un evento en la transacción en curso."""
    executor.execute(
        """
        INSERT INTO events (username, operation, obj_type, obj_id, ts)
        VALUES (%s, %s, %s, %s, now())
        """,
        (user, AuditOperation(operation).value, object_type, object_id),
        phase="insert event",
    )


def _row_to_event(row: tuple) -> AuditEvent:
    try:
        operation = AuditOperation(row[2])
    except ValueError as exc:
        raise DatabaseError(f"scanning row: unknown operation {row[2]!r}") from exc
    return AuditEvent(
        when=row[0],
        user=row[1],
        operation=operation,
        object_type=row[3],
        object_id=row[4],
    )


class PostgresAuditEventRepository:
    """Lectura del log de auditoría sobre una conexión ya autorizada."""

    def __init__(self, conn):
        self._conn = conn

    def query_events(self, *filters: EventFilter) -> List[AuditEvent]:
        """
        Eventos que cumplen TODOS los filtros, en orden de inserción.

        Es un único SELECT (sin run_in_transaction); psycopg abre una
        transacción implícita que cerramos con rollback para devolver la
        conexión idle.
        """
        where, params = build_where(filters)
        query = f"{_SELECT_EVENTS} {where} ORDER BY id"

        try:
            rows = self._conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(
                "PostgresAuditEventRepository: select events failed",
                extra={"filters": len(params), "error": str(exc)},
            )
            raise DatabaseError(f"select events: {exc}", original_error=exc) from exc
        finally:
            self._end_read()

        return [_row_to_event(row) for row in rows]

    def _end_read(self) -> None:
        try:
            self._conn.rollback()
        except Exception as exc:
            logger.warning(
                "PostgresAuditEventRepository: rollback after read failed",
                extra={"error": str(exc)},
            )
