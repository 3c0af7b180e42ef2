"""
===============================================================================
CRC CARD — infrastructure/db/transaction.py
===============================================================================

Componentes:
  - StatementExecutor: ejecuta statements dentro de la transacción abierta.
  - TransactionalAction: unidad de trabajo (callable sobre un executor).
  - run_in_transaction(): begin -> action -> commit | rollback.

Responsabilidades:
  - Atomicidad: la fila de negocio y su evento de auditoría se ven juntas o no
    se ven.
  - Envolver cada fallo de statement en DatabaseError con la fase ("insert
    event", "select authors", ...) para poder diagnosticar.
  - Rollback ante cualquier excepción (incluye KeyboardInterrupt/cancelación)
    sin pisar el error original.

Colaboradores:
  - psycopg Connection (modo no-autocommit: BEGIN implícito)
  - crosscutting.logger / crosscutting.metrics
===============================================================================
"""

from __future__ import annotations

from typing import Iterable, Protocol, TypeVar

from psycopg.pq import TransactionStatus

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_transaction

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class StatementExecutor:
    """Executor ligado a la transacción en curso de `conn`."""

    def __init__(self, conn, *, transaction_name: str) -> None:
        self._conn = conn
        self._name = transaction_name

    def execute(self, query: str, params: Iterable[object] = (), *, phase: str):
        """Ejecuta y devuelve el cursor; cualquier fallo -> DatabaseError(phase)."""
        try:
            return self._conn.execute(query, tuple(params))
        except Exception as exc:
            logger.exception(
                f"{self._name}: {phase} failed",
                extra={"transaction": self._name, "phase": phase, "error": str(exc)},
            )
            raise DatabaseError(
                f"{self._name}: {phase}: {exc}", original_error=exc
            ) from exc

    def fetchone(
        self, query: str, params: Iterable[object] = (), *, phase: str
    ) -> tuple | None:
        cursor = self.execute(query, params, phase=phase)
        try:
            return cursor.fetchone()
        except Exception as exc:
            raise DatabaseError(
                f"{self._name}: scanning row: {exc}", original_error=exc
            ) from exc

    def fetchall(
        self, query: str, params: Iterable[object] = (), *, phase: str
    ) -> list[tuple]:
        cursor = self.execute(query, params, phase=phase)
        try:
            return cursor.fetchall()
        except Exception as exc:
            raise DatabaseError(
                f"{self._name}: going over rows: {exc}", original_error=exc
            ) from exc

    def rowcount(self, query: str, params: Iterable[object] = (), *, phase: str) -> int:
        """Ejecuta un statement mutante y devuelve rows-affected."""
        cursor = self.execute(query, params, phase=phase)
        count = cursor.rowcount
        if count is None or count < 0:
            raise DatabaseError(f"{self._name}: affected rows unavailable")
        return count


class TransactionalAction(Protocol[T_co]):
    """Unidad de trabajo: recibe el executor, devuelve resultado o levanta."""

    def __call__(self, executor: StatementExecutor) -> T_co: ...


def run_in_transaction(conn, action: TransactionalAction[T], *, name: str) -> T:
    """
    Ejecuta `action` en una transacción.

    - Begin: la conexión debe estar idle (BEGIN implícito en el 1er statement).
    - Falla en action: rollback y se re-levanta el error ORIGINAL.
    - Éxito: commit; si el commit falla -> DatabaseError.
    """
    status = conn.info.transaction_status
    if status != TransactionStatus.IDLE:
        raise DatabaseError(
            f"{name}: begin transaction: connection not idle ({status.name})"
        )

    try:
        result = action(StatementExecutor(conn, transaction_name=name))
    except BaseException as exc:
        _rollback_after(conn, exc, name=name)
        record_transaction(name, "rolled_back")
        raise

    try:
        conn.commit()
    except Exception as exc:
        record_transaction(name, "commit_failed")
        logger.exception(f"{name}: commit failed", extra={"error": str(exc)})
        raise DatabaseError(
            f"{name}: commit transaction: {exc}", original_error=exc
        ) from exc

    record_transaction(name, "committed")
    return result


def _rollback_after(conn, exc: BaseException, *, name: str) -> None:
    """Rollback tras un error; si el rollback también falla, gana el original."""
    try:
        conn.rollback()
    except Exception as rb_exc:
        logger.error(
            f"{name}: rollback failed",
            extra={"error": str(rb_exc), "original_error": str(exc)},
        )
        exc.add_note(f"rollback failed: {rb_exc}")
