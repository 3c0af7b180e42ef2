"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/author.py
============================================================
Class: PostgresAuthorRepository

Responsibilities:
  - CRUD auditado sobre la tabla authors.
  - Cada operación: fila de negocio + evento en UNA transacción.
  - NotFound se decide por "sin fila" / rows-affected == 0 y se levanta
    DESPUÉS del commit (el intento queda auditado).

Collaborators:
  - domain.entities.Author
  - infrastructure.db.transaction.run_in_transaction
  - audit_event.record_event
============================================================
"""

from __future__ import annotations

from typing import List

from ....crosscutting.exceptions import NotFoundError
from ....domain.audit import OBJECT_TYPE_AUTHORS, AuditOperation
from ....domain.entities import Author
from ...db.transaction import StatementExecutor, run_in_transaction
from .audit_event import record_event

_COLUMNS = "id, name, date_of_birth"


def _row_to_author(row: tuple) -> Author:
    return Author(id=row[0], name=row[1], date_of_birth=row[2])


class PostgresAuthorRepository:
    """Authors auditados; `user` es la identidad ya autorizada."""

    def __init__(self, conn, user: str):
        self._conn = conn
        self._user = user

    def _event(self, executor: StatementExecutor, operation, object_id=None) -> None:
        record_event(
            executor,
            user=self._user,
            operation=operation,
            object_type=OBJECT_TYPE_AUTHORS,
            object_id=object_id,
        )

    def create(self, author: Author) -> int:
        def action(executor: StatementExecutor) -> int:
            row = executor.fetchone(
                """
                INSERT INTO authors (name, date_of_birth)
                VALUES (%s, %s)
                RETURNING id
                """,
                (author.name, author.date_of_birth),
                phase="insert author",
            )
            new_id = row[0]
            self._event(executor, AuditOperation.CREATE, new_id)
            return new_id

        return run_in_transaction(self._conn, action, name="create author")

    def get(self, author_id: int) -> Author:
        def action(executor: StatementExecutor) -> Author | None:
            self._event(executor, AuditOperation.READ, author_id)
            row = executor.fetchone(
                f"SELECT {_COLUMNS} FROM authors WHERE id = %s",
                (author_id,),
                phase="select authors",
            )
            return _row_to_author(row) if row else None

        author = run_in_transaction(self._conn, action, name="get author")
        if author is None:
            raise NotFoundError(OBJECT_TYPE_AUTHORS, author_id)
        return author

    def update(self, author: Author) -> None:
        """Sobrescribe la fila completa (el merge lo hace el caller)."""

        def action(executor: StatementExecutor) -> int:
            self._event(executor, AuditOperation.UPDATE, author.id)
            return executor.rowcount(
                """
                UPDATE authors
                SET name = %s, date_of_birth = %s
                WHERE id = %s
                """,
                (author.name, author.date_of_birth, author.id),
                phase="update author",
            )

        affected = run_in_transaction(self._conn, action, name="update author")
        if affected == 0:
            raise NotFoundError(OBJECT_TYPE_AUTHORS, author.id)

    def list(self) -> List[Author]:
        def action(executor: StatementExecutor) -> List[Author]:
            self._event(executor, AuditOperation.READ)
            rows = executor.fetchall(
                f"SELECT {_COLUMNS} FROM authors", phase="select authors"
            )
            return [_row_to_author(row) for row in rows]

        return run_in_transaction(self._conn, action, name="list authors")

    def delete(self, author_id: int) -> None:
        def action(executor: StatementExecutor) -> int:
            self._event(executor, AuditOperation.DELETE, author_id)
            return executor.rowcount(
                "DELETE FROM authors WHERE id = %s",
                (author_id,),
                phase="delete author",
            )

        affected = run_in_transaction(self._conn, action, name="delete author")
        if affected == 0:
            raise NotFoundError(OBJECT_TYPE_AUTHORS, author_id)
