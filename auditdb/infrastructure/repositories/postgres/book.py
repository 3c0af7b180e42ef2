"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/book.py
============================================================
Class: PostgresBookRepository

Responsibilities:
  - CRUD auditado sobre la tabla books, siempre con scope por author_id
    (un libro de otro autor es NotFound).
  - Misma mecánica que authors: fila + evento en una transacción, NotFound
    después del commit.

Collaborators:
  - domain.entities.Book
  - infrastructure.db.transaction.run_in_transaction
  - audit_event.record_event

Notes:
  - La FK books.author_id la garantiza la DB; si el autor no existe el INSERT
    falla y se reporta como DatabaseError.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import NotFoundError
from ....domain.audit import OBJECT_TYPE_BOOKS, AuditOperation
from ....domain.entities import Book
from ...db.transaction import StatementExecutor, run_in_transaction
from .audit_event import record_event

_COLUMNS = "id, title, published, author_id"


def _row_to_book(row: tuple) -> Book:
    return Book(id=row[0], title=row[1], published=row[2], author_id=row[3])


class PostgresBookRepository:
    """Books auditados; `user` es la identidad ya autorizada."""

    def __init__(self, conn, user: str):
        self._conn = conn
        self._user = user

    def _event(self, executor: StatementExecutor, operation, object_id=None) -> None:
        record_event(
            executor,
            user=self._user,
            operation=operation,
            object_type=OBJECT_TYPE_BOOKS,
            object_id=object_id,
        )

    def create(self, author_id: int, book: Book) -> int:
        def action(executor: StatementExecutor) -> int:
            row = executor.fetchone(
                """
                INSERT INTO books (author_id, title, published)
                VALUES (%s, %s, %s)
                RETURNING id
                """,
                (author_id, book.title, book.published),
                phase="insert book",
            )
            new_id = row[0]
            self._event(executor, AuditOperation.CREATE, new_id)
            return new_id

        return run_in_transaction(self._conn, action, name="create book")

    def get(self, author_id: int, book_id: int) -> Book:
        def action(executor: StatementExecutor) -> Book | None:
            self._event(executor, AuditOperation.READ, book_id)
            row = executor.fetchone(
                f"SELECT {_COLUMNS} FROM books WHERE id = %s AND author_id = %s",
                (book_id, author_id),
                phase="select books",
            )
            return _row_to_book(row) if row else None

        book = run_in_transaction(self._conn, action, name="get book")
        if book is None:
            raise NotFoundError(OBJECT_TYPE_BOOKS, book_id)
        return book

    def update(self, author_id: int, book: Book) -> None:
        def action(executor: StatementExecutor) -> int:
            self._event(executor, AuditOperation.UPDATE, book.id)
            return executor.rowcount(
                """
                UPDATE books
                SET title = %s, published = %s
                WHERE id = %s AND author_id = %s
                """,
                (book.title, book.published, book.id, author_id),
                phase="update book",
            )

        affected = run_in_transaction(self._conn, action, name="update book")
        if affected == 0:
            raise NotFoundError(OBJECT_TYPE_BOOKS, book.id)

    def list(self, author_id: Optional[int] = None) -> List[Book]:
        """Todos los libros, o los de un autor si se pasa author_id."""

        def action(executor: StatementExecutor) -> List[Book]:
            self._event(executor, AuditOperation.READ)
            if author_id is None:
                rows = executor.fetchall(
                    f"SELECT {_COLUMNS} FROM books", phase="select books"
                )
            else:
                rows = executor.fetchall(
                    f"SELECT {_COLUMNS} FROM books WHERE author_id = %s",
                    (author_id,),
                    phase="select books",
                )
            return [_row_to_book(row) for row in rows]

        return run_in_transaction(self._conn, action, name="list books")

    def delete(self, author_id: int, book_id: int) -> None:
        def action(executor: StatementExecutor) -> int:
            self._event(executor, AuditOperation.DELETE, book_id)
            return executor.rowcount(
                "DELETE FROM books WHERE id = %s AND author_id = %s",
                (book_id, author_id),
                phase="delete book",
            )

        affected = run_in_transaction(self._conn, action, name="delete book")
        if affected == 0:
            raise NotFoundError(OBJECT_TYPE_BOOKS, book_id)
