"""
===============================================================================
TARJETA CRC — application/handle.py
===============================================================================

Clase:
  AuditHandle (capability)

Responsabilidades:
  - Ser la ÚNICA puerta a los repositorios auditados.
  - Atar identidad autorizada + conexión (una por request).
  - Exponer una API plana (create_author, list_books, query_events, ...).

Colaboradores:
  - application.authorizer: único emisor (via _issue_handle)
  - infrastructure.repositories.postgres.*

Reglas:
  - No se puede construir sin el token privado del authorizer: tener un
    handle prueba que la allow-list aceptó al caller.
  - No compartir un handle entre operaciones concurrentes.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ..domain.audit import AuditEvent
from ..domain.entities import Author, Book
from ..domain.filters import EventFilter
from ..infrastructure.repositories.postgres.audit_event import (
    PostgresAuditEventRepository,
)
from ..infrastructure.repositories.postgres.author import PostgresAuthorRepository
from ..infrastructure.repositories.postgres.book import PostgresBookRepository

_ISSUE_TOKEN = object()


class AuditHandle:
    """Acceso autorizado a authors, books y el log de auditoría."""

    __slots__ = ("_user", "_authors", "_books", "_events")

    def __init__(self, conn, user: str, *, _token: object = None):
        if _token is not _ISSUE_TOKEN:
            raise TypeError("AuditHandle can only be obtained through authorize()")
        self._user = user
        self._authors = PostgresAuthorRepository(conn, user)
        self._books = PostgresBookRepository(conn, user)
        self._events = PostgresAuditEventRepository(conn)

    def __repr__(self) -> str:
        return f"AuditHandle(user={self._user!r})"

    @property
    def user(self) -> str:
        return self._user

    # ------------------------------------------------------------
    # Authors
    # ------------------------------------------------------------
    def create_author(self, author: Author) -> int:
        return self._authors.create(author)

    def get_author(self, author_id: int) -> Author:
        return self._authors.get(author_id)

    def update_author(self, author: Author) -> None:
        self._authors.update(author)

    def list_authors(self) -> List[Author]:
        return self._authors.list()

    def delete_author(self, author_id: int) -> None:
        self._authors.delete(author_id)

    # ------------------------------------------------------------
    # Books (scope por autor)
    # ------------------------------------------------------------
    def create_book(self, author_id: int, book: Book) -> int:
        return self._books.create(author_id, book)

    def get_book(self, author_id: int, book_id: int) -> Book:
        return self._books.get(author_id, book_id)

    def update_book(self, author_id: int, book: Book) -> None:
        self._books.update(author_id, book)

    def list_books(self, author_id: Optional[int] = None) -> List[Book]:
        return self._books.list(author_id)

    def delete_book(self, author_id: int, book_id: int) -> None:
        self._books.delete(author_id, book_id)

    # ------------------------------------------------------------
    # Audit log (no se auto-audita)
    # ------------------------------------------------------------
    def query_events(self, *filters: EventFilter) -> List[AuditEvent]:
        return self._events.query_events(*filters)


def _issue_handle(conn, user: str) -> AuditHandle:
    """Solo para application.authorizer."""
    return AuditHandle(conn, user, _token=_ISSUE_TOKEN)
