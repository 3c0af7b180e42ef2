"""
===============================================================================
TARJETA CRC — api/schemas.py
===============================================================================

Módulo:
    Schemas HTTP para Authors / Books / Events

Responsabilidades:
    - DTOs de request/response con los nombres JSON del contrato
      (dateofbirth, published, fechas YYYY-MM-DD).
    - Rechazar campos desconocidos (extra="forbid").
    - Adaptar dominio <-> DTO.

Colaboradores:
    - domain.entities.Author / Book
    - domain.audit.AuditEvent
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from ..domain.audit import AuditEvent, AuditOperation
from ..domain.entities import Author, Book


class _StrictReq(BaseModel):
    model_config = ConfigDict(extra="forbid")


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class AuthorReq(_StrictReq):
    """Body de POST/PATCH /authors. En PATCH los campos ausentes no cambian."""

    name: str = ""
    dateofbirth: date | None = None

    def to_author(self) -> Author:
        return Author(name=self.name, date_of_birth=self.dateofbirth)


class BookReq(_StrictReq):
    title: str = ""
    published: date | None = None

    def to_book(self, author_id: int) -> Book:
        return Book(title=self.title, published=self.published, author_id=author_id)


class EventsQueryReq(_StrictReq):
    """
    Body opcional de POST /events: ventana temporal abierta (after, before).

    Se aplica tal cual: una ventana vacía o invertida devuelve lista vacía.
    Naive y aware pueden mezclarse (los filtros normalizan a UTC).
    """

    after: datetime | None = None
    before: datetime | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class AuthorRes(BaseModel):
    id: int
    name: str
    dateofbirth: date | None = None

    @classmethod
    def from_domain(cls, author: Author) -> AuthorRes:
        return cls(id=author.id, name=author.name, dateofbirth=author.date_of_birth)


class BookRes(BaseModel):
    id: int
    title: str
    published: date | None = None

    @classmethod
    def from_domain(cls, book: Book) -> BookRes:
        return cls(id=book.id, title=book.title, published=book.published)


class AuditEventRes(BaseModel):
    """Evento de auditoría serializable."""

    when: datetime
    user: str
    operation: AuditOperation
    type: str
    id: int | None = None

    @classmethod
    def from_domain(cls, event: AuditEvent) -> AuditEventRes:
        return cls(
            when=event.when,
            user=event.user,
            operation=event.operation,
            type=event.object_type,
            id=event.object_id,
        )
