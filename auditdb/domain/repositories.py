"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define the contracts of the audited repositories (ports).
- Keep the application/API layer independent from PostgreSQL.
- Enable straightforward unit testing (fake handles in the HTTP tests).

Collaborators
- domain.entities: Author, Book
- domain.audit: AuditEvent
- domain.filters: EventFilter
- infrastructure.repositories.postgres: the implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Every method writes exactly one audit event, except query_events (reads of
  the log are not logged).
- NotFound is raised, never returned as None.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
"""

from typing import List, Optional, Protocol

from .audit import AuditEvent
from .entities import Author, Book
from .filters import EventFilter


class AuthorRepository(Protocol):
    """R: Audited CRUD over authors."""

    def create(self, author: Author) -> int:
        """R: Insert, returning the storage-assigned id."""
        ...

    def get(self, author_id: int) -> Author:
        """R: Fetch by id; NotFoundError if absent (attempt still audited)."""
        ...

    def update(self, author: Author) -> None:
        """R: Overwrite the whole row by id; NotFoundError if no row matched."""
        ...

    def list(self) -> List[Author]:
        """R: All authors (possibly empty)."""
        ...

    def delete(self, author_id: int) -> None:
        """R: Delete by id; NotFoundError if no row matched."""
        ...


class BookRepository(Protocol):
    """R: Audited CRUD over books, scoped by author."""

    def create(self, author_id: int, book: Book) -> int: ...

    def get(self, author_id: int, book_id: int) -> Book: ...

    def update(self, author_id: int, book: Book) -> None: ...

    def list(self, author_id: Optional[int] = None) -> List[Book]: ...

    def delete(self, author_id: int, book_id: int) -> None: ...


class AuditEventQuery(Protocol):
    """R: Read-only access to the audit log."""

    def query_events(self, *filters: EventFilter) -> List[AuditEvent]:
        """R: Matching events in insertion order; writes no event itself."""
        ...


class AuditedCatalog(Protocol):
    """
    R: Everything reachable through an authorized handle.

    The HTTP layer depends on this protocol, not on AuditHandle, so tests can
    inject an in-memory double.
    """

    @property
    def user(self) -> str: ...

    def create_author(self, author: Author) -> int: ...

    def get_author(self, author_id: int) -> Author: ...

    def update_author(self, author: Author) -> None: ...

    def list_authors(self) -> List[Author]: ...

    def delete_author(self, author_id: int) -> None: ...

    def create_book(self, author_id: int, book: Book) -> int: ...

    def get_book(self, author_id: int, book_id: int) -> Book: ...

    def update_book(self, author_id: int, book: Book) -> None: ...

    def list_books(self, author_id: Optional[int] = None) -> List[Book]: ...

    def delete_book(self, author_id: int, book_id: int) -> None: ...

    def query_events(self, *filters: EventFilter) -> List[AuditEvent]: ...
