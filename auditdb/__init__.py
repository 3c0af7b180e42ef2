"""
===============================================================================
TARJETA CRC — auditdb/__init__.py
===============================================================================

Paquete:
    auditdb: capa de acceso a datos auditada (authors, books, events)

Responsabilidades:
    - Exponer la API pública: authorize/open_handle, AuditHandle, filtros,
      entidades y excepciones.

Reglas:
    - Solo re-exporta; sin side effects (no abre pool ni lee settings).
===============================================================================
"""

from .application.authorizer import authorize, open_handle
from .application.handle import AuditHandle
from .crosscutting.exceptions import (
    AuditDBError,
    DatabaseError,
    NotFoundError,
    OperationNotImplementedError,
    UnauthorizedError,
    ValidationError,
)
from .domain.audit import AuditEvent, AuditOperation
from .domain.entities import Author, Book
from .domain.filters import After, Before, ByObjectType, ByOperation, ByUser

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "authorize",
    "open_handle",
    "AuditHandle",
    # Entities
    "Author",
    "Book",
    "AuditEvent",
    "AuditOperation",
    # Filters
    "After",
    "Before",
    "ByUser",
    "ByOperation",
    "ByObjectType",
    # Errors
    "AuditDBError",
    "DatabaseError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "OperationNotImplementedError",
]
