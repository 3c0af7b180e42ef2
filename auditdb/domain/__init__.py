"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/api.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .audit import AuditEvent, AuditOperation
from .entities import Author, Book
from .filters import (
    After,
    Before,
    ByObjectType,
    ByOperation,
    ByUser,
    EventFilter,
    WhereClause,
    build_where,
)
from .repositories import (
    AuditedCatalog,
    AuditEventQuery,
    AuthorRepository,
    BookRepository,
)

__all__ = [
    # Entities
    "Author",
    "Book",
    "AuditEvent",
    "AuditOperation",
    # Filters
    "EventFilter",
    "WhereClause",
    "After",
    "Before",
    "ByUser",
    "ByOperation",
    "ByObjectType",
    "build_where",
    # Repository Interfaces (Ports)
    "AuthorRepository",
    "BookRepository",
    "AuditEventQuery",
    "AuditedCatalog",
]
