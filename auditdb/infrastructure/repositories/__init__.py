"""
============================================================
TARJETA CRC
============================================================
Class: auditdb.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer los repositorios auditados (Postgres) en un único punto.
============================================================
"""

from .postgres import (
    PostgresAuditEventRepository,
    PostgresAuthorRepository,
    PostgresBookRepository,
)

__all__ = [
    "PostgresAuthorRepository",
    "PostgresBookRepository",
    "PostgresAuditEventRepository",
]
