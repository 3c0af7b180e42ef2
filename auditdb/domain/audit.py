"""
===============================================================================
TARJETA CRC — domain/audit.py
===============================================================================

Módulo:
    Modelos de Auditoría (Dominio)

Responsabilidades:
    - Definir AuditEvent y el catálogo de operaciones (CREATE/READ/UPDATE/DELETE).
    - Nombrar los object types conocidos ("authors", "books", "auth").

Colaboradores:
    - infrastructure.repositories.postgres.audit_event: escribe / consulta eventos.
    - domain.filters: filtra por operación / tipo.

Notas:
    - Auditoría es append-only (no se edita ni se borra).
    - `when` lo pone el reloj de la DB al escribir, nunca el caller.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AuditOperation(str, Enum):
    """Tipo de operación auditada."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# object_type es texto libre; estos son los que escribe este paquete.
OBJECT_TYPE_AUTH = "auth"
OBJECT_TYPE_AUTHORS = "authors"
OBJECT_TYPE_BOOKS = "books"


@dataclass(frozen=True, slots=True)
class AuditEvent:
    """Quién hizo qué, sobre qué objeto y cuándo."""

    when: datetime
    user: str
    operation: AuditOperation
    object_type: str
    object_id: int | None = None
