# auditdb/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas de la capa de acceso auditada
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AuditDBError + subclases

Responsabilidades:
  - Distinguir Unauthorized / NotFound / InternalFailure (DatabaseError)
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - infrastructure/db/transaction.py (envuelve errores de statements)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class AuditDBError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AuditDBError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message
      - Conservar la causa original (original_error)

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "AUDITDB_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: BaseException | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(AuditDBError):
    """Errores de DB (conexión, statement, scan, begin/commit/rollback)."""

    error_code: str = "DATABASE_ERROR"


class UnauthorizedError(AuditDBError):
    """El caller no está en la allow-list de usuarios."""

    error_code: str = "UNAUTHORIZED"

    def __init__(self, user: str, **kwargs):
        self.user = user
        super().__init__("unauthorized", **kwargs)


class NotFoundError(AuditDBError):
    """El objeto de la operación no existía al evaluar rows-affected / scan."""

    error_code: str = "NOT_FOUND"

    def __init__(self, object_type: str, object_id: int, **kwargs):
        self.object_type = object_type
        self.object_id = object_id
        super().__init__(f"object not found: {object_type} {object_id}", **kwargs)


class ValidationError(AuditDBError):
    """Un Author/Book no pasa la validación de campos."""

    error_code: str = "VALIDATION_ERROR"


class OperationNotImplementedError(AuditDBError):
    """Operación declarada pero deliberadamente no disponible."""

    error_code: str = "NOT_IMPLEMENTED"
