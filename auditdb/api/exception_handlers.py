"""
===============================================================================
TARJETA CRC — auditdb/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la capa auditada a respuestas HTTP RFC7807.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Mapeo:
  - UnauthorizedError            -> 401
  - ValidationError / body       -> 400
  - NotFoundError                -> 404
  - OperationNotImplementedError -> 501
  - DatabaseError / otros        -> 500

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions
  - crosscutting.config.get_settings (para decidir nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    validation_error,
)
from ..crosscutting.exceptions import (
    AuditDBError,
    DatabaseError,
    NotFoundError,
    OperationNotImplementedError,
    UnauthorizedError,
    ValidationError,
)
from ..crosscutting.logger import logger


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _respond(
    request: Request,
    *,
    exc: AuditDBError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    request_id = _request_id_from(request)
    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=exc.message,
        errors=[{"error_id": exc.error_id, "request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return await _respond(
        request, exc=exc, code=ErrorCode.UNAUTHORIZED, status_code=401
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return await _respond(request, exc=exc, code=ErrorCode.NOT_FOUND, status_code=404)


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    return await _respond(
        request, exc=exc, code=ErrorCode.VALIDATION_ERROR, status_code=400
    )


async def not_implemented_handler(
    request: Request, exc: OperationNotImplementedError
) -> JSONResponse:
    return await _respond(
        request, exc=exc, code=ErrorCode.NOT_IMPLEMENTED, status_code=501
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "Error de base de datos",
        extra={
            "code": ErrorCode.DATABASE_ERROR.value,
            "error_id": exc.error_id,
            "error": exc.message,
            "request_id": _request_id_from(request),
        },
    )
    return await _respond(
        request, exc=exc, code=ErrorCode.DATABASE_ERROR, status_code=500
    )


async def auditdb_error_handler(request: Request, exc: AuditDBError) -> JSONResponse:
    # R: Errores base: tratamos como INTERNAL_ERROR por defecto.
    logger.error(
        "Error interno",
        extra={"error_id": exc.error_id, "error": exc.message},
    )
    return await _respond(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/path inválido (JSON mal formado, campo desconocido, fecha rota) -> 400."""
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return await app_exception_handler(
        request, validation_error("invalid request", errors)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (evita filtrar internos).
    """
    request_id = _request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    # R: En desarrollo ayudamos un poco más; en producción evitamos filtrar detalles.
    detail = "internal error" if get_settings().is_production() else str(exc)

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
        errors=[{"request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - Las subclases antes que AuditDBError (FastAPI resuelve por MRO, pero
        el orden explícito documenta el mapeo).
      - Exception genérica al final como fallback.
    """
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(OperationNotImplementedError, not_implemented_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(AuditDBError, auditdb_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
