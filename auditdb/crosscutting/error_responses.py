# auditdb/crosscutting/error_responses.py
"""
===============================================================================
TARJETA CRC — crosscutting/error_responses.py
===============================================================================

Problem Details (RFC 7807) para la API del catálogo auditado.

Responsabilidades:
  - ErrorCode: códigos estables que el cliente puede switchear
    (UNAUTHORIZED para un usuario fuera de la allow-list, NOT_FOUND para
    autor/libro inexistente, etc.).
  - ErrorDetail: cuerpo application/problem+json.
  - AppHTTPException + app_exception_handler: único punto que serializa.
  - OPENAPI_ERROR_RESPONSES: documenta los errores en /docs.

Colaboradores:
  - api/exception_handlers.py (traduce AuditDBError -> AppHTTPException)
  - crosscutting/middleware.py (request.state.request_id)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def problem_title(self) -> str:
        return self.value.replace("_", " ").title()


class ErrorDetail(BaseModel):
    """Cuerpo problem+json; `code` y `errors` son extensiones propias."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


def _documented(summary: str) -> dict[str, Any]:
    return {
        "description": f"{summary} (problem+json)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES = {
    400: _documented("Body o parámetros inválidos"),
    401: _documented("Usuario fuera de la allow-list"),
    404: _documented("Autor o libro inexistente"),
    500: _documented("Fallo de base de datos"),
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode y lista opcional de detalles (errors[])."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    """400 VALIDATION_ERROR (body mal formado, campo desconocido, fecha rota)."""
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def _with_request_id(
    errors: list[dict[str, Any]] | None, request_id: str | None
) -> list[dict[str, Any]] | None:
    items = list(errors or [])
    # R: un solo request_id por respuesta, aunque el handler ya lo haya puesto.
    if request_id and all("request_id" not in item for item in items):
        items.append({"request_id": request_id})
    return items or None


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    request_id = getattr(getattr(request, "state", None), "request_id", None)

    body = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.problem_title,
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=_with_request_id(exc.errors, request_id),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
