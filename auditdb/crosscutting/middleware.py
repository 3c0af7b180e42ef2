# auditdb/crosscutting/middleware.py
"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py
===============================================================================

RequestContextMiddleware: envuelve cada request de la API del catálogo.

Responsabilidades:
  - Resolver el request_id (X-Request-Id entrante si es razonable, sino uuid4)
    y devolverlo en la respuesta, también en errores problem+json.
  - Cargar request_id / method / path en ContextVars: los logs de
    autorización y de transacciones del mismo request quedan correlacionados.
  - Una métrica y una línea de log por request (salvo /healthz y /metrics).

Colaboradores:
  - auditdb/context.py
  - crosscutting/metrics.record_request_metrics
  - crosscutting/logger
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger
from .metrics import record_request_metrics

REQUEST_ID_HEADER = "X-Request-Id"

_MAX_REQUEST_ID_LEN = 128
_UNLOGGED_PATHS = frozenset({"/healthz", "/metrics"})


def _resolve_request_id(request: Request) -> str:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LEN:
        return incoming
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _resolve_request_id(request)
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request abortado por excepción")
            raise
        else:
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            self._finish(request, status_code, time.perf_counter() - started)

    @staticmethod
    def _finish(request: Request, status_code: int, elapsed: float) -> None:
        record_request_metrics(
            endpoint=request.url.path,
            method=request.method,
            status_code=status_code,
            latency_seconds=elapsed,
        )
        if request.url.path not in _UNLOGGED_PATHS:
            logger.info(
                "request completado",
                extra={"status_code": status_code, "elapsed_ms": round(elapsed * 1000, 2)},
            )
        clear_context()
