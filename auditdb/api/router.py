"""
===============================================================================
TARJETA CRC — api/router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Componer los routers por recurso (authors, books, events).
  - Centralizar responses RFC7807 para OpenAPI.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.authors import router as authors_router
from .routers.books import router as books_router
from .routers.events import router as events_router


def build_router() -> APIRouter:
    """Construye el router raíz (sin efectos al importar)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(authors_router)
    api_router.include_router(books_router)
    api_router.include_router(events_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
