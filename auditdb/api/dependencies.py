"""
===============================================================================
TARJETA CRC — api/dependencies.py
===============================================================================

Responsabilidades:
  - Autorizar CADA request a partir del header de usuario (configurable).
  - Abrir un AuditHandle por request y liberar la conexión al terminar.

Colaboradores:
  - application.authorizer.open_handle
  - infrastructure.db.pool.get_pool
  - crosscutting.config.get_settings (nombre del header)

Notas:
  - Los routers dependen del protocolo AuditedCatalog; los tests
    sobreescriben get_catalog con un doble en memoria.
  - Dependencia sync (generator): FastAPI la corre en el threadpool, igual
    que los endpoints (psycopg sync bloquea).
===============================================================================
"""

from __future__ import annotations

from typing import Iterator

from fastapi import Request

from ..application.authorizer import open_handle
from ..crosscutting.config import get_settings
from ..domain.repositories import AuditedCatalog
from ..infrastructure.db.pool import get_pool


def get_catalog(request: Request) -> Iterator[AuditedCatalog]:
    """Handle autorizado para el usuario del header (vacío si no viene)."""
    user = request.headers.get(get_settings().user_header, "")
    with open_handle(get_pool(), user) as handle:
        yield handle
