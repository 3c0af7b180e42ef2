"""
===============================================================================
TARJETA CRC — api/routers/events.py
===============================================================================

Name:
    Events Router

Responsibilities:
    - Consultar el log de auditoría con ventana temporal opcional.
    - Body ausente => todos los eventos.

Collaborators:
    - domain.filters.After / Before
    - domain.repositories.AuditedCatalog.query_events
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from ...domain.filters import After, Before
from ...domain.repositories import AuditedCatalog
from ..dependencies import get_catalog
from ..schemas import AuditEventRes, EventsQueryReq

router = APIRouter(tags=["events"])


@router.post("/events", response_model=list[AuditEventRes])
def query_events(
    req: EventsQueryReq | None = Body(default=None),
    catalog: AuditedCatalog = Depends(get_catalog),
):
    filters = []
    if req is not None:
        if req.after is not None:
            filters.append(After(req.after))
        if req.before is not None:
            filters.append(Before(req.before))

    return [AuditEventRes.from_domain(e) for e in catalog.query_events(*filters)]
