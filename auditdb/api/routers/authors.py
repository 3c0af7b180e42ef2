"""
===============================================================================
TARJETA CRC — api/routers/authors.py
===============================================================================

Name:
    Authors Router

Responsibilities:
    - CRUD HTTP de authors sobre el handle autorizado del request.
    - PATCH: read -> merge -> validate -> write (el core solo sobrescribe).

Collaborators:
    - domain.repositories.AuditedCatalog (via api.dependencies.get_catalog)
    - domain.entities.Author
    - api.schemas
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ...domain.repositories import AuditedCatalog
from ..dependencies import get_catalog
from ..schemas import AuthorReq, AuthorRes

router = APIRouter(tags=["authors"])


@router.post("/authors", response_model=AuthorRes, status_code=status.HTTP_201_CREATED)
def create_author(req: AuthorReq, catalog: AuditedCatalog = Depends(get_catalog)):
    author = req.to_author()
    author.validate()
    author.id = catalog.create_author(author)
    return AuthorRes.from_domain(author)


@router.get("/authors", response_model=list[AuthorRes])
def list_authors(catalog: AuditedCatalog = Depends(get_catalog)):
    return [AuthorRes.from_domain(a) for a in catalog.list_authors()]


@router.get("/authors/{author_id}", response_model=AuthorRes)
def get_author(author_id: int, catalog: AuditedCatalog = Depends(get_catalog)):
    return AuthorRes.from_domain(catalog.get_author(author_id))


@router.patch("/authors/{author_id}", response_model=AuthorRes)
def update_author(
    author_id: int,
    req: AuthorReq,
    catalog: AuditedCatalog = Depends(get_catalog),
):
    # El id sale de la URL; el body no puede traer uno.
    current = catalog.get_author(author_id)
    merged = current.merged_with(name=req.name, date_of_birth=req.dateofbirth)
    merged.validate()
    catalog.update_author(merged)
    return AuthorRes.from_domain(merged)


@router.delete("/authors/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_author(author_id: int, catalog: AuditedCatalog = Depends(get_catalog)):
    catalog.delete_author(author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
