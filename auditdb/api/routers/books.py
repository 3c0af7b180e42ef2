"""
===============================================================================
TARJETA CRC — api/routers/books.py
===============================================================================

Name:
    Books Router (anidado bajo /authors/{author_id})

Responsibilities:
    - Crear/leer/listar/borrar libros de un autor.
    - PATCH de libros: NO disponible (501), aunque el core tenga update_book.

Collaborators:
    - domain.repositories.AuditedCatalog
    - api.schemas.BookReq / BookRes
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ...crosscutting.exceptions import OperationNotImplementedError
from ...domain.repositories import AuditedCatalog
from ..dependencies import get_catalog
from ..schemas import BookReq, BookRes

router = APIRouter(prefix="/authors/{author_id}/books", tags=["books"])


@router.post("", response_model=BookRes, status_code=status.HTTP_201_CREATED)
def create_book(
    author_id: int, req: BookReq, catalog: AuditedCatalog = Depends(get_catalog)
):
    book = req.to_book(author_id)
    book.validate()
    book.id = catalog.create_book(author_id, book)
    return BookRes.from_domain(book)


@router.get("", response_model=list[BookRes])
def list_books(author_id: int, catalog: AuditedCatalog = Depends(get_catalog)):
    return [BookRes.from_domain(b) for b in catalog.list_books(author_id)]


@router.get("/{book_id}", response_model=BookRes)
def get_book(
    author_id: int, book_id: int, catalog: AuditedCatalog = Depends(get_catalog)
):
    return BookRes.from_domain(catalog.get_book(author_id, book_id))


@router.patch("/{book_id}")
def update_book(
    author_id: int, book_id: int, catalog: AuditedCatalog = Depends(get_catalog)
):
    raise OperationNotImplementedError("updating books is not supported")


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    author_id: int, book_id: int, catalog: AuditedCatalog = Depends(get_catalog)
):
    catalog.delete_book(author_id, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
