"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Author, Book)

Responsabilidades:
    - Definir las dos entidades de negocio (sin infraestructura).
    - Validación de campos (nombre, título, fechas obligatorias).
    - Merge de cambios parciales sobre el registro guardado (update-by-merge).

Colaboradores:
    - infrastructure.repositories.postgres.author / book: persisten estas entidades.
    - api.routers: construyen/validan/serializan.

Principios:
    - Sin dependencias a DB/FastAPI.
    - id lo asigna storage: None hasta que se persiste.
    - date None equivale a la “fecha cero” (inválida).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from ..crosscutting.exceptions import ValidationError


@dataclass
class Author:
    """Autor: nombre + fecha de nacimiento."""

    name: str
    date_of_birth: date | None = None
    id: int | None = None

    def validate(self) -> None:
        """
        Chequeo básico de sanidad.

        Reglas:
          - name no vacío, solo letras, espacios y puntos.
          - date_of_birth obligatoria.
        """
        if not self.name:
            raise ValidationError("name empty")
        for ch in self.name:
            if ch.isalpha() or ch in " .":
                continue
            raise ValidationError(f"name contains unexpected character: {ch}")

        if self.date_of_birth is None:
            raise ValidationError("date of birth is required")

    def merged_with(
        self,
        *,
        name: str | None = None,
        date_of_birth: date | None = None,
    ) -> Author:
        """Copia con los campos presentes reemplazados (id se conserva)."""
        changes: dict[str, object] = {}
        if name:
            changes["name"] = name
        if date_of_birth is not None:
            changes["date_of_birth"] = date_of_birth
        return replace(self, **changes)


@dataclass
class Book:
    """Libro: pertenece a exactamente un Author (FK en storage)."""

    title: str
    published: date | None = None
    id: int | None = None
    author_id: int | None = None

    def validate(self) -> None:
        if not self.title:
            raise ValidationError("title empty")

        if self.published is None:
            raise ValidationError("published date is required")

    def merged_with(
        self,
        *,
        title: str | None = None,
        published: date | None = None,
    ) -> Book:
        changes: dict[str, object] = {}
        if title:
            changes["title"] = title
        if published is not None:
            changes["published"] = published
        return replace(self, **changes)
