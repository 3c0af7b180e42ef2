"""
===============================================================================
TARJETA CRC — domain/filters.py
===============================================================================

Módulo:
    Filtros componibles para consultar el log de auditoría

Responsabilidades:
    - EventFilter: contrato "aplicate sobre un acumulador de predicados".
    - WhereClause: acumula `column OP %s` + parámetro y arma un único WHERE.
    - Filtros concretos: After, Before (rango temporal, normalizado a UTC),
      ByUser, ByOperation, ByObjectType (igualdad).

Colaboradores:
    - infrastructure.repositories.postgres.audit_event.query_events
    - api.routers.events (construye filtros desde el body)

Reglas:
    - Cero filtros => sin WHERE (consulta sin restricciones).
    - N filtros => "WHERE c1 AND ... AND cN", params en orden de aplicación.
    - Columnas y operadores vienen SOLO de código (nunca input del usuario);
      los valores siempre van como parámetros.
    - AND es conmutativo: el orden cambia posiciones, nunca el resultado.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Protocol

from .audit import AuditOperation

_ALLOWED_OPERATORS = frozenset({"=", "<", ">", "<=", ">="})

# Columnas de la tabla events que pueden filtrarse.
_EVENT_COLUMNS = frozenset({"ts", "username", "operation", "obj_type", "obj_id"})


class WhereClause:
    """Acumulador mutable de predicados (condiciones + parámetros posicionales)."""

    def __init__(self) -> None:
        self._conditions: list[str] = []
        self._params: list[object] = []

    def add(self, column: str, operator: str, value: object) -> None:
        if column not in _EVENT_COLUMNS:
            raise ValueError(f"unknown event column: {column}")
        if operator not in _ALLOWED_OPERATORS:
            raise ValueError(f"unsupported operator: {operator}")
        self._conditions.append(f"{column} {operator} %s")
        self._params.append(value)

    def __len__(self) -> int:
        return len(self._conditions)

    def render(self) -> tuple[str, list[object]]:
        """Devuelve ("WHERE ...", params) o ("", []) si no hay condiciones."""
        if not self._conditions:
            return "", []
        return "WHERE " + " AND ".join(self._conditions), list(self._params)


class EventFilter(Protocol):
    """Predicado sobre eventos: agrega una condición al acumulador."""

    def apply(self, where: WhereClause) -> None: ...


def to_utc(at: datetime) -> datetime:
    """
    Normaliza a UTC.

    Un datetime naive se interpreta como hora local (como lo haría el caller).
    """
    return at.astimezone(timezone.utc)


@dataclass(frozen=True)
class After:
    """Eventos con timestamp estrictamente posterior a `at`."""

    at: datetime

    def apply(self, where: WhereClause) -> None:
        where.add("ts", ">", to_utc(self.at))


@dataclass(frozen=True)
class Before:
    """Eventos con timestamp estrictamente anterior a `at`."""

    at: datetime

    def apply(self, where: WhereClause) -> None:
        where.add("ts", "<", to_utc(self.at))


@dataclass(frozen=True)
class ByUser:
    user: str

    def apply(self, where: WhereClause) -> None:
        where.add("username", "=", self.user)


@dataclass(frozen=True)
class ByOperation:
    operation: AuditOperation

    def apply(self, where: WhereClause) -> None:
        where.add("operation", "=", AuditOperation(self.operation).value)


@dataclass(frozen=True)
class ByObjectType:
    object_type: str

    def apply(self, where: WhereClause) -> None:
        where.add("obj_type", "=", self.object_type)


def build_where(filters: Iterable[EventFilter]) -> tuple[str, list[object]]:
    """Aplica los filtros en orden y renderiza el WHERE resultante."""
    where = WhereClause()
    for event_filter in filters:
        event_filter.apply(where)
    return where.render()
