"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Function: list_user_names / add_user

Responsibilities:
  - Leer la allow-list completa (tabla users) dentro de una transacción abierta.
  - Registrar un nombre en la allow-list (idempotente, usado por scripts).

Collaborators:
  - infrastructure.db.transaction.StatementExecutor
  - application.authorizer (consume list_user_names)
============================================================
"""

from __future__ import annotations

from ...db.transaction import StatementExecutor


def list_user_names(executor: StatementExecutor) -> set[str]:
    """Todos los nombres registrados."""
    rows = executor.fetchall("SELECT name FROM users", phase="query users")
    return {row[0] for row in rows}


def add_user(executor: StatementExecutor, name: str) -> bool:
    """Inserta `name`; devuelve False si ya existía."""
    inserted = executor.rowcount(
        "INSERT INTO users (name) VALUES (%s) ON CONFLICT (name) DO NOTHING",
        (name,),
        phase="insert user",
    )
    return inserted > 0
