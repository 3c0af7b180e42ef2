"""
Name: Allow-list Bootstrap Script

Responsibilities:
  - Add a user name to the allow-list (idempotent)
  - Reuse the same transaction wrapper as the API
"""

from __future__ import annotations

import argparse
import os
import sys

import psycopg

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from auditdb.infrastructure.db.transaction import run_in_transaction  # noqa: E402
from auditdb.infrastructure.repositories.postgres.user import add_user  # noqa: E402


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _parse_args() -> argparse.Namespace:
    argv = sys.argv[1:]
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Add a user to the allow-list (idempotent)."
    )
    parser.add_argument("name", help="User name, as sent in the user header")
    return parser.parse_args(argv)


def main() -> None:
    args = _parse_args()
    name = args.name.strip()
    if not name:
        raise SystemExit("User name is required.")

    db_url = _require_database_url()
    with psycopg.connect(db_url) as conn:
        created = run_in_transaction(
            conn, lambda executor: add_user(executor, name), name="create user"
        )

    if created:
        print(f"Created user: {name}")
    else:
        print(f"User already exists: {name}")


if __name__ == "__main__":
    main()
