"""
Name: Integration Test DB Setup

Responsibilities:
  - Ensure database schema exists before integration tests run
  - Run Alembic migrations once per test session
  - Start every test from empty tables with a known allow-list

Notes:
  - Only runs when RUN_INTEGRATION=1
  - Uses DATABASE_URL from environment (see alembic/env.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")
DB_PORT = os.getenv("POSTGRES_HOST_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "auditdb")
DEFAULT_DATABASE_URL = (
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

TEST_USER = "bill"

if os.getenv("RUN_INTEGRATION") == "1":
    os.environ["APP_ENV"] = "integration"
    os.environ.setdefault("DATABASE_URL", DEFAULT_DATABASE_URL)

    from auditdb.crosscutting.config import get_settings

    get_settings.cache_clear()


@pytest.fixture(scope="session", autouse=True)
def apply_migrations() -> None:
    """Run Alembic migrations for integration tests."""
    if os.getenv("RUN_INTEGRATION") != "1":
        return

    from alembic import command
    from alembic.config import Config

    root_dir = Path(__file__).resolve().parents[2]
    config = Config(str(root_dir / "alembic.ini"))
    config.set_main_option("script_location", str(root_dir / "alembic"))

    command.upgrade(config, "head")


@pytest.fixture(scope="session", autouse=True)
def init_db_pool(apply_migrations):
    if os.getenv("RUN_INTEGRATION") != "1":
        yield
        return

    from auditdb.crosscutting.config import get_settings
    from auditdb.infrastructure.db.pool import close_pool, init_pool

    settings = get_settings()
    init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    yield
    close_pool()


@pytest.fixture(autouse=True)
def clean_tables(init_db_pool) -> None:
    """Truncate everything and re-seed the allow-list with TEST_USER."""
    if os.getenv("RUN_INTEGRATION") != "1":
        return

    from psycopg import connect

    with connect(os.environ["DATABASE_URL"], autocommit=True) as conn:
        conn.execute(
            "TRUNCATE users, books, authors, events RESTART IDENTITY CASCADE"
        )
        conn.execute("INSERT INTO users (name) VALUES (%s)", (TEST_USER,))


@pytest.fixture
def pool():
    from auditdb.infrastructure.db.pool import get_pool

    return get_pool()


@pytest.fixture
def handle(pool):
    """Authorized handle for TEST_USER on one pooled connection."""
    from auditdb import open_handle

    with open_handle(pool, TEST_USER) as h:
        yield h
