"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over psycopg; every call runs inside run_in_transaction.
"""

from .audit_event import PostgresAuditEventRepository, record_event
from .author import PostgresAuthorRepository
from .book import PostgresBookRepository
from .user import add_user, list_user_names

__all__ = [
    "PostgresAuthorRepository",
    "PostgresBookRepository",
    "PostgresAuditEventRepository",
    "record_event",
    "list_user_names",
    "add_user",
]
