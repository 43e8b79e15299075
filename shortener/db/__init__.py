"""Database module for the URL shortener application."""
from shortener.db.base import (
    DatabaseHealthCheck,
    create_tables,
    get_engine,
    get_session_factory,
)
from shortener.db.session import get_session, transaction_context

__all__ = [
    "DatabaseHealthCheck",
    "create_tables",
    "get_engine",
    "get_session_factory",
    "get_session",
    "transaction_context",
]
