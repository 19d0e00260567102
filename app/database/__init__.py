"""
Database access: async engine, session dependencies and transaction helpers.
"""

from app.database.async_db import AsyncSessionLocal, get_async_db, get_async_db_context

__all__ = [
    "AsyncSessionLocal",
    "get_async_db",
    "get_async_db_context",
]
