"""Database layer package.

Public re-exports so callers can write::

    from familytree.db import get_connection, init_db, transaction
"""

from familytree.db.connection import get_connection, transaction
from familytree.db.migrations import init_db

__all__ = ["get_connection", "init_db", "transaction"]
