"""SQLite connection factory and unit-of-work helper.

Usage::

    from familytree.db.connection import get_connection, transaction

    conn = get_connection()
    with transaction(conn):
        conn.execute("INSERT ...")
        conn.execute("INSERT ...")
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from familytree.config import settings
from familytree.errors import PersistenceError

log = logging.getLogger(__name__)


def get_connection(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """Open and configure a SQLite connection.

    Steps performed on every new connection:
    1. Enable ``PRAGMA foreign_keys = ON``.
    2. Switch to WAL journal mode for concurrent readers.

    Args:
        db_path: Override the DB path.  Defaults to ``settings.db_path``.

    Returns:
        A configured :class:`sqlite3.Connection` with ``row_factory`` set to
        :class:`sqlite3.Row` so columns can be accessed by name.
    """
    path = db_path or settings.db_path

    # Create parent directory if needed (no-op for `:memory:`)
    if str(path) != ":memory:":
        settings.ensure_workspace()

    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row

    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("PRAGMA journal_mode = WAL")

    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the enclosed statements as one atomic unit.

    Commits when the block exits normally and rolls back on any exception.
    ``sqlite3.Error`` is re-raised as :class:`~familytree.errors.PersistenceError`;
    domain errors raised inside the block propagate unchanged (after the
    rollback).

    Helpers in :mod:`familytree.db` never commit on their own, so several of
    them can share one ``transaction`` block.  Do not nest this context
    manager: the inner block would commit the outer one early.
    """
    try:
        with conn:
            yield conn
    except sqlite3.Error as exc:
        log.error("Transaction rolled back: %s", exc)
        raise PersistenceError(str(exc)) from exc
