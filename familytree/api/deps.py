"""Request-scoped dependencies: DB access and requester identity.

Each request gets its own SQLite connection, so concurrent requests are
isolated by SQLite's own transactions rather than by an in-process lock.
"""

from __future__ import annotations

import sqlite3
from typing import Iterator, Optional

from fastapi import Depends, Header, HTTPException

from familytree.db import families, get_connection
from familytree.errors import ForbiddenError


def get_db() -> Iterator[sqlite3.Connection]:
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def get_requester(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Identity set by the upstream auth layer."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthenticated")
    return x_user_id.strip()


def require_member(
    family_id: str,
    user_id: str = Depends(get_requester),
    conn: sqlite3.Connection = Depends(get_db),
) -> str:
    """Reject requesters who do not belong to the family in the path."""
    if not families.is_member(conn, family_id, user_id):
        raise ForbiddenError("You are not a member of this family")
    return user_id
