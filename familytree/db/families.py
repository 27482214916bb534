"""Operations on the ``families`` and ``family_members`` tables.

Write helpers never commit; wrap them in
:func:`familytree.db.connection.transaction`.
"""

from __future__ import annotations

import sqlite3
import uuid
from time import time
from typing import Optional

from familytree.db.models import Family, MemberRole


def insert_family(
    conn: sqlite3.Connection,
    name: str,
    description: Optional[str] = None,
    created_by: Optional[str] = None,
    family_id: Optional[str] = None,
) -> Family:
    """Insert a family row and, when *created_by* is given, its OWNER membership."""
    fid = family_id or str(uuid.uuid4())
    now = int(time())
    conn.execute(
        """
        INSERT INTO families (id, name, description, created_by, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (fid, name, description, created_by, now, now),
    )
    if created_by:
        add_member(conn, fid, created_by, MemberRole.OWNER)
    return get_family(conn, fid)  # type: ignore[return-value]


def get_family(conn: sqlite3.Connection, family_id: str) -> Optional[Family]:
    """Fetch a family by id.  Returns ``None`` if not found."""
    row = conn.execute("SELECT * FROM families WHERE id = ?", (family_id,)).fetchone()
    return Family.from_row(row) if row else None


def list_families(conn: sqlite3.Connection, user_id: Optional[str] = None) -> list[Family]:
    """Return all families, or only those *user_id* belongs to."""
    if user_id:
        rows = conn.execute(
            """
            SELECT f.* FROM families f
            JOIN family_members m ON m.family_id = f.id
            WHERE m.user_id = ?
            ORDER BY f.created_at
            """,
            (user_id,),
        ).fetchall()
    else:
        rows = conn.execute("SELECT * FROM families ORDER BY created_at").fetchall()
    return [Family.from_row(r) for r in rows]


def add_member(
    conn: sqlite3.Connection,
    family_id: str,
    user_id: str,
    role: MemberRole = MemberRole.MEMBER,
) -> None:
    """Register *user_id* as a member.  Re-adding keeps the existing role."""
    conn.execute(
        """
        INSERT OR IGNORE INTO family_members (family_id, user_id, role, joined_at)
        VALUES (?, ?, ?, ?)
        """,
        (family_id, user_id, MemberRole(role).value, int(time())),
    )


def get_member_role(
    conn: sqlite3.Connection, family_id: str, user_id: str
) -> Optional[MemberRole]:
    row = conn.execute(
        "SELECT role FROM family_members WHERE family_id = ? AND user_id = ?",
        (family_id, user_id),
    ).fetchone()
    return MemberRole(row["role"]) if row else None


def is_member(conn: sqlite3.Connection, family_id: str, user_id: str) -> bool:
    return get_member_role(conn, family_id, user_id) is not None
