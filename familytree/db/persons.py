"""Row operations for the ``persons`` table.

Every lookup is scoped by ``family_id``: a person id that belongs to another
family behaves exactly like an unknown id.  Write helpers never commit.
"""

from __future__ import annotations

import sqlite3
import uuid
from time import time
from typing import Any, Optional

from familytree.db.models import PersonNode

# Columns a caller may set through insert_person / update_person.
PERSON_FIELDS = (
    "first_name",
    "last_name",
    "gender",
    "birth_date",
    "death_date",
    "wedding_anniversary",
    "photo_url",
)


def insert_person(
    conn: sqlite3.Connection,
    family_id: str,
    first_name: str,
    created_by: Optional[str] = None,
    person_id: Optional[str] = None,
    **fields: Any,
) -> PersonNode:
    """Insert a person row and return it.

    Args:
        conn: Open DB connection.
        family_id: Owning family.
        first_name: Given name (already validated by the caller).
        created_by: Account id of the creator, if any.
        person_id: Explicit id override (auto-generated when omitted).
        **fields: Any of the optional columns in ``PERSON_FIELDS``.
    """
    pid = person_id or str(uuid.uuid4())
    now = int(time())
    values = {name: fields.get(name) for name in PERSON_FIELDS}
    values["first_name"] = first_name
    conn.execute(
        """
        INSERT INTO persons (
            id, family_id, first_name, last_name, gender, birth_date,
            death_date, wedding_anniversary, photo_url, created_by,
            created_at, updated_at
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            pid,
            family_id,
            values["first_name"],
            values["last_name"],
            values["gender"],
            values["birth_date"],
            values["death_date"],
            values["wedding_anniversary"],
            values["photo_url"],
            created_by,
            now,
            now,
        ),
    )
    return get_person(conn, family_id, pid)  # type: ignore[return-value]


def get_person(
    conn: sqlite3.Connection, family_id: str, person_id: str
) -> Optional[PersonNode]:
    """Fetch a person inside *family_id*.  Returns ``None`` if not found."""
    row = conn.execute(
        "SELECT * FROM persons WHERE id = ? AND family_id = ?",
        (person_id, family_id),
    ).fetchone()
    return PersonNode.from_row(row) if row else None


def get_person_any_family(conn: sqlite3.Connection, person_id: str) -> Optional[PersonNode]:
    """Unscoped lookup, used only by the account check endpoint."""
    row = conn.execute("SELECT * FROM persons WHERE id = ?", (person_id,)).fetchone()
    return PersonNode.from_row(row) if row else None


def find_person_by_user(conn: sqlite3.Connection, user_id: str) -> Optional[PersonNode]:
    row = conn.execute("SELECT * FROM persons WHERE user_id = ?", (user_id,)).fetchone()
    return PersonNode.from_row(row) if row else None


def list_persons(conn: sqlite3.Connection, family_id: str) -> list[PersonNode]:
    """Return every person of a family, oldest first."""
    rows = conn.execute(
        "SELECT * FROM persons WHERE family_id = ? ORDER BY created_at, rowid",
        (family_id,),
    ).fetchall()
    return [PersonNode.from_row(r) for r in rows]


def update_person_row(
    conn: sqlite3.Connection, family_id: str, person_id: str, updates: dict[str, Any]
) -> None:
    """Apply already-validated column updates.  ``updated_at`` is refreshed."""
    unknown = set(updates) - set(PERSON_FIELDS) - {"user_id"}
    if unknown:
        raise ValueError(f"Cannot update field(s) {sorted(unknown)!r}")
    columns = dict(updates)
    columns["updated_at"] = int(time())
    set_clause = ", ".join(f"{col} = ?" for col in columns)
    values = list(columns.values()) + [person_id, family_id]
    conn.execute(
        f"UPDATE persons SET {set_clause} WHERE id = ? AND family_id = ?",  # noqa: S608
        values,
    )


def delete_person_row(conn: sqlite3.Connection, family_id: str, person_id: str) -> int:
    """Delete the person row only.  Incident edges must already be gone."""
    cur = conn.execute(
        "DELETE FROM persons WHERE id = ? AND family_id = ?", (person_id, family_id)
    )
    return cur.rowcount
