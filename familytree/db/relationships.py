"""Operations on the ``relationships`` (edge) table.

Rows are directed ``(person1_id -> person2_id, relationship_type)``.  All
reads go through :class:`~familytree.db.models.RelationshipEdge`, which
folds the legacy ``CHILD`` literal into an inverted ``PARENT`` edge.
Write helpers never commit.
"""

from __future__ import annotations

import sqlite3
import uuid
from time import time

from familytree.db.models import LEGACY_CHILD, RelationshipEdge, RelationshipKind

_EDGE_COLUMNS = "r.id, r.person1_id, r.person2_id, r.relationship_type, r.created_at"


def edge_exists(
    conn: sqlite3.Connection,
    source_id: str,
    target_id: str,
    kind: RelationshipKind,
) -> bool:
    """Return True if ``source -> target`` of *kind* is already stored.

    A legacy ``(target -> source, CHILD)`` row counts as the PARENT edge.
    """
    if kind is RelationshipKind.PARENT:
        row = conn.execute(
            """
            SELECT 1 FROM relationships
            WHERE (person1_id = ? AND person2_id = ? AND relationship_type = ?)
               OR (person1_id = ? AND person2_id = ? AND relationship_type = ?)
            LIMIT 1
            """,
            (source_id, target_id, kind.value, target_id, source_id, LEGACY_CHILD),
        ).fetchone()
    else:
        row = conn.execute(
            """
            SELECT 1 FROM relationships
            WHERE person1_id = ? AND person2_id = ? AND relationship_type = ?
            LIMIT 1
            """,
            (source_id, target_id, kind.value),
        ).fetchone()
    return row is not None


def insert_edge(
    conn: sqlite3.Connection,
    source_id: str,
    target_id: str,
    kind: RelationshipKind,
) -> bool:
    """Insert ``source -> target`` unless it already exists.

    The existence check runs first; ``INSERT OR IGNORE`` against the UNIQUE
    constraint covers a concurrent writer that slipped in between.

    Returns:
        True if a row was written, False for the idempotent no-op.
    """
    kind = RelationshipKind(kind)
    if edge_exists(conn, source_id, target_id, kind):
        return False
    now = int(time())
    cur = conn.execute(
        """
        INSERT OR IGNORE INTO relationships
            (id, person1_id, person2_id, relationship_type, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (str(uuid.uuid4()), source_id, target_id, kind.value, now, now),
    )
    return cur.rowcount == 1


def outgoing_edges(
    conn: sqlite3.Connection, person_id: str, kind: RelationshipKind | None = None
) -> list[RelationshipEdge]:
    """Edges whose (normalised) source is *person_id*."""
    edges = [e for e in get_edges(conn, person_id) if e.source_id == person_id]
    if kind is not None:
        edges = [e for e in edges if e.kind is kind]
    return edges


def incoming_edges(
    conn: sqlite3.Connection, person_id: str, kind: RelationshipKind | None = None
) -> list[RelationshipEdge]:
    """Edges whose (normalised) target is *person_id*."""
    edges = [e for e in get_edges(conn, person_id) if e.target_id == person_id]
    if kind is not None:
        edges = [e for e in edges if e.kind is kind]
    return edges


def get_edges(conn: sqlite3.Connection, person_id: str) -> list[RelationshipEdge]:
    """Return all edges where *person_id* is the source **or** the target."""
    rows = conn.execute(
        f"""
        SELECT {_EDGE_COLUMNS}
        FROM   relationships r
        WHERE  r.person1_id = ? OR r.person2_id = ?
        ORDER  BY r.created_at, r.rowid
        """,  # noqa: S608
        (person_id, person_id),
    ).fetchall()
    return [RelationshipEdge.from_row(r) for r in rows]


def list_family_edges(conn: sqlite3.Connection, family_id: str) -> list[RelationshipEdge]:
    """Return every edge whose endpoints both belong to *family_id*."""
    rows = conn.execute(
        f"""
        SELECT {_EDGE_COLUMNS}
        FROM   relationships r
        JOIN   persons p1 ON p1.id = r.person1_id
        JOIN   persons p2 ON p2.id = r.person2_id
        WHERE  p1.family_id = ? AND p2.family_id = ?
        ORDER  BY r.created_at, r.rowid
        """,  # noqa: S608
        (family_id, family_id),
    ).fetchall()
    return [RelationshipEdge.from_row(r) for r in rows]


def delete_edges_for_person(conn: sqlite3.Connection, person_id: str) -> int:
    """Delete every edge touching *person_id*, in both directions.

    Returns:
        Number of rows removed.
    """
    cur = conn.execute(
        "DELETE FROM relationships WHERE person1_id = ? OR person2_id = ?",
        (person_id, person_id),
    )
    return cur.rowcount
