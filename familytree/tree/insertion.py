"""Consistency-preserving writes on the relationship graph.

Every public function here is one atomic unit: it opens a
:func:`~familytree.db.connection.transaction`, so either all of its rows
are committed or none are.  The ``_``-prefixed variants do the same work
without committing and exist so the bulk importer can batch many of them
into a single transaction.

Edge rules:

- parent/child is stored once, as ``parent -> child`` PARENT;
- spouses are stored as a pair, ``a -> b`` and ``b -> a`` SPOUSE;
- inserting an edge that already exists is a successful no-op.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Mapping, Optional

from familytree.db import families, persons, relationships
from familytree.db.connection import transaction
from familytree.db.models import PersonNode, RelationshipKind
from familytree.errors import NotFoundError, ValidationError
from familytree.tree.validation import (
    RelationType,
    clean_person_fields,
    parse_relation_type,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def require_person(conn: sqlite3.Connection, family_id: str, person_id: str) -> PersonNode:
    """Return the person or raise :class:`NotFoundError` if it is outside *family_id*."""
    person = persons.get_person(conn, family_id, person_id)
    if person is None:
        raise NotFoundError(f"Person {person_id!r} not found in family {family_id!r}")
    return person


def spouse_ids(conn: sqlite3.Connection, person_id: str) -> list[str]:
    """Targets of the outgoing SPOUSE edges of *person_id*."""
    return [
        e.target_id
        for e in relationships.outgoing_edges(conn, person_id, RelationshipKind.SPOUSE)
    ]


# ---------------------------------------------------------------------------
# Non-committing building blocks
# ---------------------------------------------------------------------------

def _link_parent_child(
    conn: sqlite3.Connection, family_id: str, parent_id: str, child_id: str
) -> bool:
    if parent_id == child_id:
        raise ValidationError(f"Person {parent_id!r} cannot be their own parent")
    require_person(conn, family_id, parent_id)
    require_person(conn, family_id, child_id)
    created = relationships.insert_edge(conn, parent_id, child_id, RelationshipKind.PARENT)
    if not created:
        log.debug("PARENT %s -> %s already present", parent_id, child_id)
    return created


def _link_spouses(conn: sqlite3.Connection, family_id: str, a_id: str, b_id: str) -> int:
    if a_id == b_id:
        raise ValidationError(f"Person {a_id!r} cannot be their own spouse")
    require_person(conn, family_id, a_id)
    require_person(conn, family_id, b_id)
    created = 0
    for source, target in ((a_id, b_id), (b_id, a_id)):
        if relationships.insert_edge(conn, source, target, RelationshipKind.SPOUSE):
            created += 1
    if not created:
        log.debug("SPOUSE %s <-> %s already present", a_id, b_id)
    return created


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def link_parent_child(
    conn: sqlite3.Connection, family_id: str, parent_id: str, child_id: str
) -> bool:
    """Ensure ``parent -> child`` PARENT exists.

    Returns:
        True if the edge was written, False if it was already there.

    Raises:
        NotFoundError: Either id is not a person of *family_id*.
    """
    with transaction(conn):
        return _link_parent_child(conn, family_id, parent_id, child_id)


def link_spouses(conn: sqlite3.Connection, family_id: str, a_id: str, b_id: str) -> int:
    """Ensure both SPOUSE directions between *a* and *b* exist.

    Returns the number of edge rows written (0, 1 or 2).
    """
    with transaction(conn):
        return _link_spouses(conn, family_id, a_id, b_id)


def add_person(
    conn: sqlite3.Connection,
    family_id: str,
    attributes: Mapping[str, Any],
    created_by: Optional[str] = None,
) -> PersonNode:
    """Create a person with no relationships (e.g. the first node of a family).

    Raises:
        ValidationError: Blank first name or bad attribute values.
        NotFoundError: *family_id* does not exist.
    """
    fields = clean_person_fields(attributes, require_first_name=True)
    first_name = fields.pop("first_name")
    with transaction(conn):
        if families.get_family(conn, family_id) is None:
            raise NotFoundError(f"Family {family_id!r} not found")
        person = persons.insert_person(
            conn, family_id, first_name, created_by=created_by, **fields
        )
    log.info("Added %s (%s) to family %s", person.full_name, person.id, family_id)
    return person


def add_relative(
    conn: sqlite3.Connection,
    family_id: str,
    anchor_id: str,
    attributes: Mapping[str, Any],
    relation_type: str | RelationType,
    created_by: Optional[str] = None,
) -> PersonNode:
    """Create a new person related to *anchor_id* and wire its edges.

    - ``children``: ``anchor -> new`` PARENT, plus ``spouse -> new`` PARENT
      for every outgoing SPOUSE edge of the anchor.
    - ``parents``: ``new -> anchor`` PARENT only; the new parent is never
      linked to the anchor's other parents.
    - ``spouses``: ``anchor -> new`` and ``new -> anchor`` SPOUSE.

    The new row and all its edges are committed together.

    Raises:
        ValidationError: Blank first name, bad attribute values, or an
            unknown *relation_type*.
        NotFoundError: The anchor is not a person of *family_id*.
    """
    relation = parse_relation_type(relation_type)
    fields = clean_person_fields(attributes, require_first_name=True)
    first_name = fields.pop("first_name")

    with transaction(conn):
        anchor = require_person(conn, family_id, anchor_id)
        person = persons.insert_person(
            conn, family_id, first_name, created_by=created_by, **fields
        )

        if relation is RelationType.CHILDREN:
            relationships.insert_edge(conn, anchor.id, person.id, RelationshipKind.PARENT)
            for spouse_id in spouse_ids(conn, anchor.id):
                if persons.get_person(conn, family_id, spouse_id) is None:
                    continue
                relationships.insert_edge(conn, spouse_id, person.id, RelationshipKind.PARENT)
        elif relation is RelationType.PARENTS:
            relationships.insert_edge(conn, person.id, anchor.id, RelationshipKind.PARENT)
        else:
            relationships.insert_edge(conn, anchor.id, person.id, RelationshipKind.SPOUSE)
            relationships.insert_edge(conn, person.id, anchor.id, RelationshipKind.SPOUSE)

    log.info(
        "Added %s %s (%s) to anchor %s in family %s",
        relation.value, person.full_name, person.id, anchor_id, family_id,
    )
    return person


def update_person(
    conn: sqlite3.Connection, family_id: str, person_id: str, **fields: Any
) -> PersonNode:
    """Apply a partial update to a person's details.

    Raises:
        ValidationError: No fields, unknown fields or invalid values.
        NotFoundError: *person_id* is not a person of *family_id*.
    """
    if not fields:
        raise ValidationError("No fields provided to update")
    updates = clean_person_fields(fields, require_first_name=False)
    with transaction(conn):
        require_person(conn, family_id, person_id)
        persons.update_person_row(conn, family_id, person_id, updates)
    return require_person(conn, family_id, person_id)


def remove_node(conn: sqlite3.Connection, family_id: str, person_id: str) -> int:
    """Delete a person and every edge that references it.

    Edges are swept in both directions before the row is deleted, inside
    one transaction.

    Returns:
        Number of edges removed.

    Raises:
        NotFoundError: *person_id* is not a person of *family_id*.
    """
    with transaction(conn):
        require_person(conn, family_id, person_id)
        removed = relationships.delete_edges_for_person(conn, person_id)
        persons.delete_person_row(conn, family_id, person_id)
    log.info("Removed person %s and %d edge(s) from family %s", person_id, removed, family_id)
    return removed
