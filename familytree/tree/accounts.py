"""Linking external accounts to tree nodes.

At most one account may claim a node, and an account claims at most one
node.  Account ids are opaque strings issued by the auth collaborator.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

from familytree.db import families, persons
from familytree.db.connection import transaction
from familytree.db.models import PersonNode
from familytree.errors import ForbiddenError, NotFoundError, ValidationError
from familytree.tree.insertion import require_person

log = logging.getLogger(__name__)


def link_account(
    conn: sqlite3.Connection, family_id: str, person_id: str, user_id: str
) -> PersonNode:
    """Attach *user_id* to the node.  Re-linking the same account is a no-op."""
    user_id = (user_id or "").strip()
    if not user_id:
        raise ValidationError("user_id is required")

    with transaction(conn):
        person = require_person(conn, family_id, person_id)
        if person.user_id == user_id:
            return person
        if person.user_id is not None:
            raise ValidationError(f"Person {person_id!r} is already linked to another account")
        claimed = persons.find_person_by_user(conn, user_id)
        if claimed is not None:
            raise ValidationError(f"Account {user_id!r} already claims person {claimed.id!r}")
        persons.update_person_row(conn, family_id, person_id, {"user_id": user_id})

    log.info("Linked account %s to person %s", user_id, person_id)
    return require_person(conn, family_id, person_id)


def unlink_account(conn: sqlite3.Connection, family_id: str, person_id: str) -> PersonNode:
    with transaction(conn):
        require_person(conn, family_id, person_id)
        persons.update_person_row(conn, family_id, person_id, {"user_id": None})
    return require_person(conn, family_id, person_id)


def get_node_account(
    conn: sqlite3.Connection, person_id: str, requester: Optional[str] = None
) -> dict[str, Any]:
    """Report whether a node already has an account, as ``{exists, user_id}``.

    When *requester* is given it must be a member of the node's family.
    """
    person = persons.get_person_any_family(conn, person_id)
    if person is None:
        raise NotFoundError(f"Tree node {person_id!r} not found")
    if requester is not None and not families.is_member(conn, person.family_id, requester):
        raise ForbiddenError("You are not a member of this node's family")
    return {"exists": person.user_id is not None, "user_id": person.user_id}
