"""Family-scoped node endpoints.

Routes
------
POST   /families/{family_id}/nodes                    Add a person, optionally relative to an anchor
PUT    /families/{family_id}/nodes/{node_id}          Partial update of a node
DELETE /families/{family_id}/nodes/{node_id}          Remove a node and all its edges
PUT    /families/{family_id}/nodes/{node_id}/account  Link an account to a node
DELETE /families/{family_id}/nodes/{node_id}/account  Unlink the node's account
"""

from __future__ import annotations

import sqlite3
from typing import Any

from fastapi import APIRouter, Depends, Response

from familytree.api.deps import get_db, require_member
from familytree.api.routers.schemas import (
    AccountLink,
    AddRelativeRequest,
    PersonFields,
    PersonResponse,
    person_dict,
)
from familytree.tree import (
    add_person,
    add_relative,
    link_account,
    remove_node,
    unlink_account,
    update_person,
)

router = APIRouter()


@router.post("/{family_id}/nodes", response_model=PersonResponse, status_code=201)
def add_node(
    family_id: str,
    body: AddRelativeRequest,
    user_id: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Create a child, parent or spouse of the anchor node.

    Without ``relativeId`` the person is created unlinked, which is how the
    first node of a family is added.
    """
    if body.anchor_id is None:
        person = add_person(conn, family_id, body.attributes(), created_by=user_id)
        return person_dict(person)
    person = add_relative(
        conn,
        family_id,
        body.anchor_id,
        body.attributes(),
        body.relation_type,
        created_by=user_id,
    )
    return person_dict(person)


@router.put("/{family_id}/nodes/{node_id}", response_model=PersonResponse)
def edit_node(
    family_id: str,
    node_id: str,
    body: PersonFields,
    _: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Update name, sex, dates or portrait of a node."""
    person = update_person(conn, family_id, node_id, **body.attributes())
    return person_dict(person)


@router.delete("/{family_id}/nodes/{node_id}")
def delete_node(
    family_id: str,
    node_id: str,
    _: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> Response:
    """Delete a node together with every edge that references it."""
    remove_node(conn, family_id, node_id)
    return Response(status_code=204)


@router.put("/{family_id}/nodes/{node_id}/account", response_model=PersonResponse)
def link_node_account(
    family_id: str,
    node_id: str,
    body: AccountLink,
    _: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return person_dict(link_account(conn, family_id, node_id, body.user_id))


@router.delete("/{family_id}/nodes/{node_id}/account", response_model=PersonResponse)
def unlink_node_account(
    family_id: str,
    node_id: str,
    _: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    return person_dict(unlink_account(conn, family_id, node_id))
