"""Unscoped node lookups.

Routes
------
GET /nodes/{node_id}/account   Does this tree node already have an account?
"""

from __future__ import annotations

import sqlite3
from typing import Any

from fastapi import APIRouter, Depends

from familytree.api.deps import get_db, get_requester
from familytree.tree import get_node_account

router = APIRouter()


@router.get("/{node_id}/account", response_model=dict[str, Any])
def node_account(
    node_id: str,
    user_id: str = Depends(get_requester),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Return ``{exists, user_id}`` for a node of one of the requester's families."""
    return get_node_account(conn, node_id, requester=user_id)
