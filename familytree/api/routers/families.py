"""Family-level endpoints.

Routes
------
POST /families                       Create a family (requester becomes OWNER)
GET  /families                       Families the requester belongs to
POST /families/import                Bulk-import family units into a new family
POST /families/{family_id}/members   Add a member account (OWNER/ADMIN only)
GET  /families/{family_id}/tree      Tree projection: nodes with parents/children/spouses
"""

from __future__ import annotations

import sqlite3
from typing import Any

from fastapi import APIRouter, Depends

from familytree.api.deps import get_db, get_requester, require_member
from familytree.api.routers.schemas import (
    FamilyCreate,
    FamilyResponse,
    ImportRequest,
    MemberAdd,
    family_dict,
)
from familytree.db import families, transaction
from familytree.db.models import MemberRole
from familytree.errors import ForbiddenError, ValidationError
from familytree.tree import import_family, parse_units, project_family

router = APIRouter()


@router.post("", response_model=FamilyResponse, status_code=201)
def create_family(
    body: FamilyCreate,
    user_id: str = Depends(get_requester),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Create a new family and register the requester as its OWNER."""
    name = body.name.strip()
    if not name:
        raise ValidationError("Family name is required")
    with transaction(conn):
        family = families.insert_family(
            conn, name, description=body.description, created_by=user_id
        )
    return family_dict(family)


@router.get("", response_model=list[FamilyResponse])
def list_my_families(
    user_id: str = Depends(get_requester),
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    """Return every family the requester is a member of."""
    return [family_dict(f) for f in families.list_families(conn, user_id=user_id)]


@router.post("/import", status_code=201, response_model=dict[str, Any])
def import_units(
    body: ImportRequest,
    user_id: str = Depends(get_requester),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Create a new family from ``{parents, children}`` name units."""
    units = parse_units([u.model_dump() for u in body.units])
    report = import_family(conn, units, family_name=body.name, created_by=user_id)
    return report.to_dict()


@router.post("/{family_id}/members", status_code=201, response_model=dict[str, Any])
def add_member(
    family_id: str,
    body: MemberAdd,
    user_id: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict[str, Any]:
    """Add an account to the family.  Only OWNER and ADMIN members may do this."""
    if families.get_member_role(conn, family_id, user_id) not in (
        MemberRole.OWNER,
        MemberRole.ADMIN,
    ):
        raise ForbiddenError("Only family admins can add members")
    try:
        role = MemberRole(body.role.upper())
    except ValueError:
        raise ValidationError(f"Unknown role {body.role!r}") from None
    with transaction(conn):
        families.add_member(conn, family_id, body.user_id, role)
    return {"family_id": family_id, "user_id": body.user_id, "role": role.value}


@router.get("/{family_id}/tree", response_model=list[dict[str, Any]])
def get_tree(
    family_id: str,
    _: str = Depends(require_member),
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict[str, Any]]:
    """Return every node of the family with its related ids grouped by role."""
    return [node.to_dict() for node in project_family(conn, family_id)]
