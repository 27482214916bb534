"""Edges → per-node ``{parents, children, spouses}`` view for tree rendering.

The projection is structural only: it does no cycle detection and no
genealogy validation, so whatever is stored is what gets drawn.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Iterable

from familytree.db import persons, relationships
from familytree.db.models import PersonNode, RelationshipEdge, RelationshipKind

ROLES = ("parents", "children", "spouses")


@dataclass
class Relations:
    parents: set[str] = field(default_factory=set)
    children: set[str] = field(default_factory=set)
    spouses: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, list[str]]:
        """Sorted id lists; empty roles are left out entirely."""
        out: dict[str, list[str]] = {}
        for role in ROLES:
            ids = getattr(self, role)
            if ids:
                out[role] = sorted(ids)
        return out


def project_edges(
    node_ids: Iterable[str], edges: Iterable[RelationshipEdge]
) -> dict[str, Relations]:
    """Group each node's incident edges by role in a single pass.

    - ``N -> X`` PARENT: X is a child of N, N is a parent of X.
    - ``N -> X`` SPOUSE: each is a spouse of the other, so a pair stored in
      only one direction is still shown as mutual.

    Edges with an endpoint outside *node_ids* are ignored.
    """
    view = {nid: Relations() for nid in node_ids}
    for edge in edges:
        source = view.get(edge.source_id)
        target = view.get(edge.target_id)
        if source is None or target is None:
            continue
        if edge.kind is RelationshipKind.PARENT:
            source.children.add(edge.target_id)
            target.parents.add(edge.source_id)
        elif edge.kind is RelationshipKind.SPOUSE:
            source.spouses.add(edge.target_id)
            target.spouses.add(edge.source_id)
    return view


@dataclass
class TreeNodeView:
    """One person plus their related ids, shaped for the chart renderer."""

    person: PersonNode
    relations: Relations

    def to_dict(self) -> dict[str, Any]:
        p = self.person
        data: dict[str, Any] = {
            "first name": p.first_name,
            "last name": p.last_name,
            "birthday": p.birth_year,
            "avatar": p.photo_url,
            "gender": p.gender,
            "deathDate": p.death_date,
            "weddingAnniversary": p.wedding_anniversary,
        }
        return {
            "id": p.id,
            "userId": p.user_id,
            "data": {k: v for k, v in data.items() if v is not None},
            "rels": self.relations.to_dict(),
        }


def project_family(conn: sqlite3.Connection, family_id: str) -> list[TreeNodeView]:
    """Re-derive the whole tree of *family_id* from the store."""
    people = persons.list_persons(conn, family_id)
    edges = relationships.list_family_edges(conn, family_id)
    view = project_edges((p.id for p in people), edges)
    return [TreeNodeView(person=p, relations=view[p.id]) for p in people]
