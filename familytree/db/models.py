"""Dataclass models representing DB rows.

These are plain Python objects – not ORM models.  The DB layer serialises /
deserialises to and from these types.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RelationshipKind(str, Enum):
    """Closed set of edge kinds the engine writes and reasons about."""

    PARENT = "PARENT"
    SPOUSE = "SPOUSE"


# Legacy literal still accepted in stored rows: (A -> B, CHILD) == (B -> A, PARENT).
LEGACY_CHILD = "CHILD"


class MemberRole(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


@dataclass
class Family:
    id: str
    name: str
    description: Optional[str]
    created_by: Optional[str]
    created_at: int
    updated_at: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Family:
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


@dataclass
class PersonNode:
    id: str
    family_id: str
    first_name: str
    last_name: Optional[str]
    gender: Optional[str]
    birth_date: Optional[str]
    death_date: Optional[str]
    wedding_anniversary: Optional[str]
    photo_url: Optional[str]
    user_id: Optional[str]
    created_by: Optional[str]
    created_at: int
    updated_at: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> PersonNode:
        return cls(
            id=row["id"],
            family_id=row["family_id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            gender=row["gender"],
            birth_date=row["birth_date"],
            death_date=row["death_date"],
            wedding_anniversary=row["wedding_anniversary"],
            photo_url=row["photo_url"],
            user_id=row["user_id"],
            created_by=row["created_by"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()

    @property
    def birth_year(self) -> Optional[str]:
        """Four-digit birth year, or ``None`` when unknown."""
        if not self.birth_date or len(self.birth_date) < 4:
            return None
        year = self.birth_date[:4]
        return year if year.isdigit() else None


@dataclass
class RelationshipEdge:
    """A directed, typed edge ``source -> target``.

    Rows stored with the legacy ``CHILD`` literal are flipped on read so
    every edge the engine sees is either PARENT or SPOUSE.
    """

    id: str
    source_id: str
    target_id: str
    kind: RelationshipKind
    created_at: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> RelationshipEdge:
        raw = row["relationship_type"]
        source_id, target_id = row["person1_id"], row["person2_id"]
        if raw == LEGACY_CHILD:
            source_id, target_id = target_id, source_id
            kind = RelationshipKind.PARENT
        else:
            kind = RelationshipKind(raw)
        return cls(
            id=row["id"],
            source_id=source_id,
            target_id=target_id,
            kind=kind,
            created_at=row["created_at"],
        )
