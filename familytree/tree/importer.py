"""Build a whole family graph from a list of family units.

A unit is ``{"parents": [...names], "children": [...names]}``.  People are
identified by their whitespace-normalised full name, so two different
people with the same name in one import collapse into a single node.

The import runs in two passes inside one transaction:

1. create a node for every name seen anywhere (parent or child);
2. per unit, link every parent to every child, and link the two parents
   as spouses when the unit lists exactly two.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from familytree.config import settings
from familytree.db import families, persons
from familytree.db.connection import transaction
from familytree.db.models import Family
from familytree.errors import ValidationError
from familytree.tree.insertion import _link_parent_child, _link_spouses

log = logging.getLogger(__name__)


@dataclass
class FamilyUnit:
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)


@dataclass
class ImportReport:
    family: Family
    people: dict[str, str]
    edges_created: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "family_id": self.family.id,
            "family_name": self.family.name,
            "people": dict(self.people),
            "people_created": len(self.people),
            "edges_created": self.edges_created,
        }


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def normalise_name(name: Any) -> str:
    return " ".join(str(name).split())


def split_name(full_name: str) -> tuple[str, Optional[str]]:
    """``"Ada King Lovelace"`` → ``("Ada", "King Lovelace")``."""
    first, _, rest = full_name.partition(" ")
    return first, rest or None


def parse_units(raw: Any) -> list[FamilyUnit]:
    """Validate decoded JSON into :class:`FamilyUnit` objects.

    Raises:
        ValidationError: *raw* is not a list of objects holding string lists,
            or a name is blank.
    """
    if not isinstance(raw, list):
        raise ValidationError("Import data must be a list of family units")

    units: list[FamilyUnit] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValidationError(f"Unit #{index} must be an object")
        names: dict[str, list[str]] = {}
        for role in ("parents", "children"):
            value = item.get(role, [])
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValidationError(f"Unit #{index}: {role!r} must be a list of names")
            cleaned = [normalise_name(v) for v in value]
            if any(not name for name in cleaned):
                raise ValidationError(f"Unit #{index}: blank name in {role!r}")
            names[role] = cleaned
        units.append(FamilyUnit(parents=names["parents"], children=names["children"]))
    return units


def load_units(path: str | Path) -> list[FamilyUnit]:
    """Read and validate a JSON unit file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path}: invalid JSON ({exc})") from exc
    return parse_units(raw)


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _ensure_person(
    conn: sqlite3.Connection,
    family_id: str,
    name: str,
    name_to_id: dict[str, str],
    created_by: Optional[str],
) -> str:
    person_id = name_to_id.get(name)
    if person_id is None:
        first_name, last_name = split_name(name)
        person = persons.insert_person(
            conn, family_id, first_name, created_by=created_by, last_name=last_name
        )
        person_id = name_to_id[name] = person.id
    return person_id


def _link_unit(
    conn: sqlite3.Connection,
    family_id: str,
    unit: FamilyUnit,
    name_to_id: dict[str, str],
) -> int:
    parent_ids = list(dict.fromkeys(name_to_id[n] for n in unit.parents))
    child_ids = list(dict.fromkeys(name_to_id[n] for n in unit.children))

    created = 0
    for parent_id in parent_ids:
        for child_id in child_ids:
            if parent_id == child_id:
                # A child named after a parent merges into the parent's node.
                log.warning("Skipping self-parent link for person %s in family %s", parent_id, family_id)
                continue
            if _link_parent_child(conn, family_id, parent_id, child_id):
                created += 1
    if len(parent_ids) == 2:
        created += _link_spouses(conn, family_id, parent_ids[0], parent_ids[1])
    return created


def import_family(
    conn: sqlite3.Connection,
    units: list[FamilyUnit],
    family_name: Optional[str] = None,
    created_by: Optional[str] = None,
) -> ImportReport:
    """Create a new family and populate it from *units*.

    The name→id map lives only for this call.  Nothing is committed unless
    every node and edge is written.
    """
    name = (family_name or "").strip() or settings.default_family_name
    name_to_id: dict[str, str] = {}
    edges_created = 0

    with transaction(conn):
        family = families.insert_family(conn, name, created_by=created_by)

        for unit in units:
            for person_name in (*unit.parents, *unit.children):
                _ensure_person(conn, family.id, person_name, name_to_id, created_by)

        for unit in units:
            edges_created += _link_unit(conn, family.id, unit, name_to_id)

    log.info(
        "Imported family %r (%s): %d people, %d edges from %d unit(s)",
        family.name, family.id, len(name_to_id), edges_created, len(units),
    )
    return ImportReport(family=family, people=name_to_id, edges_created=edges_created)
