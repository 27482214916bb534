"""Pydantic request/response schemas shared by the routers.

Request models accept both snake_case names and the camelCase names the
tree UI sends (``firstName``, ``birthday``, ``avatar``, ``relationType`` ...).
Required-ness of person fields is checked by the engine, not here, so a
missing first name is a 400 rather than a 422.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from familytree.db.models import Family, PersonNode


class FamilyCreate(BaseModel):
    name: str
    description: Optional[str] = None


class MemberAdd(BaseModel):
    user_id: str = Field(alias="userId")
    role: str = "MEMBER"

    model_config = ConfigDict(populate_by_name=True)


class ImportUnit(BaseModel):
    parents: list[str] = []
    children: list[str] = []


class ImportRequest(BaseModel):
    name: Optional[str] = None
    units: list[ImportUnit]


class PersonFields(BaseModel):
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    gender: Optional[str] = None
    birth_date: Optional[str] = Field(default=None, alias="birthday")
    death_date: Optional[str] = Field(default=None, alias="deathDate")
    wedding_anniversary: Optional[str] = Field(default=None, alias="weddingAnniversary")
    photo_url: Optional[str] = Field(default=None, alias="avatar")

    model_config = ConfigDict(populate_by_name=True)

    def attributes(self) -> dict[str, Any]:
        """Only the fields the client actually sent, keyed by column name."""
        return self.model_dump(exclude_unset=True, exclude={"anchor_id", "relation_type"})


class AddRelativeRequest(PersonFields):
    anchor_id: Optional[str] = Field(default=None, alias="relativeId")
    relation_type: Optional[str] = Field(default=None, alias="relationType")


class AccountLink(BaseModel):
    user_id: str = Field(alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class PersonResponse(BaseModel):
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
    created_at: int
    updated_at: int


class FamilyResponse(BaseModel):
    id: str
    name: str
    description: Optional[str]
    created_by: Optional[str]
    created_at: int
    updated_at: int


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def person_dict(person: PersonNode) -> dict[str, Any]:
    return {
        "id": person.id,
        "family_id": person.family_id,
        "first_name": person.first_name,
        "last_name": person.last_name,
        "gender": person.gender,
        "birth_date": person.birth_date,
        "death_date": person.death_date,
        "wedding_anniversary": person.wedding_anniversary,
        "photo_url": person.photo_url,
        "user_id": person.user_id,
        "created_at": person.created_at,
        "updated_at": person.updated_at,
    }


def family_dict(family: Family) -> dict[str, Any]:
    return {
        "id": family.id,
        "name": family.name,
        "description": family.description,
        "created_by": family.created_by,
        "created_at": family.created_at,
        "updated_at": family.updated_at,
    }
