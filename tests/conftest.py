"""Shared fixtures: an isolated in-memory database per test."""

from __future__ import annotations

import sqlite3
from typing import Generator

import pytest

from familytree.db import get_connection, init_db, transaction
from familytree.db.families import insert_family
from familytree.db.models import Family


@pytest.fixture()
def conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with the schema initialised."""
    connection = get_connection(db_path=":memory:")  # type: ignore[arg-type]
    init_db(connection)
    yield connection
    connection.close()


@pytest.fixture()
def family(conn: sqlite3.Connection) -> Family:
    with transaction(conn):
        return insert_family(conn, "Isaac Family", created_by="owner")


@pytest.fixture()
def other_family(conn: sqlite3.Connection) -> Family:
    with transaction(conn):
        return insert_family(conn, "Gomez Family", created_by="someone-else")


def edge_rows(conn: sqlite3.Connection) -> set[tuple[str, str, str]]:
    """Raw ``(person1_id, person2_id, relationship_type)`` triples in the store."""
    return {
        (r["person1_id"], r["person2_id"], r["relationship_type"])
        for r in conn.execute(
            "SELECT person1_id, person2_id, relationship_type FROM relationships"
        ).fetchall()
    }
