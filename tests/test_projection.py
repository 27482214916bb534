"""Tests for the edges → per-node view projection."""

from __future__ import annotations

from familytree.db import transaction
from familytree.db.models import RelationshipEdge, RelationshipKind
from familytree.db.persons import insert_person
from familytree.db.relationships import insert_edge
from familytree.tree import add_relative, project_edges, project_family


def _edge(source: str, target: str, kind: RelationshipKind) -> RelationshipEdge:
    return RelationshipEdge(id=f"{source}-{target}", source_id=source, target_id=target,
                            kind=kind, created_at=0)


PARENT = RelationshipKind.PARENT
SPOUSE = RelationshipKind.SPOUSE


class TestProjectEdges:
    def test_roles_from_incoming_and_outgoing(self) -> None:
        view = project_edges(
            ["N", "X", "Y", "Z"],
            [_edge("N", "X", PARENT), _edge("N", "Y", SPOUSE), _edge("Z", "N", PARENT)],
        )
        assert view["N"].to_dict() == {"parents": ["Z"], "children": ["X"], "spouses": ["Y"]}

    def test_empty_roles_are_absent(self) -> None:
        view = project_edges(["N", "X"], [_edge("N", "X", PARENT)])
        assert view["N"].to_dict() == {"children": ["X"]}
        assert view["X"].to_dict() == {"parents": ["N"]}
        assert "spouses" not in view["N"].to_dict()

    def test_isolated_node_has_no_roles(self) -> None:
        assert project_edges(["N"], [])["N"].to_dict() == {}

    def test_single_stored_spouse_direction_is_mutual(self) -> None:
        view = project_edges(["A", "B"], [_edge("A", "B", SPOUSE)])
        assert view["A"].to_dict() == {"spouses": ["B"]}
        assert view["B"].to_dict() == {"spouses": ["A"]}

    def test_duplicates_collapse(self) -> None:
        view = project_edges(
            ["A", "B"],
            [_edge("A", "B", SPOUSE), _edge("B", "A", SPOUSE), _edge("A", "B", SPOUSE)],
        )
        assert view["A"].to_dict() == {"spouses": ["B"]}

    def test_cycles_are_projected_not_rejected(self) -> None:
        view = project_edges(["A", "B"], [_edge("A", "B", PARENT), _edge("B", "A", PARENT)])
        assert view["A"].to_dict() == {"parents": ["B"], "children": ["B"]}

    def test_edges_to_unknown_nodes_ignored(self) -> None:
        view = project_edges(["A"], [_edge("A", "ghost", PARENT)])
        assert list(view) == ["A"]
        assert view["A"].to_dict() == {}


class TestProjectFamily:
    def test_display_attributes(self, conn, family) -> None:
        with transaction(conn):
            p = insert_person(
                conn,
                family.id,
                "Duddley",
                last_name="Isaac",
                gender="M",
                birth_date="1920-03-04",
                photo_url="https://i.pravatar.cc/150?img=12",
            )
        (node,) = [n.to_dict() for n in project_family(conn, family.id)]
        assert node == {
            "id": p.id,
            "userId": None,
            "data": {
                "first name": "Duddley",
                "last name": "Isaac",
                "birthday": "1920",
                "avatar": "https://i.pravatar.cc/150?img=12",
                "gender": "M",
            },
            "rels": {},
        }

    def test_round_trip_with_store(self, conn, family) -> None:
        with transaction(conn):
            n = insert_person(conn, family.id, "N")
        x = add_relative(conn, family.id, n.id, {"first_name": "X"}, "children")
        with transaction(conn):
            y = insert_person(conn, family.id, "Y")
            insert_edge(conn, n.id, y.id, SPOUSE)
        z = add_relative(conn, family.id, n.id, {"first_name": "Z"}, "parents")

        by_id = {v.person.id: v.to_dict()["rels"] for v in project_family(conn, family.id)}
        assert by_id[n.id] == {"parents": [z.id], "children": [x.id], "spouses": [y.id]}
        assert by_id[y.id] == {"spouses": [n.id]}

    def test_legacy_child_rows_project_as_parent(self, conn, family) -> None:
        with transaction(conn):
            parent = insert_person(conn, family.id, "Parent")
            child = insert_person(conn, family.id, "Child")
            conn.execute(
                "INSERT INTO relationships VALUES ('legacy', ?, ?, 'CHILD', 0, 0)",
                (child.id, parent.id),
            )
        by_id = {v.person.id: v.to_dict()["rels"] for v in project_family(conn, family.id)}
        assert by_id[parent.id] == {"children": [child.id]}
        assert by_id[child.id] == {"parents": [parent.id]}

    def test_cross_family_isolation(self, conn, family, other_family) -> None:
        with transaction(conn):
            mine = insert_person(conn, family.id, "Mine")
            theirs = insert_person(conn, other_family.id, "Theirs")
            # A corrupt cross-family edge must not leak into either projection.
            insert_edge(conn, mine.id, theirs.id, PARENT)

        mine_view = project_family(conn, family.id)
        theirs_view = project_family(conn, other_family.id)
        assert [v.person.id for v in mine_view] == [mine.id]
        assert [v.person.id for v in theirs_view] == [theirs.id]
        assert mine_view[0].to_dict()["rels"] == {}
        assert theirs_view[0].to_dict()["rels"] == {}
