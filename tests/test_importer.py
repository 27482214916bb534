"""Tests for bulk import of ``{parents, children}`` family units."""

from __future__ import annotations

import json

import pytest

from familytree.db import relationships
from familytree.db.persons import list_persons
from familytree.errors import PersistenceError, ValidationError
from familytree.tree import import_family, load_units, parse_units, project_family
from familytree.tree.importer import FamilyUnit, split_name

from conftest import edge_rows


def _units(*pairs: tuple[list[str], list[str]]) -> list[FamilyUnit]:
    return [FamilyUnit(parents=p, children=c) for p, c in pairs]


class TestImportFamily:
    def test_two_parents_are_made_spouses(self, conn) -> None:
        report = import_family(conn, _units((["Alice", "Bob"], ["Carol"])), family_name="Test")
        ids = report.people
        assert edge_rows(conn) == {
            (ids["Alice"], ids["Carol"], "PARENT"),
            (ids["Bob"], ids["Carol"], "PARENT"),
            (ids["Alice"], ids["Bob"], "SPOUSE"),
            (ids["Bob"], ids["Alice"], "SPOUSE"),
        }
        assert report.edges_created == 4

    @pytest.mark.parametrize("parents", [["Alice"], ["Alice", "Bob", "Carol"]])
    def test_no_spouse_synthesis_for_one_or_three_parents(self, conn, parents) -> None:
        import_family(conn, _units((parents, ["Kid"])))
        kinds = {row[2] for row in edge_rows(conn)}
        assert kinds == {"PARENT"}
        assert len(edge_rows(conn)) == len(parents)

    def test_people_shared_between_units_are_one_node(self, conn) -> None:
        report = import_family(
            conn,
            _units(
                (["Duddley Isaac", "Dorris Isaac"], ["Russell Isaac"]),
                (["Russell Isaac", "Yvonne Oliver"], ["Kim Isaac", "Lee Isaac"]),
            ),
        )
        assert len(list_persons(conn, report.family.id)) == 6
        ids = report.people
        by_id = {v.person.id: v.to_dict()["rels"] for v in project_family(conn, report.family.id)}
        russell = by_id[ids["Russell Isaac"]]
        assert russell["parents"] == sorted([ids["Duddley Isaac"], ids["Dorris Isaac"]])
        assert russell["children"] == sorted([ids["Kim Isaac"], ids["Lee Isaac"]])
        assert russell["spouses"] == [ids["Yvonne Oliver"]]

    def test_repeated_units_do_not_duplicate_edges(self, conn) -> None:
        unit = (["Alice", "Bob"], ["Carol"])
        report = import_family(conn, _units(unit, unit, (["Bob", "Alice"], ["Carol", "Dan"])))
        # 4 edges from the first unit, then only Alice->Dan and Bob->Dan are new.
        assert len(edge_rows(conn)) == 6
        assert report.edges_created == 6

    def test_identical_names_collapse(self, conn) -> None:
        units = parse_units(
            [
                {"parents": ["John Smith"], "children": ["Mary"]},
                {"parents": ["John  Smith "], "children": ["Peter"]},
            ]
        )
        report = import_family(conn, units)
        assert list(report.people) == ["John Smith", "Mary", "Peter"]
        assert len(list_persons(conn, report.family.id)) == 3

    def test_names_split_into_first_and_last(self, conn) -> None:
        report = import_family(conn, _units((["Ada King Lovelace"], ["Byron"])))
        people = {p.full_name: p for p in list_persons(conn, report.family.id)}
        assert people["Ada King Lovelace"].first_name == "Ada"
        assert people["Ada King Lovelace"].last_name == "King Lovelace"
        assert people["Byron"].last_name is None

    def test_child_listed_before_its_own_parent_unit(self, conn) -> None:
        report = import_family(
            conn, _units((["Russell"], ["Kim"]), (["Duddley"], ["Russell"]))
        )
        ids = report.people
        assert (ids["Duddley"], ids["Russell"], "PARENT") in edge_rows(conn)

    def test_default_family_name_and_creator(self, conn) -> None:
        report = import_family(conn, [], created_by="owner")
        assert report.family.name == "Imported Family"
        assert report.family.created_by == "owner"
        assert report.to_dict()["people_created"] == 0

    def test_child_named_after_parent_merges_without_self_link(self, conn) -> None:
        units = parse_units(
            [{"parents": ["John Smith", "Mary Smith"], "children": ["John Smith"]}]
        )
        report = import_family(conn, units)
        ids = report.people
        assert len(list_persons(conn, report.family.id)) == 2
        assert edge_rows(conn) == {
            (ids["Mary Smith"], ids["John Smith"], "PARENT"),
            (ids["John Smith"], ids["Mary Smith"], "SPOUSE"),
            (ids["Mary Smith"], ids["John Smith"], "SPOUSE"),
        }
        assert all(src != dst for src, dst, _ in edge_rows(conn))

    def test_failure_rolls_back_everything(self, conn, monkeypatch) -> None:
        real_insert = relationships.insert_edge
        calls = []

        def flaky_insert(*args, **kwargs):
            calls.append(args)
            if len(calls) == 3:
                raise PersistenceError("disk full")
            return real_insert(*args, **kwargs)

        monkeypatch.setattr(relationships, "insert_edge", flaky_insert)
        with pytest.raises(PersistenceError):
            import_family(conn, _units((["Alice", "Bob"], ["Carol", "Dan"])))
        assert conn.execute("SELECT COUNT(*) FROM persons").fetchone()[0] == 0
        assert conn.execute("SELECT COUNT(*) FROM families").fetchone()[0] == 0
        assert edge_rows(conn) == set()

    def test_map_is_not_shared_between_imports(self, conn) -> None:
        first = import_family(conn, _units((["Alice"], ["Bob"])))
        second = import_family(conn, _units((["Alice"], ["Bob"])))
        assert first.people["Alice"] != second.people["Alice"]
        assert first.family.id != second.family.id


class TestParseUnits:
    def test_normalises_whitespace(self) -> None:
        (unit,) = parse_units([{"parents": ["  Alice   Smith "], "children": []}])
        assert unit.parents == ["Alice Smith"]

    def test_missing_roles_default_to_empty(self) -> None:
        (unit,) = parse_units([{"children": ["Kid"]}])
        assert unit.parents == []

    @pytest.mark.parametrize(
        "raw",
        [
            {"parents": []},
            ["not a unit"],
            [{"parents": "Alice"}],
            [{"parents": [1, 2]}],
            [{"parents": ["  "], "children": []}],
        ],
    )
    def test_rejects_malformed_input(self, raw) -> None:
        with pytest.raises(ValidationError):
            parse_units(raw)

    def test_load_units_from_file(self, tmp_path) -> None:
        path = tmp_path / "units.json"
        path.write_text(json.dumps([{"parents": ["A", "B"], "children": ["C"]}]))
        assert load_units(path) == [FamilyUnit(parents=["A", "B"], children=["C"])]

    def test_load_units_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "units.json"
        path.write_text("{not json")
        with pytest.raises(ValidationError, match="invalid JSON"):
            load_units(path)


def test_split_name() -> None:
    assert split_name("Cher") == ("Cher", None)
    assert split_name("Eric Gomez") == ("Eric", "Gomez")
