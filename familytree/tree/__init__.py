"""Relationship graph engine.

Public re-exports so callers can write::

    from familytree.tree import add_relative, project_family, import_family
"""

from familytree.tree.accounts import get_node_account, link_account, unlink_account
from familytree.tree.importer import FamilyUnit, import_family, load_units, parse_units
from familytree.tree.insertion import (
    add_person,
    add_relative,
    link_parent_child,
    link_spouses,
    remove_node,
    update_person,
)
from familytree.tree.projection import project_edges, project_family
from familytree.tree.validation import RelationType

__all__ = [
    "FamilyUnit",
    "RelationType",
    "add_person",
    "add_relative",
    "get_node_account",
    "import_family",
    "link_account",
    "link_parent_child",
    "link_spouses",
    "load_units",
    "parse_units",
    "project_edges",
    "project_family",
    "remove_node",
    "unlink_account",
    "update_person",
]
