"""Render a projected family tree as ASCII for the terminal."""

from __future__ import annotations

from typing import Any


def _label(node: dict[str, Any]) -> str:
    data = node.get("data", {})
    name = f"{data.get('first name', '')} {data.get('last name') or ''}".strip()
    parts = [name or node["id"][:8]]
    if data.get("birthday"):
        parts.append(f"({data['birthday']})")
    if data.get("gender"):
        parts.append(f"[{data['gender']}]")
    return " ".join(parts)


def render_tree(nodes: list[dict[str, Any]]) -> str:
    """Draw descendant trees starting from every node without parents.

    Spouses are printed inline as ``A ⚭ B``; a couple's shared children are
    printed once under the first partner reached.  A node already printed
    is shown as a reference instead of being expanded again.

    Args:
        nodes: Projection dicts as returned by ``TreeNodeView.to_dict``.
    """
    if not nodes:
        return "(empty tree)"

    by_id = {n["id"]: n for n in nodes}
    lines: list[str] = []
    printed: set[str] = set()

    def _rels(node_id: str, role: str) -> list[str]:
        return [r for r in by_id[node_id].get("rels", {}).get(role, []) if r in by_id]

    def _visit(node_id: str, prefix: str, connector: str, child_prefix: str) -> None:
        if node_id in printed:
            lines.append(f"{prefix}{connector}↺ {_label(by_id[node_id])}")
            return
        printed.add(node_id)
        spouses = _rels(node_id, "spouses")
        printed.update(spouses)
        line = _label(by_id[node_id])
        for spouse_id in spouses:
            line += f" ⚭ {_label(by_id[spouse_id])}"
        lines.append(f"{prefix}{connector}{line}")

        children: list[str] = []
        for owner in [node_id, *spouses]:
            for child_id in _rels(owner, "children"):
                if child_id not in children:
                    children.append(child_id)

        sub_prefix = prefix + child_prefix
        for i, child_id in enumerate(children):
            last = i == len(children) - 1
            _visit(
                child_id,
                sub_prefix,
                "└── " if last else "├── ",
                "    " if last else "│   ",
            )

    def _is_root(node_id: str) -> bool:
        # Someone who married into the family hangs under their spouse.
        return not _rels(node_id, "parents") and not any(
            _rels(s, "parents") for s in _rels(node_id, "spouses")
        )

    for node in nodes:
        if node["id"] not in printed and _is_root(node["id"]):
            _visit(node["id"], "", "", "")
    # Anything left is only reachable through a parent cycle.
    for node in nodes:
        if node["id"] not in printed:
            _visit(node["id"], "", "", "")
    return "\n".join(lines)
