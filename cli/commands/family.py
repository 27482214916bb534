"""Family management commands."""

import json
from pathlib import Path

import typer

from familytree.config import settings
from familytree.db import families, get_connection, init_db, transaction
from familytree.errors import FamilyTreeError
from familytree.tree import import_family, load_units, project_family
from cli.context import load_context, require_context, save_context
from cli.rendering import render_tree

family_app = typer.Typer(help="Create, import, select and display families.")


def _switch(family_id: str, name: str) -> None:
    ctx = load_context()
    ctx.active_family_id = family_id
    ctx.active_family_name = name
    save_context(ctx)
    typer.echo(f"🌳 Active family: {name}")


@family_app.command("create")
def family_create(
    name: str = typer.Argument(..., help="Name of the new family."),
    description: str = typer.Option(None, help="Optional description."),
) -> None:
    """Create an empty family and switch to it."""
    conn = get_connection()
    init_db(conn)
    try:
        with transaction(conn):
            family = families.insert_family(
                conn, name, description=description, created_by=settings.cli_user_id
            )
        typer.echo(f"✅ Family created: {family.name} ({family.id})")
        _switch(family.id, family.name)
    except FamilyTreeError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()


@family_app.command("import")
def family_import(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of {parents, children} units."),
    name: str = typer.Option(None, help="Family name (defaults to FAMILYTREE_DEFAULT_FAMILY_NAME)."),
) -> None:
    """Build a new family from a unit file and switch to it."""
    conn = get_connection()
    init_db(conn)
    try:
        units = load_units(path)
        report = import_family(conn, units, family_name=name, created_by=settings.cli_user_id)
        typer.echo(
            f"✅ Imported {report.family.name}: "
            f"{len(report.people)} people, {report.edges_created} relationships"
        )
        _switch(report.family.id, report.family.name)
    except FamilyTreeError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()


@family_app.command("list")
def family_list() -> None:
    """List all families."""
    conn = get_connection()
    init_db(conn)
    try:
        rows = families.list_families(conn)
        if not rows:
            typer.echo("No families found.")
            return
        active_id = load_context().active_family_id
        for f in rows:
            marker = "*" if f.id == active_id else " "
            typer.echo(f"{marker} {f.name} \t[{f.id}]")
    finally:
        conn.close()


@family_app.command("use")
def family_use(
    identifier: str = typer.Argument(..., help="Family name or id."),
) -> None:
    """Switch the active family."""
    conn = get_connection()
    init_db(conn)
    try:
        target = next(
            (f for f in families.list_families(conn) if identifier in (f.id, f.name)),
            None,
        )
    finally:
        conn.close()
    if target is None:
        typer.echo(f"❌ Family '{identifier}' not found.")
        raise typer.Exit(code=1)
    _switch(target.id, target.name)


@family_app.command("show")
@require_context
def family_show(
    format: str = typer.Option("tree", "--format", help="Output format: tree | json"),
) -> None:
    """Print the active family's tree."""
    ctx = load_context()
    conn = get_connection()
    init_db(conn)
    try:
        nodes = [n.to_dict() for n in project_family(conn, ctx.active_family_id)]
    finally:
        conn.close()

    if format == "json":
        typer.echo(json.dumps(nodes, indent=2))
    else:
        typer.echo(f"🌳 {ctx.active_family_name}")
        typer.echo(render_tree(nodes))
