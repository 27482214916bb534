"""Commands that edit nodes of the active family's tree."""

import typer

from familytree.config import settings
from familytree.db import get_connection, init_db
from familytree.errors import FamilyTreeError
from familytree.tree import (
    add_person,
    add_relative,
    link_account,
    link_parent_child,
    link_spouses,
    remove_node,
    unlink_account,
    update_person,
)
from cli.context import load_context, require_context

tree_app = typer.Typer(help="Add, edit, link and remove people in the active family.")


def _run(action):
    """Open the DB, run *action(conn, family_id)*, report domain errors."""
    ctx = load_context()
    conn = get_connection()
    init_db(conn)
    try:
        return action(conn, ctx.active_family_id)
    except FamilyTreeError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()


@tree_app.command("new")
@require_context
def tree_new(
    first_name: str = typer.Option(..., "--first-name", help="Given name."),
    last_name: str = typer.Option(None, "--last-name"),
    gender: str = typer.Option(None, "--gender", help="M or F."),
    birth_date: str = typer.Option(None, "--born", help="YYYY or YYYY-MM-DD."),
) -> None:
    """Add an unlinked person, e.g. the first member of an empty family."""
    attributes = {
        "first_name": first_name,
        "last_name": last_name,
        "gender": gender,
        "birth_date": birth_date,
    }
    person = _run(
        lambda conn, fid: add_person(conn, fid, attributes, created_by=settings.cli_user_id)
    )
    typer.echo(f"✅ Added {person.full_name} ({person.id})")


@tree_app.command("add")
@require_context
def tree_add(
    anchor_id: str = typer.Argument(..., help="Existing person the new one relates to."),
    relation: str = typer.Argument(..., help="children | parents | spouses"),
    first_name: str = typer.Option(..., "--first-name", help="Given name."),
    last_name: str = typer.Option(None, "--last-name"),
    gender: str = typer.Option(None, "--gender", help="M or F."),
    birth_date: str = typer.Option(None, "--born", help="YYYY or YYYY-MM-DD."),
    photo_url: str = typer.Option(None, "--photo"),
) -> None:
    """Add a child, parent or spouse of ANCHOR_ID."""
    attributes = {
        "first_name": first_name,
        "last_name": last_name,
        "gender": gender,
        "birth_date": birth_date,
        "photo_url": photo_url,
    }
    person = _run(
        lambda conn, fid: add_relative(
            conn, fid, anchor_id, attributes, relation, created_by=settings.cli_user_id
        )
    )
    typer.echo(f"✅ Added {person.full_name} ({person.id})")


@tree_app.command("edit")
@require_context
def tree_edit(
    person_id: str = typer.Argument(...),
    first_name: str = typer.Option(None, "--first-name"),
    last_name: str = typer.Option(None, "--last-name"),
    gender: str = typer.Option(None, "--gender"),
    birth_date: str = typer.Option(None, "--born"),
    death_date: str = typer.Option(None, "--died"),
    wedding_anniversary: str = typer.Option(None, "--wedding", help="YYYY or YYYY-MM-DD."),
    photo_url: str = typer.Option(None, "--photo"),
) -> None:
    """Update the given fields of a person."""
    given = {
        "first_name": first_name,
        "last_name": last_name,
        "gender": gender,
        "birth_date": birth_date,
        "death_date": death_date,
        "wedding_anniversary": wedding_anniversary,
        "photo_url": photo_url,
    }
    fields = {k: v for k, v in given.items() if v is not None}
    person = _run(lambda conn, fid: update_person(conn, fid, person_id, **fields))
    typer.echo(f"✅ Updated {person.full_name}")


@tree_app.command("link")
@require_context
def tree_link(
    person_a: str = typer.Argument(..., help="Parent (or first spouse)."),
    person_b: str = typer.Argument(..., help="Child (or second spouse)."),
    spouse: bool = typer.Option(False, "--spouse", help="Link as spouses instead of parent/child."),
) -> None:
    """Link two existing people."""
    if spouse:
        written = _run(lambda conn, fid: link_spouses(conn, fid, person_a, person_b))
    else:
        written = int(_run(lambda conn, fid: link_parent_child(conn, fid, person_a, person_b)))
    typer.echo("✅ Linked." if written else "Already linked.")


@tree_app.command("remove")
@require_context
def tree_remove(person_id: str = typer.Argument(...)) -> None:
    """Remove a person and every relationship that references them."""
    removed = _run(lambda conn, fid: remove_node(conn, fid, person_id))
    typer.echo(f"✅ Removed {person_id} and {removed} relationship(s).")


@tree_app.command("link-account")
@require_context
def tree_link_account(
    person_id: str = typer.Argument(...),
    user_id: str = typer.Argument(None, help="Account id; omit with --unlink."),
    unlink: bool = typer.Option(False, "--unlink"),
) -> None:
    """Attach an account to a person (or detach it with --unlink)."""
    if unlink:
        person = _run(lambda conn, fid: unlink_account(conn, fid, person_id))
        typer.echo(f"✅ {person.full_name} is no longer linked to an account.")
        return
    if not user_id:
        typer.echo("❌ USER_ID is required unless --unlink is given.")
        raise typer.Exit(code=1)
    person = _run(lambda conn, fid: link_account(conn, fid, person_id, user_id))
    typer.echo(f"✅ {person.full_name} linked to account {user_id}.")
