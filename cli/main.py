"""Family tree CLI — entry-point for all backend operations.

Usage:
    python cli/main.py --help

Command groups:
    db      → database setup
    family  → create / import / select / show families
    tree    → add, edit, link and remove people in the active family
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from familytree.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import typer

from familytree.config import settings
from familytree.db import get_connection, init_db
from familytree.log import configure_logging
from cli.commands.family import family_app
from cli.commands.tree import tree_app

app = typer.Typer(
    name="familytree",
    help="Family tree backend CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    configure_logging("DEBUG" if verbose else settings.log_level)


db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")
app.add_typer(family_app, name="family")
app.add_typer(tree_app, name="tree")


@db_app.command("init")
def db_init() -> None:
    """Initialise the SQLite database (create tables if they do not exist)."""
    conn = get_connection()
    init_db(conn)
    conn.close()
    typer.echo(f"[db init] Database ready at {settings.db_path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
