"""Persistent state for the family tree CLI.

Tracks the "active family" so tree commands do not need a family id on
every invocation.  Stored in ``<workspace>/cli/context.json``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from functools import wraps
from pathlib import Path
from typing import Callable

import typer

from familytree.config import settings


@dataclass
class CliContext:
    active_family_id: str | None = None
    active_family_name: str | None = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: str) -> CliContext:
        try:
            raw = json.loads(data)
            return cls(**raw)
        except (json.JSONDecodeError, TypeError):
            return cls()


def _get_context_path() -> Path:
    return settings.cli_config_dir / "context.json"


def load_context() -> CliContext:
    """Load the CLI context from disk. Returns defaults if missing/corrupt."""
    path = _get_context_path()
    if not path.exists():
        return CliContext()
    return CliContext.from_json(path.read_text(encoding="utf-8"))


def save_context(ctx: CliContext) -> None:
    settings.cli_config_dir.mkdir(parents=True, exist_ok=True)
    _get_context_path().write_text(ctx.to_json(), encoding="utf-8")


def require_context(func: Callable) -> Callable:
    """Decorator for CLI commands that need an active family.

    Aborts with exit code 1 when none is selected; the command itself calls
    :func:`load_context` to read it.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = load_context()
        if not ctx.active_family_id:
            typer.echo("❌ No active family selected.")
            typer.echo("Run 'family create <name>', 'family import <file>' or 'family use <id>' first.")
            raise typer.Exit(code=1)
        return func(*args, **kwargs)

    return wrapper
