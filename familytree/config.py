"""Centralised settings for the family tree backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("FAMILYTREE_WORKSPACE", Path.home() / ".familytree_data")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.workspace_dir / "familytree.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("FAMILYTREE_LOG_LEVEL", "INFO")
    )

    # ------------------------------------------------------------------
    # Bulk import / CLI
    # ------------------------------------------------------------------
    default_family_name: str = field(
        default_factory=lambda: os.environ.get(
            "FAMILYTREE_DEFAULT_FAMILY_NAME", "Imported Family"
        )
    )
    cli_user_id: str = field(
        default_factory=lambda: os.environ.get("FAMILYTREE_CLI_USER", "cli-admin")
    )

    @property
    def cli_config_dir(self) -> Path:
        """Directory holding the CLI context file (active family)."""
        return self.workspace_dir / "cli"

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from familytree.config import settings
settings = Settings()
