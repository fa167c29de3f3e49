"""sitearch CLI: entry-point for site-map operations.

Usage:
    python cli/main.py --help

Command groups:
    db      → database setup
    tenant  → create / select the client whose site map you work on
    pages   → CSV import and admin edits (status, notes, delete)
    map     → tree, statistics, locations and health checks
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitearch.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from sitearch.config import settings
from sitearch.db import get_connection, init_db
from sitearch.logging_config import configure_logging
from cli.commands.map import map_app
from cli.commands.pages import pages_app
from cli.commands.tenant import tenant_app

app = typer.Typer(
    name="sitearch",
    help="Site Architecture CLI.",
    no_args_is_help=True,
)

app.add_typer(tenant_app, name="tenant")
app.add_typer(pages_app, name="pages")
app.add_typer(map_app, name="map")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to SITEARCH_LOG_LEVEL)."
    ),
) -> None:
    """Site Architecture CLI."""
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# DB commands
# ---------------------------------------------------------------------------
db_app = typer.Typer(help="Database operations.", no_args_is_help=True)
app.add_typer(db_app, name="db")


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
