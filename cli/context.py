"""Persistent state management for the sitearch CLI.

Tracks the "active tenant" so page and map commands know which site map to
work on.  Stored in ``<settings.cli_config_dir>/context.json``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from functools import wraps
from pathlib import Path
from typing import Callable

import typer

from sitearch.config import settings


@dataclass
class CliContext:
    active_tenant_id: str | None = None
    active_tenant_name: str | None = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: str) -> CliContext:
        try:
            return cls(**json.loads(data))
        except (json.JSONDecodeError, TypeError):
            return cls()


def _get_context_path() -> Path:
    """Return the path to the context JSON file."""
    return settings.cli_config_dir / "context.json"


def load_context() -> CliContext:
    """Load the CLI context from disk. Returns defaults if missing/corrupt."""
    path = _get_context_path()
    if not path.exists():
        return CliContext()
    try:
        return CliContext.from_json(path.read_text(encoding="utf-8"))
    except OSError:
        return CliContext()


def save_context(ctx: CliContext) -> None:
    """Save the CLI context to disk."""
    settings.cli_config_dir.mkdir(parents=True, exist_ok=True)
    _get_context_path().write_text(ctx.to_json(), encoding="utf-8")


def require_context(func: Callable) -> Callable:
    """Decorator for CLI commands that need an active tenant.

    Aborts with exit code 1 when none is selected; the command itself calls
    :func:`load_context` to read it.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = load_context()
        if not ctx.active_tenant_id:
            typer.echo("❌ No active tenant selected.")
            typer.echo("Run 'tenant new <name>' or 'tenant switch <name>' first.")
            raise typer.Exit(code=1)
        return func(*args, **kwargs)

    return wrapper
