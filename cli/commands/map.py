"""Commands for viewing the active tenant's site map."""

from typing import Optional

import typer

from sitearch.db import get_connection, init_db
from sitearch.db.pages import get_records
from sitearch.engine.aggregate import build_site_tree
from sitearch.engine.filters import filter_records
from sitearch.engine.health import WARN, check_site
from sitearch.engine.locations import location_segments
from sitearch.engine.stats import compute_stats

from cli.context import load_context, require_context
from cli.rendering import render_stats, render_tree

map_app = typer.Typer(help="Visualise the site architecture.")


def _load_records() -> list:
    ctx = load_context()
    conn = get_connection()
    init_db(conn)
    try:
        return get_records(conn, ctx.active_tenant_id)
    finally:
        conn.close()


@map_app.command("show")
@require_context
def map_show(
    text: Optional[str] = typer.Option(None, "--text", help="Search URL, keyword or cluster."),
    location: Optional[str] = typer.Option(None, "--location", help="Location code, e.g. uk."),
) -> None:
    """Display the URL-path tree with rolled-up volume and page counts."""
    records = filter_records(_load_records(), text=text, location=location)
    if not records:
        typer.echo("No pages match your filter." if (text or location) else "No pages imported yet.")
        return

    typer.echo(render_tree(build_site_tree(records)))
    typer.echo(f"\n{len(records)} page{'s' if len(records) != 1 else ''}")


@map_app.command("stats")
@require_context
def map_stats() -> None:
    """Show site-wide progress and distribution statistics."""
    ctx = load_context()
    stats = compute_stats(_load_records())
    typer.echo(f"\n📊 Site map: {ctx.active_tenant_name}")
    typer.echo("-" * 40)
    typer.echo(render_stats(stats))
    typer.echo("")


@map_app.command("locations")
@require_context
def map_locations() -> None:
    """List the location codes (first URL segment) used by the site."""
    codes = location_segments(_load_records())
    if not codes:
        typer.echo("Single location: no location folders found.")
        return
    for code in codes:
        typer.echo(f"  /{code}/")


@map_app.command("health")
@require_context
def map_health() -> None:
    """Run data-quality checks over the page list."""
    results = check_site(_load_records())
    for r in results:
        icon = "⚠️ " if r.level == WARN else "✅"
        typer.echo(f"{icon} {r.label}: {r.message}")
