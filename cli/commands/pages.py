"""Page-list commands: CSV import and admin edits for the active tenant."""

from pathlib import Path
from typing import Optional

import typer

from sitearch.db import get_connection, init_db
from sitearch.db.pages import (
    delete_page,
    get_records,
    preview_import,
    put_records,
    update_page,
)
from sitearch.engine.filters import filter_records
from sitearch.engine.models import PageStatus
from sitearch.engine.parser import template_csv
from cli.context import load_context, require_context
from cli.rendering import STATUS_LABELS, format_volume

pages_app = typer.Typer(help="Import and edit the active tenant's pages.")


@pages_app.command("import")
@require_context
def pages_import(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or TSV export."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Import an SEO keyword-research sheet, keeping status and notes of known pages.

    Pages missing from the sheet are removed from the site map.
    """
    ctx = load_context()
    conn = get_connection()
    init_db(conn)

    try:
        try:
            raw = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError:
            typer.echo(f"❌ {path} is not UTF-8 text. Re-export the sheet as UTF-8 CSV.")
            raise typer.Exit(code=1)
        if not raw.strip():
            typer.echo(f"❌ {path} is empty.")
            raise typer.Exit(code=1)

        try:
            merged, summary = preview_import(conn, ctx.active_tenant_id, raw)
        except ValueError as exc:
            # ParseEmptyError, or the active tenant no longer exists.
            typer.echo(f"❌ {exc}")
            raise typer.Exit(code=1)

        typer.echo(
            f"📄 {len(merged)} pages parsed: {len(summary.added)} new, "
            f"{len(summary.kept)} existing"
        )
        if summary.removed:
            typer.echo(f"⚠️  {len(summary.removed)} stored page(s) are not in this sheet and will be removed:")
            for removed in summary.removed:
                typer.echo(f"    - {removed}")
            if not yes:
                typer.confirm("Continue with the import?", abort=True)

        put_records(conn, ctx.active_tenant_id, merged, uploaded=True)
        typer.echo(f"✅ Imported {len(merged)} pages into {ctx.active_tenant_name}")
    finally:
        conn.close()


@pages_app.command("list")
@require_context
def pages_list(
    text: Optional[str] = typer.Option(None, "--text", help="Search URL, keyword or cluster."),
    location: Optional[str] = typer.Option(None, "--location", help="Location code, e.g. uk."),
) -> None:
    """List the active tenant's pages."""
    ctx = load_context()
    conn = get_connection()
    init_db(conn)

    try:
        records = filter_records(get_records(conn, ctx.active_tenant_id), text=text, location=location)
        if not records:
            typer.echo("No pages found.")
            return
        for r in records:
            typer.echo(
                f"  {r.full_url_path}  {r.primary_keyword!r}  "
                f"{format_volume(r.search_volume)}/mo  [{r.priority}]  {STATUS_LABELS[r.status]}"
            )
        typer.echo(f"\n{len(records)} page{'s' if len(records) != 1 else ''}")
    finally:
        conn.close()


@pages_app.command("status")
@require_context
def pages_status(
    url_path: str = typer.Argument(..., help="Full URL path of the page."),
    status: PageStatus = typer.Argument(..., help="New build status."),
) -> None:
    """Set the build status of a page."""
    ctx = load_context()
    conn = get_connection()
    init_db(conn)

    try:
        record = update_page(conn, ctx.active_tenant_id, url_path, status=status.value)
        typer.echo(f"✅ {record.full_url_path} → {STATUS_LABELS[record.status]}")
    except ValueError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()


@pages_app.command("note")
@require_context
def pages_note(
    url_path: str = typer.Argument(..., help="Full URL path of the page."),
    notes: str = typer.Argument(..., help="Note text (replaces the current note)."),
) -> None:
    """Replace the admin note on a page."""
    ctx = load_context()
    conn = get_connection()
    init_db(conn)

    try:
        record = update_page(conn, ctx.active_tenant_id, url_path, notes=notes)
        typer.echo(f"✅ Note saved on {record.full_url_path}")
    except ValueError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()


@pages_app.command("delete")
@require_context
def pages_delete(
    url_path: str = typer.Argument(..., help="Full URL path of the page."),
) -> None:
    """Remove a page from the site map."""
    ctx = load_context()
    conn = get_connection()
    init_db(conn)

    try:
        removed = delete_page(conn, ctx.active_tenant_id, url_path)
    except ValueError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    finally:
        conn.close()

    if not removed:
        typer.echo(f"❌ Page {url_path!r} not found.")
        raise typer.Exit(code=1)
    typer.echo(f"🗑️  Removed {url_path}")


@pages_app.command("template")
def pages_template(
    output: Path = typer.Option(None, help="Write the template here instead of stdout."),
) -> None:
    """Print (or save) the CSV import template."""
    content = template_csv()
    if output is None:
        typer.echo(content, nl=False)
        return
    output.write_text(content, encoding="utf-8")
    typer.echo(f"✅ Template written to {output.absolute()}")
