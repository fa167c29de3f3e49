"""Tenant (client) management commands."""

import typer

from sitearch.db import get_connection, init_db
from sitearch.db.pages import get_records
from sitearch.db.tenants import create_tenant, delete_tenant, find_tenant, list_tenants
from cli.context import CliContext, load_context, save_context

tenant_app = typer.Typer(help="Manage client tenants.")


@tenant_app.command("new")
def tenant_new(
    name: str = typer.Argument(..., help="Name of the new tenant.")
) -> None:
    """Create a new tenant and switch to it."""
    conn = get_connection()
    init_db(conn)

    try:
        tenant = create_tenant(conn, name)
        typer.echo(f"✅ Tenant created: {tenant.name} ({tenant.id})")

        ctx = load_context()
        ctx.active_tenant_id = tenant.id
        ctx.active_tenant_name = tenant.name
        save_context(ctx)

        typer.echo(f"📂 Switched to tenant: {tenant.name}")
    finally:
        conn.close()


@tenant_app.command("list")
def tenant_list() -> None:
    """List all tenants with their page counts."""
    conn = get_connection()
    init_db(conn)

    try:
        tenants = list_tenants(conn)
        if not tenants:
            typer.echo("No tenants found.")
            return

        active_id = load_context().active_tenant_id
        typer.echo("Tenants:")
        for t in tenants:
            marker = "*" if t.id == active_id else " "
            count = len(get_records(conn, t.id))
            typer.echo(f"{marker} {t.name} \t[{t.id}] \t{count} pages")
    finally:
        conn.close()


@tenant_app.command("switch")
def tenant_switch(
    identifier: str = typer.Argument(..., help="Tenant name or id.")
) -> None:
    """Switch the active tenant."""
    conn = get_connection()
    init_db(conn)

    try:
        target = find_tenant(conn, identifier)
        if not target:
            typer.echo(f"❌ Tenant '{identifier}' not found.")
            raise typer.Exit(code=1)

        ctx = load_context()
        ctx.active_tenant_id = target.id
        ctx.active_tenant_name = target.name
        save_context(ctx)

        typer.echo(f"📂 Switched to tenant: {target.name}")
    finally:
        conn.close()


@tenant_app.command("delete")
def tenant_delete(
    identifier: str = typer.Argument(..., help="Tenant name or id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete a tenant and all of its pages."""
    conn = get_connection()
    init_db(conn)

    try:
        target = find_tenant(conn, identifier)
        if not target:
            typer.echo(f"❌ Tenant '{identifier}' not found.")
            raise typer.Exit(code=1)

        if not yes:
            typer.confirm(f"Delete tenant {target.name!r} and all its pages?", abort=True)

        delete_tenant(conn, target.id)
        typer.echo(f"🗑️  Deleted tenant: {target.name}")

        ctx = load_context()
        if ctx.active_tenant_id == target.id:
            save_context(CliContext())
    finally:
        conn.close()
