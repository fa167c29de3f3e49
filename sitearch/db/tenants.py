"""CRUD operations for the ``tenants`` table."""

from __future__ import annotations

import sqlite3
import uuid
from time import time
from typing import Optional

from sitearch.db.models import Tenant


def _row_to_tenant(row: sqlite3.Row) -> Tenant:
    return Tenant(
        id=row["id"],
        name=row["name"],
        uploaded_at=row["uploaded_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def create_tenant(
    conn: sqlite3.Connection,
    name: str,
    tenant_id: Optional[str] = None,
) -> Tenant:
    """Insert a new tenant and return it.

    Args:
        conn: Open DB connection.
        name: Display name of the client.
        tenant_id: Explicit id override (a UUID is generated when omitted).
    """
    tid = tenant_id or str(uuid.uuid4())
    now = int(time())
    with conn:
        conn.execute(
            "INSERT INTO tenants (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
            (tid, name, now, now),
        )
    return get_tenant(conn, tid)  # type: ignore[return-value]


def get_tenant(conn: sqlite3.Connection, tenant_id: str) -> Optional[Tenant]:
    """Fetch a tenant by id.  Returns ``None`` if not found."""
    row = conn.execute("SELECT * FROM tenants WHERE id = ?", (tenant_id,)).fetchone()
    return _row_to_tenant(row) if row else None


def find_tenant(conn: sqlite3.Connection, identifier: str) -> Optional[Tenant]:
    """Look a tenant up by id first, then by exact name."""
    tenant = get_tenant(conn, identifier)
    if tenant is not None:
        return tenant
    row = conn.execute(
        "SELECT * FROM tenants WHERE name = ? ORDER BY created_at LIMIT 1", (identifier,)
    ).fetchone()
    return _row_to_tenant(row) if row else None


def list_tenants(conn: sqlite3.Connection) -> list[Tenant]:
    """Return every tenant, oldest first."""
    rows = conn.execute("SELECT * FROM tenants ORDER BY created_at, name").fetchall()
    return [_row_to_tenant(r) for r in rows]


def delete_tenant(conn: sqlite3.Connection, tenant_id: str) -> None:
    """Delete a tenant and its pages (via CASCADE).  No-op if absent."""
    with conn:
        conn.execute("DELETE FROM tenants WHERE id = ?", (tenant_id,))
