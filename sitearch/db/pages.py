"""Page-list storage for one tenant.

The engine only ever sees whole lists: :func:`get_records` returns a tenant's
pages in stored order and :func:`put_records` replaces them atomically.
Admin edits (:func:`update_page`, :func:`delete_page`) address pages by
``full_url_path``; when a path is stored more than once every copy is
affected.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from time import time
from typing import Optional

from sitearch.config import settings
from sitearch.db.tenants import get_tenant
from sitearch.engine.models import PageRecord, PageStatus, normalize_path
from sitearch.engine.parser import parse_records
from sitearch.engine.reconcile import ImportSummary, reconcile, summarize_import

logger = logging.getLogger(__name__)

_COLUMNS = (
    "tenant_id",
    "position",
    "cluster_name",
    "primary_keyword",
    "search_volume",
    "intent",
    "page_type",
    "full_url_path",
    "priority",
    "secondary_keywords",
    "status",
    "notes",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _row_to_record(row: sqlite3.Row) -> PageRecord:
    return PageRecord(
        cluster_name=row["cluster_name"],
        primary_keyword=row["primary_keyword"],
        search_volume=row["search_volume"],
        intent=row["intent"],
        page_type=row["page_type"],
        full_url_path=row["full_url_path"],
        priority=row["priority"],
        secondary_keywords=json.loads(row["secondary_keywords"] or "[]"),
        status=PageStatus(row["status"]),
        notes=row["notes"],
    )


def _record_params(tenant_id: str, position: int, record: PageRecord) -> tuple:
    return (
        tenant_id,
        position,
        record.cluster_name,
        record.primary_keyword,
        record.search_volume,
        record.intent,
        record.page_type,
        record.full_url_path,
        record.priority,
        json.dumps(record.secondary_keywords),
        record.status.value,
        record.notes,
    )


def _require_tenant(conn: sqlite3.Connection, tenant_id: str) -> None:
    if get_tenant(conn, tenant_id) is None:
        raise ValueError(f"Tenant not found: {tenant_id!r}")


def _touch(conn: sqlite3.Connection, tenant_id: str, uploaded: bool = False) -> None:
    now = int(time())
    if uploaded:
        conn.execute(
            "UPDATE tenants SET updated_at = ?, uploaded_at = ? WHERE id = ?",
            (now, now, tenant_id),
        )
    else:
        conn.execute("UPDATE tenants SET updated_at = ? WHERE id = ?", (now, tenant_id))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_records(conn: sqlite3.Connection, tenant_id: str) -> list[PageRecord]:
    """Return the tenant's page list in stored order (``[]`` when empty)."""
    rows = conn.execute(
        "SELECT * FROM pages WHERE tenant_id = ? ORDER BY position", (tenant_id,)
    ).fetchall()
    return [_row_to_record(r) for r in rows]


def put_records(
    conn: sqlite3.Connection,
    tenant_id: str,
    records: list[PageRecord],
    uploaded: bool = False,
) -> None:
    """Replace the tenant's whole page list with *records*, in one transaction.

    Args:
        conn: Open DB connection.
        tenant_id: Owner of the list.
        records: The new list; its order is preserved.
        uploaded: Stamp ``tenants.uploaded_at`` (set for CSV imports).

    Raises:
        ValueError: If the tenant does not exist.
    """
    _require_tenant(conn, tenant_id)
    placeholders = ", ".join("?" for _ in _COLUMNS)
    with conn:
        conn.execute("DELETE FROM pages WHERE tenant_id = ?", (tenant_id,))
        conn.executemany(
            f"INSERT INTO pages ({', '.join(_COLUMNS)}) VALUES ({placeholders})",  # noqa: S608
            [_record_params(tenant_id, i, r) for i, r in enumerate(records)],
        )
        _touch(conn, tenant_id, uploaded=uploaded)
    logger.info("[store] stored %d page(s) for tenant %s", len(records), tenant_id)


def update_page(
    conn: sqlite3.Connection,
    tenant_id: str,
    full_url_path: str,
    status: Optional[str] = None,
    notes: Optional[str] = None,
) -> PageRecord:
    """Set the admin-owned ``status`` and/or ``notes`` of a page.

    Returns:
        The updated record.

    Raises:
        ValueError: If the page does not exist, the status is unknown, or
            neither field is given.
    """
    updates: dict[str, str] = {}
    if status is not None:
        updates["status"] = PageStatus(status).value
    if notes is not None:
        updates["notes"] = notes
    if not updates:
        raise ValueError("No valid fields provided to update_page()")

    path = normalize_path(full_url_path)
    set_clause = ", ".join(f"{col} = ?" for col in updates)
    with conn:
        cursor = conn.execute(
            f"UPDATE pages SET {set_clause} WHERE tenant_id = ? AND full_url_path = ?",  # noqa: S608
            [*updates.values(), tenant_id, path],
        )
        if cursor.rowcount == 0:
            raise ValueError(f"Page not found: {path!r}")
        _touch(conn, tenant_id)

    row = conn.execute(
        "SELECT * FROM pages WHERE tenant_id = ? AND full_url_path = ? "
        "ORDER BY position DESC LIMIT 1",
        (tenant_id, path),
    ).fetchone()
    return _row_to_record(row)


def delete_page(conn: sqlite3.Connection, tenant_id: str, full_url_path: str) -> int:
    """Remove every page stored under *full_url_path*; return how many went."""
    path = normalize_path(full_url_path)
    with conn:
        cursor = conn.execute(
            "DELETE FROM pages WHERE tenant_id = ? AND full_url_path = ?",
            (tenant_id, path),
        )
        if cursor.rowcount:
            _touch(conn, tenant_id)
    return cursor.rowcount


def preview_import(
    conn: sqlite3.Connection,
    tenant_id: str,
    raw_text: str,
) -> tuple[list[PageRecord], ImportSummary]:
    """Parse and reconcile *raw_text* against the stored list without saving.

    Raises:
        ParseEmptyError: If the text holds no valid rows.
        ValueError: If the tenant does not exist.
    """
    _require_tenant(conn, tenant_id)
    incoming = parse_records(raw_text, default_priority=settings.default_priority)
    existing = get_records(conn, tenant_id)
    return reconcile(existing, incoming), summarize_import(existing, incoming)


def import_csv(
    conn: sqlite3.Connection,
    tenant_id: str,
    raw_text: str,
) -> tuple[list[PageRecord], ImportSummary]:
    """Parse, reconcile and store an import for *tenant_id*.

    Stored pages missing from *raw_text* are removed; see
    :attr:`ImportSummary.removed`.
    """
    merged, summary = preview_import(conn, tenant_id, raw_text)
    put_records(conn, tenant_id, merged, uploaded=True)
    if summary.removed:
        logger.warning(
            "[store] import for tenant %s removed %d page(s)", tenant_id, len(summary.removed)
        )
    return merged, summary
