"""Page-list endpoints for one tenant.

Routes
------
GET    /tenants/{id}/pages                 Page list (``text`` / ``location`` filters)
POST   /tenants/{id}/pages/import/preview  Parse + reconcile without saving
POST   /tenants/{id}/pages/import          Parse + reconcile + store
PATCH  /tenants/{id}/pages                 Set status / notes of one page
DELETE /tenants/{id}/pages                 Remove one page (``path`` query)

Imports replace the whole list: stored pages whose path is missing from the
uploaded sheet are removed.  Every import response lists those paths under
``summary.removed`` so the UI can warn before (preview) and after (import).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from sitearch.db.pages import delete_page, get_records, import_csv, preview_import, update_page
from sitearch.db.tenants import get_tenant
from sitearch.engine.errors import MalformedPathError, ParseEmptyError
from sitearch.engine.filters import filter_records
from sitearch.engine.models import PageRecord, PageStatus

router = APIRouter()


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class ImportRequest(BaseModel):
    raw_text: str


class PageUpdate(BaseModel):
    full_url_path: str
    status: Optional[PageStatus] = None
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require_tenant(request: Request, tenant_id: str) -> Any:
    conn = request.app.state.db
    if get_tenant(conn, tenant_id) is None:
        raise HTTPException(status_code=404, detail=f"Tenant '{tenant_id}' not found.")
    return conn


def _import_response(records: list[PageRecord], summary: Any) -> dict[str, Any]:
    return {
        "count": len(records),
        "pages": [r.to_dict() for r in records],
        "summary": summary.to_dict(),
    }


def _run_import(fn: Any, conn: Any, tenant_id: str, raw_text: str) -> dict[str, Any]:
    if not raw_text.strip():
        raise HTTPException(status_code=422, detail="Import text is empty.")
    try:
        records, summary = fn(conn, tenant_id, raw_text)
    except ParseEmptyError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _import_response(records, summary)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/{tenant_id}/pages", response_model=list[dict[str, Any]])
def list_pages_endpoint(
    tenant_id: str,
    request: Request,
    text: Optional[str] = None,
    location: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Return the tenant's pages, optionally filtered."""
    conn = _require_tenant(request, tenant_id)
    records = filter_records(get_records(conn, tenant_id), text=text, location=location)
    return [r.to_dict() for r in records]


@router.post("/{tenant_id}/pages/import/preview", response_model=dict[str, Any])
def preview_import_endpoint(
    tenant_id: str,
    body: ImportRequest,
    request: Request,
) -> dict[str, Any]:
    """Show what an import would store, and which pages it would remove."""
    conn = _require_tenant(request, tenant_id)
    return _run_import(preview_import, conn, tenant_id, body.raw_text)


@router.post("/{tenant_id}/pages/import", status_code=201, response_model=dict[str, Any])
def import_pages_endpoint(
    tenant_id: str,
    body: ImportRequest,
    request: Request,
) -> dict[str, Any]:
    """Import pasted CSV/TSV text, keeping status and notes of known paths."""
    conn = _require_tenant(request, tenant_id)
    return _run_import(import_csv, conn, tenant_id, body.raw_text)


@router.patch("/{tenant_id}/pages", response_model=dict[str, Any])
def update_page_endpoint(
    tenant_id: str,
    body: PageUpdate,
    request: Request,
) -> dict[str, Any]:
    conn = _require_tenant(request, tenant_id)
    if body.status is None and body.notes is None:
        raise HTTPException(status_code=422, detail="Nothing to update.")
    try:
        record = update_page(
            conn,
            tenant_id,
            body.full_url_path,
            status=body.status.value if body.status else None,
            notes=body.notes,
        )
    except MalformedPathError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return record.to_dict()


@router.delete("/{tenant_id}/pages", response_model=dict[str, Any])
def delete_page_endpoint(tenant_id: str, path: str, request: Request) -> dict[str, Any]:
    conn = _require_tenant(request, tenant_id)
    try:
        removed = delete_page(conn, tenant_id, path)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if not removed:
        raise HTTPException(status_code=404, detail=f"Page '{path}' not found.")
    return {"full_url_path": path, "removed": removed}
