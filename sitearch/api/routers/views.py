"""Derived site-map views.  Nothing here is stored; every call rebuilds.

Routes
------
GET /tenants/{id}/tree       Annotated URL-path forest (``text`` / ``location``)
GET /tenants/{id}/stats      Site-wide WebsiteStats (camelCase keys)
GET /tenants/{id}/locations  Location codes (first path segment)
GET /tenants/{id}/health     Data-quality checks
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request

from sitearch.db.pages import get_records
from sitearch.db.tenants import get_tenant
from sitearch.engine.aggregate import build_site_tree
from sitearch.engine.filters import filter_records
from sitearch.engine.health import check_site
from sitearch.engine.locations import location_segments
from sitearch.engine.stats import compute_stats

router = APIRouter()


def _records(request: Request, tenant_id: str) -> list:
    conn = request.app.state.db
    if get_tenant(conn, tenant_id) is None:
        raise HTTPException(status_code=404, detail=f"Tenant '{tenant_id}' not found.")
    return get_records(conn, tenant_id)


@router.get("/{tenant_id}/tree", response_model=dict[str, Any])
def get_tree_endpoint(
    tenant_id: str,
    request: Request,
    text: Optional[str] = None,
    location: Optional[str] = None,
) -> dict[str, Any]:
    """Return the filtered page count and the annotated forest."""
    records = filter_records(_records(request, tenant_id), text=text, location=location)
    return {
        "count": len(records),
        "nodes": [node.to_dict() for node in build_site_tree(records)],
    }


@router.get("/{tenant_id}/stats", response_model=dict[str, Any])
def get_stats_endpoint(tenant_id: str, request: Request) -> dict[str, Any]:
    return compute_stats(_records(request, tenant_id)).to_dict()


@router.get("/{tenant_id}/locations", response_model=list[str])
def get_locations_endpoint(tenant_id: str, request: Request) -> list[str]:
    return location_segments(_records(request, tenant_id))


@router.get("/{tenant_id}/health", response_model=list[dict[str, Any]])
def get_health_endpoint(tenant_id: str, request: Request) -> list[dict[str, Any]]:
    return [r.to_dict() for r in check_site(_records(request, tenant_id))]
