"""Tenant (client) endpoints.

Routes
------
GET    /tenants          List tenants
POST   /tenants          Create a tenant
GET    /tenants/{id}     Fetch one tenant
DELETE /tenants/{id}     Delete a tenant and its pages
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from sitearch.db.tenants import create_tenant, delete_tenant, get_tenant, list_tenants

router = APIRouter()


class TenantCreate(BaseModel):
    name: str = Field(..., min_length=1)


@router.get("", response_model=list[dict[str, Any]])
def list_tenants_endpoint(request: Request) -> list[dict[str, Any]]:
    """Return all tenants."""
    conn = request.app.state.db
    return [t.to_dict() for t in list_tenants(conn)]


@router.post("", status_code=201, response_model=dict[str, Any])
def create_tenant_endpoint(body: TenantCreate, request: Request) -> dict[str, Any]:
    """Create a tenant and return it."""
    conn = request.app.state.db
    return create_tenant(conn, body.name).to_dict()


@router.get("/{tenant_id}", response_model=dict[str, Any])
def get_tenant_endpoint(tenant_id: str, request: Request) -> dict[str, Any]:
    conn = request.app.state.db
    tenant = get_tenant(conn, tenant_id)
    if tenant is None:
        raise HTTPException(status_code=404, detail=f"Tenant '{tenant_id}' not found.")
    return tenant.to_dict()


@router.delete("/{tenant_id}", status_code=204)
def delete_tenant_endpoint(tenant_id: str, request: Request) -> None:
    """Delete a tenant.  Idempotent."""
    conn = request.app.state.db
    delete_tenant(conn, tenant_id)
