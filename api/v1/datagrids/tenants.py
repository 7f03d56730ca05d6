"""Tenants API endpoints"""

from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from repositories.tenant_repository import TenantRepository, get_tenant_repository
from schemas.cascade import CascadeReport
from schemas.tenant import TenantCreate, TenantUpdate, TenantRead

router = APIRouter()


@router.post("/", response_model=TenantRead, status_code=status.HTTP_201_CREATED)
def create_tenant(
    tenant_data: TenantCreate,
    tenant_repo: TenantRepository = Depends(get_tenant_repository),
):
    return tenant_repo.create(tenant_data)


@router.get("/", response_model=list[TenantRead])
def list_tenants(
    active_only: bool = Query(False, description="Only return active tenants"),
    tenant_repo: TenantRepository = Depends(get_tenant_repository),
):
    return tenant_repo.get_all(active_only)


@router.get("/{tenant_id}/", response_model=TenantRead)
def get_tenant(
    tenant_id: UUID,
    tenant_repo: TenantRepository = Depends(get_tenant_repository),
):
    return tenant_repo.get_or_raise(tenant_id)


@router.patch("/{tenant_id}/", response_model=TenantRead)
def update_tenant(
    tenant_id: UUID,
    update_data: TenantUpdate,
    tenant_repo: TenantRepository = Depends(get_tenant_repository),
):
    tenant = tenant_repo.get_or_raise(tenant_id)
    return tenant_repo.update(tenant, update_data.model_dump(exclude_unset=True))


@router.delete("/{tenant_id}/", response_model=CascadeReport)
def delete_tenant(
    tenant_id: UUID,
    tenant_repo: TenantRepository = Depends(get_tenant_repository),
):
    """Delete a tenant and everything that belongs to it"""
    tenant = tenant_repo.get_or_raise(tenant_id)
    return tenant_repo.delete(tenant)
