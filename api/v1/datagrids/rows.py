"""Datagrid Rows API endpoints"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from repositories.datagrid_row_repository import DatagridRowRepository, get_datagrid_row_repository
from schemas.cascade import CascadeReport
from schemas.datagrid_row import DatagridRowCreate, DatagridRowUpdate, DatagridRowRead

router = APIRouter()


@router.post("/", response_model=DatagridRowRead, status_code=status.HTTP_201_CREATED)
def create_row(
    row_data: DatagridRowCreate,
    row_repo: DatagridRowRepository = Depends(get_datagrid_row_repository),
):
    """Store a row after validating its data against the datagrid's columns"""
    return row_repo.create(row_data)


@router.get("/", response_model=list[DatagridRowRead])
def list_rows(
    tenant_id: Optional[UUID] = Query(None),
    datagrid_id: Optional[UUID] = Query(None),
    user_id: Optional[UUID] = Query(None),
    active_only: bool = Query(False),
    row_repo: DatagridRowRepository = Depends(get_datagrid_row_repository),
):
    return row_repo.get_all(tenant_id, datagrid_id, user_id, active_only)


@router.get("/{row_id}/", response_model=DatagridRowRead)
def get_row(
    row_id: UUID,
    tenant_id: Optional[UUID] = Query(None),
    row_repo: DatagridRowRepository = Depends(get_datagrid_row_repository),
):
    return row_repo.get_or_raise(row_id, tenant_id)


@router.patch("/{row_id}/", response_model=DatagridRowRead)
def update_row(
    row_id: UUID,
    update_data: DatagridRowUpdate,
    row_repo: DatagridRowRepository = Depends(get_datagrid_row_repository),
):
    row = row_repo.get_or_raise(row_id)
    return row_repo.update(row, update_data.model_dump(exclude_unset=True))


@router.delete("/{row_id}/", response_model=CascadeReport)
def delete_row(
    row_id: UUID,
    row_repo: DatagridRowRepository = Depends(get_datagrid_row_repository),
):
    row = row_repo.get_or_raise(row_id)
    return row_repo.delete(row)
