"""Datagrid Columns API endpoints"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from repositories.datagrid_column_repository import DatagridColumnRepository, get_datagrid_column_repository
from schemas.cascade import CascadeReport
from schemas.datagrid_column import DatagridColumnCreate, DatagridColumnUpdate, DatagridColumnRead

router = APIRouter()


@router.post("/", response_model=DatagridColumnRead, status_code=status.HTTP_201_CREATED)
def create_column(
    column_data: DatagridColumnCreate,
    column_repo: DatagridColumnRepository = Depends(get_datagrid_column_repository),
):
    """
    Add a column to a datagrid.

    The key becomes the key of row data objects and must not be used by
    any other column, in any datagrid of any tenant.
    """
    return column_repo.create(column_data)


@router.get("/", response_model=list[DatagridColumnRead])
def list_columns(
    tenant_id: Optional[UUID] = Query(None),
    datagrid_id: Optional[UUID] = Query(None),
    column_repo: DatagridColumnRepository = Depends(get_datagrid_column_repository),
):
    return column_repo.get_all(tenant_id, datagrid_id)


@router.get("/{column_id}/", response_model=DatagridColumnRead)
def get_column(
    column_id: UUID,
    tenant_id: Optional[UUID] = Query(None),
    column_repo: DatagridColumnRepository = Depends(get_datagrid_column_repository),
):
    return column_repo.get_or_raise(column_id, tenant_id)


@router.patch("/{column_id}/", response_model=DatagridColumnRead)
def update_column(
    column_id: UUID,
    update_data: DatagridColumnUpdate,
    column_repo: DatagridColumnRepository = Depends(get_datagrid_column_repository),
):
    """
    Update a column.

    Existing rows are not re-validated against the new definition.
    """
    column = column_repo.get_or_raise(column_id)
    return column_repo.update(column, update_data.model_dump(exclude_unset=True))


@router.delete("/{column_id}/", response_model=CascadeReport)
def delete_column(
    column_id: UUID,
    prune_orphaned_keys: Optional[bool] = Query(
        None, description="Strip the column key from existing row data (defaults to server setting)"
    ),
    column_repo: DatagridColumnRepository = Depends(get_datagrid_column_repository),
):
    column = column_repo.get_or_raise(column_id)
    return column_repo.delete(column, prune_orphaned_keys)
