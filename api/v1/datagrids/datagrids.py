"""Datagrids API endpoints"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from repositories.datagrid_column_repository import DatagridColumnRepository, get_datagrid_column_repository
from repositories.datagrid_repository import DatagridRepository, get_datagrid_repository
from schemas.cascade import CascadeReport
from schemas.datagrid import DatagridCreate, DatagridUpdate, DatagridRead, DatagridDetail
from schemas.datagrid_column import DatagridColumnRead
from schemas.section import SectionRead

router = APIRouter()


@router.post("/", response_model=DatagridRead, status_code=status.HTTP_201_CREATED)
def create_datagrid(
    datagrid_data: DatagridCreate,
    datagrid_repo: DatagridRepository = Depends(get_datagrid_repository),
):
    return datagrid_repo.create(datagrid_data)


@router.get("/", response_model=list[DatagridRead])
def list_datagrids(
    tenant_id: Optional[UUID] = Query(None),
    section_id: Optional[UUID] = Query(None),
    active_only: bool = Query(False),
    datagrid_repo: DatagridRepository = Depends(get_datagrid_repository),
):
    return datagrid_repo.get_all(tenant_id, section_id, active_only)


@router.get("/{datagrid_id}/", response_model=DatagridDetail)
def get_datagrid(
    datagrid_id: UUID,
    tenant_id: Optional[UUID] = Query(None),
    datagrid_repo: DatagridRepository = Depends(get_datagrid_repository),
    column_repo: DatagridColumnRepository = Depends(get_datagrid_column_repository),
):
    """Get a datagrid with its section and column schema"""
    datagrid = datagrid_repo.get_or_raise(datagrid_id, tenant_id)
    columns = column_repo.get_schema(datagrid.id)
    return DatagridDetail(
        **DatagridRead.model_validate(datagrid).model_dump(),
        section=SectionRead.model_validate(datagrid.section),
        columns=[DatagridColumnRead.model_validate(column) for column in columns],
    )


@router.patch("/{datagrid_id}/", response_model=DatagridRead)
def update_datagrid(
    datagrid_id: UUID,
    update_data: DatagridUpdate,
    datagrid_repo: DatagridRepository = Depends(get_datagrid_repository),
):
    datagrid = datagrid_repo.get_or_raise(datagrid_id)
    return datagrid_repo.update(datagrid, update_data.model_dump(exclude_unset=True))


@router.delete("/{datagrid_id}/", response_model=CascadeReport)
def delete_datagrid(
    datagrid_id: UUID,
    datagrid_repo: DatagridRepository = Depends(get_datagrid_repository),
):
    datagrid = datagrid_repo.get_or_raise(datagrid_id)
    return datagrid_repo.delete(datagrid)
