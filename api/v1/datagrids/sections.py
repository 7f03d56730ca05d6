"""Sections API endpoints - CRUD operations for sections"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from repositories.datagrid_repository import DatagridRepository, get_datagrid_repository
from repositories.section_repository import SectionRepository, get_section_repository
from schemas.cascade import CascadeReport
from schemas.datagrid import DatagridRead
from schemas.section import SectionCreate, SectionUpdate, SectionRead, SectionWithDatagrids

router = APIRouter()


@router.post("/", response_model=SectionRead, status_code=status.HTTP_201_CREATED)
def create_section(
    section_data: SectionCreate,
    section_repo: SectionRepository = Depends(get_section_repository),
):
    return section_repo.create(section_data)


@router.get("/", response_model=list[SectionRead])
def list_sections(
    tenant_id: Optional[UUID] = Query(None),
    active_only: bool = Query(False, description="Only return active sections"),
    section_repo: SectionRepository = Depends(get_section_repository),
):
    """List sections, highest order first"""
    return section_repo.get_all(tenant_id, active_only)


@router.get("/{section_id}/", response_model=SectionWithDatagrids)
def get_section(
    section_id: UUID,
    tenant_id: Optional[UUID] = Query(None),
    section_repo: SectionRepository = Depends(get_section_repository),
    datagrid_repo: DatagridRepository = Depends(get_datagrid_repository),
):
    """Get a section with its datagrids"""
    section = section_repo.get_or_raise(section_id, tenant_id)
    datagrids = datagrid_repo.get_all(section_id=section.id)
    return SectionWithDatagrids(
        **SectionRead.model_validate(section).model_dump(),
        datagrids=[DatagridRead.model_validate(datagrid) for datagrid in datagrids],
    )


@router.patch("/{section_id}/", response_model=SectionRead)
def update_section(
    section_id: UUID,
    update_data: SectionUpdate,
    section_repo: SectionRepository = Depends(get_section_repository),
):
    section = section_repo.get_or_raise(section_id)
    return section_repo.update(section, update_data.model_dump(exclude_unset=True))


@router.delete("/{section_id}/", response_model=CascadeReport)
def delete_section(
    section_id: UUID,
    section_repo: SectionRepository = Depends(get_section_repository),
):
    """Delete a section together with its datagrids, columns and rows"""
    section = section_repo.get_or_raise(section_id)
    return section_repo.delete(section)
