"""User section endpoint - a section's datagrids with one user's rows"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query

from schemas.user_section import UserSectionView
from services.user_section_service import UserSectionService, get_user_section_service

router = APIRouter()


@router.get("/{user_id}/sections/{section_id}/", response_model=UserSectionView)
def get_user_section(
    user_id: UUID,
    section_id: UUID,
    tenant_id: Optional[UUID] = Query(None),
    service: UserSectionService = Depends(get_user_section_service),
):
    """
    Get every datagrid of a section with its columns and the rows
    belonging to the user.
    """
    return service.get_user_section_view(user_id, section_id, tenant_id)
