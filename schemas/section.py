"""Section schemas"""

from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional

from schemas.identifiers import EntityId


class SectionCreate(BaseModel):
    """Schema for creating section"""
    tenant_id: EntityId
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    order: int = 0


class SectionUpdate(BaseModel):
    """Schema for updating section; tenant_id is not updatable"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None

    model_config = {"from_attributes": True}


class SectionRead(BaseModel):
    """Schema for reading section"""
    id: UUID
    tenant_id: UUID
    name: str
    description: Optional[str]
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SectionWithDatagrids(SectionRead):
    """Section with its datagrids included"""
    datagrids: list["DatagridRead"] = []

    model_config = {"from_attributes": True}


# Import after class definition to avoid circular import
from schemas.datagrid import DatagridRead
SectionWithDatagrids.model_rebuild()
