"""Datagrid schemas"""

from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional

from schemas.identifiers import EntityId


class DatagridCreate(BaseModel):
    tenant_id: EntityId
    section_id: EntityId
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    order: int = 0


class DatagridUpdate(BaseModel):
    """Partial update; tenant_id and section_id are write-once"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None

    model_config = {"from_attributes": True}


class DatagridRead(BaseModel):
    id: UUID
    tenant_id: UUID
    section_id: UUID
    name: str
    description: Optional[str]
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DatagridDetail(DatagridRead):
    """Datagrid with its section and column schema"""
    section: "SectionRead"
    columns: list["DatagridColumnRead"] = []

    model_config = {"from_attributes": True}


from schemas.section import SectionRead
from schemas.datagrid_column import DatagridColumnRead
DatagridDetail.model_rebuild()
