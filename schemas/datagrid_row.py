"""Datagrid row schemas"""

from typing import Any, Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel

from schemas.identifiers import EntityId


class DatagridRowCreate(BaseModel):
    tenant_id: EntityId
    user_id: EntityId
    datagrid_id: EntityId
    data: dict[str, Any]
    order: int = 0


class DatagridRowUpdate(BaseModel):
    """data is re-validated against the datagrid's current columns"""
    data: Optional[dict[str, Any]] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class DatagridRowRead(BaseModel):
    id: UUID
    tenant_id: UUID
    user_id: UUID
    datagrid_id: UUID
    data: dict[str, Any]
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
