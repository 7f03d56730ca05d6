"""Datagrid column schemas"""

from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Optional

from schemas.column_schema import ColumnConfigDict, ColumnType, RulesDict
from schemas.identifiers import EntityId

KEY_PATTERN = r'^[A-Za-z][A-Za-z0-9_]*$'


class DatagridColumnCreate(BaseModel):
    """Schema for adding a column to a datagrid"""
    tenant_id: EntityId
    datagrid_id: EntityId
    key: str = Field(..., max_length=100, pattern=KEY_PATTERN)
    label: str = Field(..., min_length=1, max_length=100)
    type: ColumnType
    required: bool = False
    order: int = 0

    # e.g. {"min": 1900, "max": 2100} or {"pattern": "^[A-Z]{3}$"}
    validation_rules: Optional[RulesDict] = None
    # e.g. {"options": ["Guard", "Forward"]}
    config: Optional[ColumnConfigDict] = None


class DatagridColumnUpdate(BaseModel):
    """Schema for updating a column; the key stays globally unique"""
    key: Optional[str] = Field(None, max_length=100, pattern=KEY_PATTERN)
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[ColumnType] = None
    required: Optional[bool] = None
    order: Optional[int] = None
    validation_rules: Optional[RulesDict] = None
    config: Optional[ColumnConfigDict] = None

    model_config = {"from_attributes": True}


class DatagridColumnRead(BaseModel):
    id: UUID
    tenant_id: UUID
    datagrid_id: UUID
    key: str
    label: str
    type: ColumnType
    required: bool
    order: int
    validation_rules: Optional[dict]
    config: Optional[dict]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
