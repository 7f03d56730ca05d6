"""User section view - a section's datagrids with one user's rows"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel

from schemas.column_schema import ColumnType


class UserSummary(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    profile_image_url: Optional[str]

    model_config = {"from_attributes": True}


class ColumnView(BaseModel):
    key: str
    label: str
    type: ColumnType
    required: bool
    order: int
    validation_rules: Optional[dict]
    config: Optional[dict]

    model_config = {"from_attributes": True}


class RowView(BaseModel):
    id: UUID
    data: dict[str, Any]
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DatagridView(BaseModel):
    id: UUID
    name: str
    description: Optional[str]
    order: int
    columns: list[ColumnView] = []
    rows: list[RowView] = []


class SectionView(BaseModel):
    id: UUID
    name: str
    description: Optional[str]
    order: int
    datagrids: list[DatagridView] = []


class UserSectionView(BaseModel):
    user: UserSummary
    section: SectionView
