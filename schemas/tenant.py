"""Tenant schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TenantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    subdomain: str = Field(..., max_length=100, pattern=r'^[a-z0-9][a-z0-9-]*$')
    domain: Optional[str] = Field(None, max_length=255)
    settings: Optional[dict] = None


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    domain: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None
    settings: Optional[dict] = None

    model_config = {"from_attributes": True}


class TenantRead(BaseModel):
    id: UUID
    name: str
    subdomain: str
    domain: Optional[str]
    is_active: bool
    settings: Optional[dict]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
