"""Cascade report schema"""

from uuid import UUID

from pydantic import BaseModel


class CascadeReport(BaseModel):
    """What a delete removed, per entity kind"""
    entity: str
    entity_id: UUID
    users: int = 0
    sections: int = 0
    datagrids: int = 0
    columns: int = 0
    rows: int = 0
    # Rows whose data had a deleted column's key stripped
    pruned_rows: int = 0
