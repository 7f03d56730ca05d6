"""DatagridColumn model - one field definition of a datagrid's row schema"""

import uuid
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from models.base import Base, JSONType

if TYPE_CHECKING:
    from models.datagrid import Datagrid


class DatagridColumn(Base):
    """
    Column definition used as the key of row data objects.

    The key is unique across ALL columns of all tenants, not only within
    its datagrid.
    """
    __tablename__ = "datagrid_columns"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    datagrid_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("datagrids.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Key of the row data object, e.g. "time_period", "team", "position"
    key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    # text, textarea, number, email, url, date, datetime, boolean, select
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # e.g. {"min": 0, "max": 10, "pattern": "^[A-Z]"}
    validation_rules: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    # e.g. {"options": ["Guard", "Forward", "Center"]}
    config: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)

    datagrid: Mapped["Datagrid"] = relationship(back_populates="columns")

    def __repr__(self):
        return f"<DatagridColumn(key='{self.key}', type='{self.type}')>"
