"""Datagrid model - a user-defined table described by columns and filled by rows"""

import uuid
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Text, Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from models.base import Base

if TYPE_CHECKING:
    from models.section import Section
    from models.datagrid_column import DatagridColumn
    from models.datagrid_row import DatagridRow


class Datagrid(Base):
    """
    Datagrid lives inside a section and shares its tenant.

    The columns form the schema that row data is validated against.
    """
    __tablename__ = "datagrids"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    section_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    section: Mapped["Section"] = relationship(back_populates="datagrids")

    columns: Mapped[list["DatagridColumn"]] = relationship(
        "DatagridColumn",
        back_populates="datagrid",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    rows: Mapped[list["DatagridRow"]] = relationship(
        "DatagridRow",
        back_populates="datagrid",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Datagrid(name='{self.name}', order={self.order})>"
