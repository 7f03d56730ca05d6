"""Section model - a named grouping of datagrids within a tenant"""

import uuid
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Text, Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from models.base import Base

if TYPE_CHECKING:
    from models.tenant import Tenant
    from models.datagrid import Datagrid


class Section(Base):
    """
    Section groups datagrids on a profile, e.g. "Experience" or "Skills".

    - Belongs to exactly one tenant (tenant_id is write-once)
    - Owns its datagrids; deleting a section deletes them with their columns and rows
    - order is a display hint and does not need to be unique
    """
    __tablename__ = "sections"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    tenant: Mapped["Tenant"] = relationship(back_populates="sections")

    datagrids: Mapped[list["Datagrid"]] = relationship(
        "Datagrid",
        back_populates="section",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Section(name='{self.name}', order={self.order})>"
