import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from models.base import Base, JSONType

if TYPE_CHECKING:
    from models.user import User
    from models.datagrid import Datagrid


class DatagridRow(Base):
    """One user's record in a datagrid; data maps column keys to values."""
    __tablename__ = "datagrid_rows"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    datagrid_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("datagrids.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    data: Mapped[dict] = mapped_column(JSONType, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    user: Mapped["User"] = relationship(back_populates="rows")
    datagrid: Mapped["Datagrid"] = relationship(back_populates="rows")

    def __repr__(self):
        return f"<DatagridRow(datagrid_id='{self.datagrid_id}', order={self.order})>"
