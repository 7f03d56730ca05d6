from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, JSONType

if TYPE_CHECKING:
    from models.user import User
    from models.section import Section


class Tenant(Base):
    """Top-level isolation boundary. Every other entity carries a tenant_id."""
    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Prefix of the tenant url, e.g. https://<subdomain>.example.com
    subdomain: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    domain: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    settings: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)

    users: Mapped[list["User"]] = relationship(back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
    sections: Mapped[list["Section"]] = relationship(back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Tenant(name='{self.name}', subdomain='{self.subdomain}')>"
