"""Section Repository - Data access layer for sections"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.exceptions import SectionNotFound
from core.identity import ensure_id, assert_same_tenant
from core.logging_config import get_logger
from db.session import get_db, commit_or_raise
from models import Section
from models.base import display_order, utcnow
from repositories.tenant_repository import TenantRepository
from schemas.cascade import CascadeReport
from schemas.section import SectionCreate
from services.cascade_service import CascadeService

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "description", "order", "is_active"}
NON_NULLABLE_FIELDS = {"name", "order", "is_active"}


class SectionRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_or_raise(self, section_id: UUID | str, tenant_id: Optional[UUID | str] = None) -> Section:
        """Get a section by ID, optionally scoped to a tenant"""
        stmt = select(Section).where(Section.id == ensure_id(section_id, "section_id"))
        if tenant_id is not None:
            stmt = stmt.where(Section.tenant_id == ensure_id(tenant_id, "tenant_id"))
        section = self.session.scalar(stmt)
        if not section:
            raise SectionNotFound(section_id)
        return section

    def get_all(
        self,
        tenant_id: Optional[UUID | str] = None,
        active_only: bool = False
    ) -> list[Section]:
        """Get sections, highest order first"""
        stmt = select(Section)
        if tenant_id is not None:
            stmt = stmt.where(Section.tenant_id == ensure_id(tenant_id, "tenant_id"))
        if active_only:
            stmt = stmt.where(Section.is_active.is_(True))

        return list(self.session.scalars(stmt.order_by(*display_order(Section))).all())

    def create(self, section_data: SectionCreate) -> Section:
        """
        Create a section for a tenant.

        The tenant must exist; its active flag is not checked.
        """
        tenant_id = ensure_id(section_data.tenant_id, "tenant_id")
        tenant = TenantRepository(self.session).get_or_raise(tenant_id)
        assert_same_tenant(tenant.id, tenant_id)

        section = Section(tenant=tenant, **section_data.model_dump(exclude={"tenant_id"}))
        self.session.add(section)
        commit_or_raise(self.session)
        self.session.refresh(section)

        logger.info_ctx("Section created", tenant_id=tenant.id, section_id=section.id)
        return section

    def update(self, section: Section, update_data: dict) -> Section:
        """Partial update; ownership fields are never changed"""
        for key, value in update_data.items():
            if key not in UPDATABLE_FIELDS:
                logger.warning(f"Ignoring non-updatable section field '{key}'")
                continue
            if key in NON_NULLABLE_FIELDS and value is None:
                continue
            setattr(section, key, value)
        section.updated_at = utcnow()

        commit_or_raise(self.session)
        self.session.refresh(section)
        return section

    def delete(self, section: Section) -> CascadeReport:
        """Delete a section with its datagrids, columns and rows"""
        return CascadeService(self.session).delete_section(section)


def get_section_repository(db: Session = Depends(get_db)) -> SectionRepository:
    """Dependency for section repository"""
    return SectionRepository(db)
