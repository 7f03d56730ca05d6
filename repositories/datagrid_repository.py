"""Datagrid Repository - Data access layer for datagrids"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.exceptions import DatagridNotFound, SectionNotFound
from core.identity import ensure_id, assert_same_tenant
from core.logging_config import get_logger
from db.session import get_db, commit_or_raise
from models import Datagrid, Section
from models.base import display_order, utcnow
from schemas.cascade import CascadeReport
from schemas.datagrid import DatagridCreate
from services.cascade_service import CascadeService

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "description", "order", "is_active"}
NON_NULLABLE_FIELDS = {"name", "order", "is_active"}


class DatagridRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_or_raise(self, datagrid_id: UUID | str, tenant_id: Optional[UUID | str] = None) -> Datagrid:
        stmt = select(Datagrid).where(Datagrid.id == ensure_id(datagrid_id, "datagrid_id"))
        if tenant_id is not None:
            stmt = stmt.where(Datagrid.tenant_id == ensure_id(tenant_id, "tenant_id"))
        datagrid = self.session.scalar(stmt)
        if not datagrid:
            raise DatagridNotFound(datagrid_id)
        return datagrid

    def get_for_update_or_raise(self, datagrid_id: UUID | str) -> Datagrid:
        """
        Get a datagrid and lock its row until the transaction ends.

        Column edits and row writes both take this lock, so a row is never
        validated against a column set that is being changed concurrently.
        """
        stmt = (
            select(Datagrid)
            .where(Datagrid.id == ensure_id(datagrid_id, "datagrid_id"))
            .with_for_update()
        )
        datagrid = self.session.scalar(stmt)
        if not datagrid:
            raise DatagridNotFound(datagrid_id)
        return datagrid

    def get_all(
        self,
        tenant_id: Optional[UUID | str] = None,
        section_id: Optional[UUID | str] = None,
        active_only: bool = False
    ) -> list[Datagrid]:
        stmt = select(Datagrid)
        if tenant_id is not None:
            stmt = stmt.where(Datagrid.tenant_id == ensure_id(tenant_id, "tenant_id"))
        if section_id is not None:
            stmt = stmt.where(Datagrid.section_id == ensure_id(section_id, "section_id"))
        if active_only:
            stmt = stmt.where(Datagrid.is_active.is_(True))

        return list(self.session.scalars(stmt.order_by(*display_order(Datagrid))).all())

    def create(self, datagrid_data: DatagridCreate) -> Datagrid:
        """Create a datagrid inside a section that belongs to the given tenant"""
        tenant_id = ensure_id(datagrid_data.tenant_id, "tenant_id")
        section_id = ensure_id(datagrid_data.section_id, "section_id")

        section = self.session.scalar(select(Section).where(Section.id == section_id))
        if not section:
            raise SectionNotFound(section_id)
        assert_same_tenant(section.tenant_id, tenant_id)

        datagrid = Datagrid(
            section=section,
            tenant_id=section.tenant_id,
            **datagrid_data.model_dump(exclude={"tenant_id", "section_id"})
        )
        self.session.add(datagrid)
        commit_or_raise(self.session)
        self.session.refresh(datagrid)

        logger.info_ctx("Datagrid created", tenant_id=tenant_id, section_id=section_id, datagrid_id=datagrid.id)
        return datagrid

    def update(self, datagrid: Datagrid, update_data: dict) -> Datagrid:
        """Partial update; tenant_id and section_id are never changed"""
        for key, value in update_data.items():
            if key not in UPDATABLE_FIELDS:
                logger.warning(f"Ignoring non-updatable datagrid field '{key}'")
                continue
            if key in NON_NULLABLE_FIELDS and value is None:
                continue
            setattr(datagrid, key, value)
        datagrid.updated_at = utcnow()

        commit_or_raise(self.session)
        self.session.refresh(datagrid)
        return datagrid

    def delete(self, datagrid: Datagrid) -> CascadeReport:
        """Delete a datagrid with its columns and rows"""
        return CascadeService(self.session).delete_datagrid(datagrid)


def get_datagrid_repository(db: Session = Depends(get_db)) -> DatagridRepository:
    """Dependency for datagrid repository"""
    return DatagridRepository(db)
