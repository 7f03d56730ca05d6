"""Cascade Service - deletes an entity together with everything it owns.

Each delete runs in a single transaction: descendants are removed through
the ON DELETE CASCADE foreign keys (mirrored by the ORM relationships) and
the session is committed once. Any storage failure rolls the whole delete
back and surfaces as IntegrityError.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import IntegrityError
from core.logging_config import get_logger
from core.settings import settings
from models import Tenant, User, Section, Datagrid, DatagridColumn, DatagridRow
from models.base import utcnow
from schemas.cascade import CascadeReport

logger = get_logger(__name__)


class CascadeService:
    def __init__(self, session: Session):
        self.session = session

    def _count(self, model, *conditions) -> int:
        stmt = select(func.count()).select_from(model).where(*conditions)
        return self.session.scalar(stmt) or 0

    @contextmanager
    def _cascade(self, entity: str, entity_id: UUID) -> Generator[None, None, None]:
        try:
            yield
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error_ctx("Cascade delete rolled back", entity=entity, entity_id=entity_id, error=e)
            raise IntegrityError(
                f"Could not delete {entity} {entity_id}; no changes were made",
                {"entity": entity, "id": str(entity_id)},
            ) from e

    def delete_tenant(self, tenant: Tenant) -> CascadeReport:
        report = CascadeReport(
            entity="tenant",
            entity_id=tenant.id,
            users=self._count(User, User.tenant_id == tenant.id),
            sections=self._count(Section, Section.tenant_id == tenant.id),
            datagrids=self._count(Datagrid, Datagrid.tenant_id == tenant.id),
            columns=self._count(DatagridColumn, DatagridColumn.tenant_id == tenant.id),
            rows=self._count(DatagridRow, DatagridRow.tenant_id == tenant.id),
        )
        with self._cascade("tenant", tenant.id):
            self.session.delete(tenant)
        logger.info_ctx("Tenant deleted", **report.model_dump())
        return report

    def delete_section(self, section: Section) -> CascadeReport:
        datagrid_ids = select(Datagrid.id).where(Datagrid.section_id == section.id)
        report = CascadeReport(
            entity="section",
            entity_id=section.id,
            sections=1,
            datagrids=self._count(Datagrid, Datagrid.section_id == section.id),
            columns=self._count(DatagridColumn, DatagridColumn.datagrid_id.in_(datagrid_ids)),
            rows=self._count(DatagridRow, DatagridRow.datagrid_id.in_(datagrid_ids)),
        )
        tenant_id = section.tenant_id
        with self._cascade("section", section.id):
            self.session.delete(section)
        logger.info_ctx("Section deleted", tenant_id=tenant_id, **report.model_dump())
        return report

    def delete_datagrid(self, datagrid: Datagrid) -> CascadeReport:
        report = CascadeReport(
            entity="datagrid",
            entity_id=datagrid.id,
            datagrids=1,
            columns=self._count(DatagridColumn, DatagridColumn.datagrid_id == datagrid.id),
            rows=self._count(DatagridRow, DatagridRow.datagrid_id == datagrid.id),
        )
        tenant_id = datagrid.tenant_id
        with self._cascade("datagrid", datagrid.id):
            self.session.delete(datagrid)
        logger.info_ctx("Datagrid deleted", tenant_id=tenant_id, **report.model_dump())
        return report

    def delete_column(self, column: DatagridColumn, prune_orphaned_keys: Optional[bool] = None) -> CascadeReport:
        """
        Delete a column. Rows keep the column's key in their data unless
        pruning is requested (or enabled via DATAGRID_PRUNE_ORPHANED_KEYS).
        """
        if prune_orphaned_keys is None:
            prune_orphaned_keys = settings.DATAGRID_PRUNE_ORPHANED_KEYS

        tenant_id, datagrid_id, key = column.tenant_id, column.datagrid_id, column.key
        report = CascadeReport(entity="column", entity_id=column.id, columns=1)
        with self._cascade("column", column.id):
            if prune_orphaned_keys:
                report.pruned_rows = self._prune_key(datagrid_id, key)
            self.session.delete(column)
        logger.info_ctx("Column deleted", tenant_id=tenant_id, key=key, **report.model_dump())
        return report

    def _prune_key(self, datagrid_id: UUID, key: str) -> int:
        stmt = select(DatagridRow).where(DatagridRow.datagrid_id == datagrid_id)
        pruned = 0
        for row in self.session.scalars(stmt):
            if key in (row.data or {}):
                row.data = {k: v for k, v in row.data.items() if k != key}
                row.updated_at = utcnow()
                pruned += 1
        return pruned

    def delete_row(self, row: DatagridRow) -> CascadeReport:
        tenant_id, datagrid_id = row.tenant_id, row.datagrid_id
        report = CascadeReport(entity="row", entity_id=row.id, rows=1)
        with self._cascade("row", row.id):
            self.session.delete(row)
        logger.info_ctx("Row deleted", tenant_id=tenant_id, datagrid_id=datagrid_id, row_id=report.entity_id)
        return report
