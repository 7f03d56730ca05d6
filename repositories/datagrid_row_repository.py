"""Datagrid Row Repository - Data access layer for user row data"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.exceptions import DatagridError, RowNotFound
from core.identity import ensure_id, assert_same_tenant
from core.logging_config import get_logger
from db.session import get_db, commit_or_raise
from models import DatagridRow
from models.base import display_order, utcnow
from repositories.datagrid_column_repository import DatagridColumnRepository
from repositories.datagrid_repository import DatagridRepository
from repositories.user_repository import UserRepository
from schemas.cascade import CascadeReport
from schemas.datagrid_row import DatagridRowCreate
from services import schema_engine
from services.cascade_service import CascadeService

logger = get_logger(__name__)


class DatagridRowRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_or_raise(self, row_id: UUID | str, tenant_id: Optional[UUID | str] = None) -> DatagridRow:
        stmt = select(DatagridRow).where(DatagridRow.id == ensure_id(row_id, "row_id"))
        if tenant_id is not None:
            stmt = stmt.where(DatagridRow.tenant_id == ensure_id(tenant_id, "tenant_id"))
        row = self.session.scalar(stmt)
        if not row:
            raise RowNotFound(row_id)
        return row

    def get_all(
        self,
        tenant_id: Optional[UUID | str] = None,
        datagrid_id: Optional[UUID | str] = None,
        user_id: Optional[UUID | str] = None,
        active_only: bool = False
    ) -> list[DatagridRow]:
        stmt = select(DatagridRow)
        if tenant_id is not None:
            stmt = stmt.where(DatagridRow.tenant_id == ensure_id(tenant_id, "tenant_id"))
        if datagrid_id is not None:
            stmt = stmt.where(DatagridRow.datagrid_id == ensure_id(datagrid_id, "datagrid_id"))
        if user_id is not None:
            stmt = stmt.where(DatagridRow.user_id == ensure_id(user_id, "user_id"))
        if active_only:
            stmt = stmt.where(DatagridRow.is_active.is_(True))

        return list(self.session.scalars(stmt.order_by(*display_order(DatagridRow))).all())

    def create(self, row_data: DatagridRowCreate) -> DatagridRow:
        """
        Validate the payload against the datagrid's columns and store it.

        Validation and insert happen while holding the datagrid lock, in one
        transaction. Nothing is written when validation fails.
        """
        tenant_id = ensure_id(row_data.tenant_id, "tenant_id")
        user_id = ensure_id(row_data.user_id, "user_id")

        datagrid = DatagridRepository(self.session).get_for_update_or_raise(row_data.datagrid_id)
        try:
            assert_same_tenant(datagrid.tenant_id, tenant_id)
            user = UserRepository(self.session).get_or_raise(user_id)
            assert_same_tenant(datagrid.tenant_id, user.tenant_id)

            columns = DatagridColumnRepository(self.session).get_schema(datagrid.id)
            data = schema_engine.validate(columns, row_data.data)
        except DatagridError:
            self.session.rollback()
            raise

        row = DatagridRow(
            datagrid=datagrid,
            user=user,
            tenant_id=datagrid.tenant_id,
            data=data,
            order=row_data.order,
        )
        self.session.add(row)
        commit_or_raise(self.session)
        self.session.refresh(row)

        logger.info_ctx("Row created", tenant_id=tenant_id, datagrid_id=datagrid.id, user_id=user_id, row_id=row.id)
        return row

    def update(self, row: DatagridRow, update_data: dict) -> DatagridRow:
        """Partial update; new data is validated against the current columns"""
        if update_data.get("data") is not None:
            DatagridRepository(self.session).get_for_update_or_raise(row.datagrid_id)
            columns = DatagridColumnRepository(self.session).get_schema(row.datagrid_id)
            try:
                row.data = schema_engine.validate(columns, update_data["data"])
            except DatagridError:
                self.session.rollback()
                raise
        if update_data.get("order") is not None:
            row.order = update_data["order"]
        if update_data.get("is_active") is not None:
            row.is_active = update_data["is_active"]
        row.updated_at = utcnow()

        commit_or_raise(self.session)
        self.session.refresh(row)
        return row

    def delete(self, row: DatagridRow) -> CascadeReport:
        return CascadeService(self.session).delete_row(row)


def get_datagrid_row_repository(db: Session = Depends(get_db)) -> DatagridRowRepository:
    """Dependency for datagrid row repository"""
    return DatagridRowRepository(db)
