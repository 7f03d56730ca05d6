"""Datagrid Column Repository - Data access layer for datagrid columns"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.exceptions import ColumnNotFound, DatagridError, DuplicateKeyError
from core.identity import ensure_id, assert_same_tenant
from core.logging_config import get_logger
from db.session import get_db, commit_or_raise
from models import DatagridColumn
from models.base import display_order, utcnow
from repositories.datagrid_repository import DatagridRepository
from schemas.cascade import CascadeReport
from schemas.column_schema import ColumnType
from schemas.datagrid_column import DatagridColumnCreate
from services.cascade_service import CascadeService

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"key", "label", "type", "required", "order", "validation_rules", "config"}


class DatagridColumnRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_or_raise(self, column_id: UUID | str, tenant_id: Optional[UUID | str] = None) -> DatagridColumn:
        stmt = select(DatagridColumn).where(DatagridColumn.id == ensure_id(column_id, "column_id"))
        if tenant_id is not None:
            stmt = stmt.where(DatagridColumn.tenant_id == ensure_id(tenant_id, "tenant_id"))
        column = self.session.scalar(stmt)
        if not column:
            raise ColumnNotFound(column_id)
        return column

    def get_by_key(self, key: str) -> DatagridColumn | None:
        """Column keys are unique system-wide, across datagrids and tenants"""
        return self.session.scalar(select(DatagridColumn).where(DatagridColumn.key == key))

    def get_all(
        self,
        tenant_id: Optional[UUID | str] = None,
        datagrid_id: Optional[UUID | str] = None
    ) -> list[DatagridColumn]:
        stmt = select(DatagridColumn)
        if tenant_id is not None:
            stmt = stmt.where(DatagridColumn.tenant_id == ensure_id(tenant_id, "tenant_id"))
        if datagrid_id is not None:
            stmt = stmt.where(DatagridColumn.datagrid_id == ensure_id(datagrid_id, "datagrid_id"))

        return list(self.session.scalars(stmt.order_by(*display_order(DatagridColumn))).all())

    def get_schema(self, datagrid_id: UUID) -> list[DatagridColumn]:
        """The column set row data of a datagrid is validated against"""
        return self.get_all(datagrid_id=datagrid_id)

    def create(self, column_data: DatagridColumnCreate) -> DatagridColumn:
        tenant_id = ensure_id(column_data.tenant_id, "tenant_id")
        datagrid = DatagridRepository(self.session).get_for_update_or_raise(column_data.datagrid_id)
        try:
            assert_same_tenant(datagrid.tenant_id, tenant_id)
            if self.get_by_key(column_data.key):
                raise DuplicateKeyError("key", column_data.key, f"Column key '{column_data.key}' is already in use")
        except DatagridError:
            # Release the datagrid lock
            self.session.rollback()
            raise

        column_dict = column_data.model_dump(exclude={"tenant_id", "datagrid_id"})
        column_dict["type"] = ColumnType(column_data.type).value
        column = DatagridColumn(datagrid=datagrid, tenant_id=datagrid.tenant_id, **column_dict)

        self.session.add(column)
        commit_or_raise(self.session, duplicate=("key", column_data.key))
        self.session.refresh(column)

        logger.info_ctx(
            "Column created",
            tenant_id=tenant_id,
            datagrid_id=datagrid.id,
            column_id=column.id,
            key=column.key,
            type=column.type,
        )
        return column

    def update(self, column: DatagridColumn, update_data: dict) -> DatagridColumn:
        """Partial update; a changed key must still be globally unique"""
        DatagridRepository(self.session).get_for_update_or_raise(column.datagrid_id)

        new_key = update_data.get("key")
        if new_key is not None and new_key != column.key:
            existing = self.get_by_key(new_key)
            if existing is not None and existing.id != column.id:
                self.session.rollback()
                raise DuplicateKeyError("key", new_key, f"Column key '{new_key}' is already in use")

        for key, value in update_data.items():
            if key not in UPDATABLE_FIELDS:
                logger.warning(f"Ignoring non-updatable column field '{key}'")
                continue
            if key == "type" and value is not None:
                value = ColumnType(value).value
            if key in ("key", "label", "type", "required", "order") and value is None:
                continue
            setattr(column, key, value)
        column.updated_at = utcnow()

        commit_or_raise(self.session, duplicate=("key", new_key) if new_key else None)
        self.session.refresh(column)
        return column

    def delete(self, column: DatagridColumn, prune_orphaned_keys: Optional[bool] = None) -> CascadeReport:
        """
        Delete a column. Existing row data keeps the column's key unless
        pruning is requested.
        """
        return CascadeService(self.session).delete_column(column, prune_orphaned_keys)


def get_datagrid_column_repository(db: Session = Depends(get_db)) -> DatagridColumnRepository:
    """Dependency for datagrid column repository"""
    return DatagridColumnRepository(db)
