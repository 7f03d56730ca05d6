"""User Section Service - one user's view of a section.

Joins a section's datagrids with their column schema and the rows owned by
a single user. Read-only.
"""

from collections import defaultdict
from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import SectionNotFound, UserNotFound
from core.identity import ensure_id
from db.session import get_db
from models import Section, User, Datagrid, DatagridColumn, DatagridRow
from models.base import display_order
from schemas.user_section import (
    ColumnView,
    DatagridView,
    RowView,
    SectionView,
    UserSectionView,
    UserSummary,
)


class UserSectionService:
    def __init__(self, session: Session):
        self.session = session

    def get_user_section_view(
        self,
        user_id: UUID | str,
        section_id: UUID | str,
        tenant_id: Optional[UUID | str] = None,
    ) -> UserSectionView:
        user_id = ensure_id(user_id, "user_id")
        section_id = ensure_id(section_id, "section_id")
        if tenant_id is not None:
            tenant_id = ensure_id(tenant_id, "tenant_id")

        section_stmt = select(Section).where(Section.id == section_id)
        if tenant_id is not None:
            section_stmt = section_stmt.where(Section.tenant_id == tenant_id)
        section = self.session.scalar(section_stmt)
        if not section:
            raise SectionNotFound(section_id)

        user_stmt = select(User).where(User.id == user_id)
        if tenant_id is not None:
            user_stmt = user_stmt.where(User.tenant_id == tenant_id)
        user = self.session.scalar(user_stmt)
        if not user:
            raise UserNotFound(user_id)

        datagrids = list(self.session.scalars(
            select(Datagrid)
            .where(Datagrid.section_id == section.id)
            .order_by(*display_order(Datagrid))
        ))
        datagrid_ids = [datagrid.id for datagrid in datagrids]

        columns_by_datagrid = defaultdict(list)
        rows_by_datagrid = defaultdict(list)
        if datagrid_ids:
            columns = self.session.scalars(
                select(DatagridColumn)
                .where(DatagridColumn.datagrid_id.in_(datagrid_ids))
                .order_by(*display_order(DatagridColumn))
            )
            for column in columns:
                columns_by_datagrid[column.datagrid_id].append(ColumnView.model_validate(column))

            rows = self.session.scalars(
                select(DatagridRow)
                .where(DatagridRow.datagrid_id.in_(datagrid_ids))
                .where(DatagridRow.user_id == user.id)
                .order_by(*display_order(DatagridRow))
            )
            for row in rows:
                rows_by_datagrid[row.datagrid_id].append(RowView.model_validate(row))

        return UserSectionView(
            user=UserSummary.model_validate(user),
            section=SectionView(
                id=section.id,
                name=section.name,
                description=section.description,
                order=section.order,
                datagrids=[
                    DatagridView(
                        id=datagrid.id,
                        name=datagrid.name,
                        description=datagrid.description,
                        order=datagrid.order,
                        columns=columns_by_datagrid[datagrid.id],
                        rows=rows_by_datagrid[datagrid.id],
                    )
                    for datagrid in datagrids
                ],
            ),
        )


def get_user_section_service(db: Session = Depends(get_db)) -> UserSectionService:
    return UserSectionService(db)
