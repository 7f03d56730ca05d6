import pytest
from datetime import datetime, timedelta
from uuid import uuid4

from sqlalchemy import select, func

from core.exceptions import InvalidIdentifier, SectionNotFound, TenantNotFound
from models import Datagrid, DatagridColumn, DatagridRow, Section
from repositories.datagrid_row_repository import DatagridRowRepository
from repositories.section_repository import SectionRepository
from schemas.datagrid_row import DatagridRowCreate
from schemas.section import SectionCreate


@pytest.mark.unit
class TestSectionRepository:

    def test_create_section(self, db_session, sample_tenant):
        section = SectionRepository(db_session).create(SectionCreate(
            tenant_id=sample_tenant.id, name="Experience", description="Professional experience", order=1,
        ))

        assert section.tenant_id == sample_tenant.id
        assert section.is_active is True
        assert section.order == 1

    def test_create_for_missing_tenant_persists_nothing(self, db_session):
        with pytest.raises(TenantNotFound):
            SectionRepository(db_session).create(SectionCreate(tenant_id=uuid4(), name="Experience"))

        assert db_session.scalar(select(func.count()).select_from(Section)) == 0

    def test_create_for_inactive_tenant_is_allowed(self, db_session, factory):
        tenant = factory.tenant(is_active=False)

        section = SectionRepository(db_session).create(SectionCreate(tenant_id=tenant.id, name="Skills"))

        assert section.tenant_id == tenant.id

    def test_get_all_orders_by_order_then_newest(self, db_session, sample_tenant, factory):
        now = datetime(2026, 1, 1, 12, 0, 0)
        factory.section(sample_tenant, name="Low", order=1, created_at=now)
        factory.section(sample_tenant, name="High old", order=5, created_at=now)
        factory.section(sample_tenant, name="High new", order=5, created_at=now + timedelta(minutes=1))

        sections = SectionRepository(db_session).get_all(sample_tenant.id)

        assert [s.name for s in sections] == ["High new", "High old", "Low"]

    def test_get_all_is_tenant_scoped(self, db_session, sample_tenant, other_tenant, factory):
        factory.section(sample_tenant, name="Mine")
        factory.section(other_tenant, name="Theirs")

        sections = SectionRepository(db_session).get_all(sample_tenant.id)

        assert [s.name for s in sections] == ["Mine"]

    def test_get_all_for_tenant_without_sections(self, db_session, sample_tenant):
        assert SectionRepository(db_session).get_all(sample_tenant.id) == []

    def test_get_all_active_only(self, db_session, sample_tenant, factory):
        factory.section(sample_tenant, name="Shown")
        factory.section(sample_tenant, name="Hidden", is_active=False)

        sections = SectionRepository(db_session).get_all(sample_tenant.id, active_only=True)

        assert [s.name for s in sections] == ["Shown"]

    def test_get_with_wrong_tenant(self, db_session, sample_section, other_tenant):
        with pytest.raises(SectionNotFound):
            SectionRepository(db_session).get_or_raise(sample_section.id, other_tenant.id)

    def test_get_malformed_id(self, db_session):
        with pytest.raises(InvalidIdentifier) as exc_info:
            SectionRepository(db_session).get_or_raise("abc")

        assert exc_info.value.keys == ["section_id"]

    def test_partial_update(self, db_session, sample_section):
        original_tenant = sample_section.tenant_id
        original_name = sample_section.name
        before = sample_section.updated_at

        updated = SectionRepository(db_session).update(
            sample_section, {"description": "Where I played", "tenant_id": uuid4()}
        )

        assert updated.description == "Where I played"
        assert updated.name == original_name
        assert updated.tenant_id == original_tenant
        assert updated.updated_at >= before

    def test_update_skips_null_for_required_fields(self, db_session, sample_section):
        updated = SectionRepository(db_session).update(
            sample_section, {"name": None, "order": None, "is_active": None, "description": None}
        )

        assert (updated.name, updated.order, updated.is_active) == ("Experience", 1, True)
        assert updated.description is None

    def test_delete_removes_datagrids_columns_and_rows(self, db_session, sample_tenant, sample_user, sample_section, sample_datagrid, team_column):
        DatagridRowRepository(db_session).create(DatagridRowCreate(
            tenant_id=sample_tenant.id, user_id=sample_user.id, datagrid_id=sample_datagrid.id,
            data={"team": "Toronto Raptors"},
        ))
        section_id, datagrid_id = sample_section.id, sample_datagrid.id

        report = SectionRepository(db_session).delete(sample_section)

        assert (report.sections, report.datagrids, report.columns, report.rows) == (1, 1, 1, 1)
        assert db_session.scalar(select(func.count()).select_from(Datagrid).where(Datagrid.section_id == section_id)) == 0
        assert db_session.scalar(
            select(func.count()).select_from(DatagridColumn).where(DatagridColumn.datagrid_id == datagrid_id)
        ) == 0
        assert db_session.scalar(
            select(func.count()).select_from(DatagridRow).where(DatagridRow.datagrid_id == datagrid_id)
        ) == 0
        with pytest.raises(SectionNotFound):
            SectionRepository(db_session).get_or_raise(section_id)
