import pytest
from uuid import uuid4

from sqlalchemy import select, func

from core.exceptions import DatagridNotFound, ScopeMismatchError, SectionNotFound
from models import Datagrid
from repositories.datagrid_repository import DatagridRepository
from schemas.datagrid import DatagridCreate


@pytest.mark.unit
class TestDatagridRepository:

    def test_create_datagrid(self, db_session, sample_tenant, sample_section):
        datagrid = DatagridRepository(db_session).create(DatagridCreate(
            tenant_id=sample_tenant.id, section_id=sample_section.id, name="Experience", order=1,
        ))

        assert datagrid.section_id == sample_section.id
        assert datagrid.tenant_id == sample_tenant.id

    def test_create_with_foreign_tenant_is_rejected(self, db_session, sample_section, other_tenant):
        with pytest.raises(ScopeMismatchError):
            DatagridRepository(db_session).create(DatagridCreate(
                tenant_id=other_tenant.id, section_id=sample_section.id, name="Sneaky",
            ))

        assert db_session.scalar(select(func.count()).select_from(Datagrid)) == 0

    def test_create_in_missing_section(self, db_session, sample_tenant):
        with pytest.raises(SectionNotFound):
            DatagridRepository(db_session).create(DatagridCreate(
                tenant_id=sample_tenant.id, section_id=uuid4(), name="Orphan",
            ))

    def test_list_by_section(self, db_session, sample_tenant, sample_section, factory):
        other_section = factory.section(sample_tenant, name="Skills")
        factory.datagrid(sample_section, name="Teams", order=2)
        factory.datagrid(sample_section, name="Awards", order=3)
        factory.datagrid(other_section, name="Languages")

        datagrids = DatagridRepository(db_session).get_all(section_id=sample_section.id)

        assert [d.name for d in datagrids] == ["Awards", "Teams"]

    def test_get_with_wrong_tenant(self, db_session, sample_datagrid, other_tenant):
        repo = DatagridRepository(db_session)

        assert repo.get_or_raise(sample_datagrid.id, sample_datagrid.tenant_id).id == sample_datagrid.id
        with pytest.raises(DatagridNotFound):
            repo.get_or_raise(sample_datagrid.id, other_tenant.id)

    def test_update_keeps_ownership(self, db_session, sample_datagrid, factory, sample_tenant):
        section_id = sample_datagrid.section_id
        other_section = factory.section(sample_tenant)

        updated = DatagridRepository(db_session).update(
            sample_datagrid, {"name": "History", "section_id": other_section.id}
        )

        assert updated.name == "History"
        assert updated.section_id == section_id

    def test_update_skips_null_for_required_fields(self, db_session, sample_datagrid):
        updated = DatagridRepository(db_session).update(
            sample_datagrid, {"name": None, "order": None, "is_active": None, "description": "Career"}
        )

        assert (updated.name, updated.order, updated.is_active) == ("Experience", 1, True)
        assert updated.description == "Career"

    def test_delete(self, db_session, sample_datagrid, team_column):
        datagrid_id = sample_datagrid.id

        report = DatagridRepository(db_session).delete(sample_datagrid)

        assert (report.datagrids, report.columns, report.rows) == (1, 1, 0)
        with pytest.raises(DatagridNotFound):
            DatagridRepository(db_session).get_or_raise(datagrid_id)
