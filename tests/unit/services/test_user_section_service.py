import pytest
from datetime import datetime, timedelta
from uuid import uuid4

from core.exceptions import InvalidIdentifier, SectionNotFound, UserNotFound
from repositories.datagrid_row_repository import DatagridRowRepository
from schemas.datagrid_row import DatagridRowCreate
from services.user_section_service import UserSectionService


@pytest.mark.unit
class TestUserSectionService:

    def add_row(self, db_session, datagrid, user, data, order=0):
        return DatagridRowRepository(db_session).create(DatagridRowCreate(
            tenant_id=datagrid.tenant_id, user_id=user.id, datagrid_id=datagrid.id, data=data, order=order,
        ))

    def test_round_trip(self, db_session, sample_user, sample_section, sample_datagrid, team_column):
        self.add_row(db_session, sample_datagrid, sample_user, {"team": "Toronto Raptors"}, order=1)

        view = UserSectionService(db_session).get_user_section_view(sample_user.id, sample_section.id)

        assert view.user.id == sample_user.id
        assert view.section.name == "Experience"
        assert len(view.section.datagrids) == 1
        datagrid = view.section.datagrids[0]
        assert [c.key for c in datagrid.columns] == ["team"]
        assert [r.data for r in datagrid.rows] == [{"team": "Toronto Raptors"}]

    def test_only_the_users_rows(self, db_session, sample_tenant, sample_user, sample_section, sample_datagrid, team_column, factory):
        teammate = factory.user(sample_tenant)
        self.add_row(db_session, sample_datagrid, sample_user, {"team": "Raptors"})
        self.add_row(db_session, sample_datagrid, teammate, {"team": "Lakers"})

        view = UserSectionService(db_session).get_user_section_view(sample_user.id, sample_section.id)

        assert [r.data["team"] for r in view.section.datagrids[0].rows] == ["Raptors"]
        assert view.user.id == sample_user.id

    def test_nested_collections_are_ordered(self, db_session, sample_tenant, sample_user, factory):
        now = datetime(2026, 1, 1, 12, 0, 0)
        section = factory.section(sample_tenant, name="Experience")
        history = factory.datagrid(section, name="History", order=2, created_at=now)
        experience = factory.datagrid(section, name="Experience", order=2, created_at=now + timedelta(seconds=5))
        awards = factory.datagrid(section, name="Awards", order=1)
        factory.column(history, "role", order=1)
        factory.column(history, "club", order=2)
        self.add_row(db_session, history, sample_user, {"role": "Guard"}, order=1)
        self.add_row(db_session, history, sample_user, {"role": "Captain"}, order=2)

        view = UserSectionService(db_session).get_user_section_view(sample_user.id, section.id)

        assert [d.id for d in view.section.datagrids] == [experience.id, history.id, awards.id]
        history_view = view.section.datagrids[1]
        assert [c.key for c in history_view.columns] == ["club", "role"]
        assert [r.data["role"] for r in history_view.rows] == ["Captain", "Guard"]
        assert view.section.datagrids[0].rows == []
        assert view.section.datagrids[0].columns == []

    def test_section_without_datagrids(self, db_session, sample_tenant, sample_user, factory):
        section = factory.section(sample_tenant, name="Empty")

        view = UserSectionService(db_session).get_user_section_view(sample_user.id, section.id)

        assert view.section.datagrids == []

    def test_missing_section(self, db_session, sample_user):
        with pytest.raises(SectionNotFound):
            UserSectionService(db_session).get_user_section_view(sample_user.id, uuid4())

    def test_missing_user(self, db_session, sample_section):
        with pytest.raises(UserNotFound):
            UserSectionService(db_session).get_user_section_view(uuid4(), sample_section.id)

    def test_tenant_scope(self, db_session, sample_user, sample_section, other_tenant):
        with pytest.raises(SectionNotFound):
            UserSectionService(db_session).get_user_section_view(
                sample_user.id, sample_section.id, tenant_id=other_tenant.id
            )

    def test_malformed_ids(self, db_session):
        with pytest.raises(InvalidIdentifier) as exc_info:
            UserSectionService(db_session).get_user_section_view("nope", str(uuid4()))

        assert exc_info.value.keys == ["user_id"]

    def test_row_order_defaults_to_zero(self, db_session, sample_user, sample_section, sample_datagrid, team_column):
        self.add_row(db_session, sample_datagrid, sample_user, {"team": "Raptors"})

        view = UserSectionService(db_session).get_user_section_view(sample_user.id, sample_section.id)

        row = view.section.datagrids[0].rows[0]
        assert row.data["team"] == "Raptors"
        assert row.order == 0

    def test_history_captain_scenario(self, db_session, factory):
        from repositories.datagrid_column_repository import DatagridColumnRepository
        from repositories.datagrid_repository import DatagridRepository
        from repositories.section_repository import SectionRepository
        from schemas.datagrid import DatagridCreate
        from schemas.datagrid_column import DatagridColumnCreate
        from schemas.section import SectionCreate

        tenant = factory.tenant()
        user = factory.user(tenant)
        section = SectionRepository(db_session).create(SectionCreate(tenant_id=tenant.id, name="Experience", order=1))
        datagrid = DatagridRepository(db_session).create(DatagridCreate(
            tenant_id=tenant.id, section_id=section.id, name="History",
        ))
        DatagridColumnRepository(db_session).create(DatagridColumnCreate(
            tenant_id=tenant.id, datagrid_id=datagrid.id, key="role", label="Role", type="text", required=True,
        ))
        self.add_row(db_session, datagrid, user, {"role": "Captain"})

        view = UserSectionService(db_session).get_user_section_view(user.id, section.id, tenant.id)

        assert len(view.section.datagrids) == 1
        history = view.section.datagrids[0]
        assert history.name == "History"
        assert [c.key for c in history.columns] == ["role"]
        assert [r.data for r in history.rows] == [{"role": "Captain"}]
