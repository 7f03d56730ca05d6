import pytest
from unittest.mock import Mock
from uuid import uuid4

from sqlalchemy.exc import OperationalError

from core.exceptions import IntegrityError
from services.cascade_service import CascadeService


@pytest.mark.unit
class TestCascadeService:

    def setup_method(self):
        self.mock_db = Mock()
        self.mock_db.scalar.return_value = 0
        self.service = CascadeService(self.mock_db)

        self.mock_row = Mock()
        self.mock_row.id = uuid4()
        self.mock_row.tenant_id = uuid4()
        self.mock_row.datagrid_id = uuid4()

    def test_delete_commits_once(self):
        report = self.service.delete_row(self.mock_row)

        assert report.entity == "row"
        assert report.entity_id == self.mock_row.id
        self.mock_db.delete.assert_called_once_with(self.mock_row)
        self.mock_db.commit.assert_called_once()
        self.mock_db.rollback.assert_not_called()

    def test_storage_failure_rolls_back(self):
        self.mock_db.commit.side_effect = OperationalError("DELETE", {}, Exception("disk I/O error"))

        with pytest.raises(IntegrityError) as exc_info:
            self.service.delete_row(self.mock_row)

        self.mock_db.rollback.assert_called_once()
        assert exc_info.value.details == {"entity": "row", "id": str(self.mock_row.id)}

    def test_counts_come_from_database(self):
        self.mock_db.scalar.side_effect = [2, 3, 4, 5, 6]
        tenant = Mock()
        tenant.id = uuid4()

        report = self.service.delete_tenant(tenant)

        assert (report.users, report.sections, report.datagrids, report.columns, report.rows) == (2, 3, 4, 5, 6)

    def test_prune_defaults_to_settings(self, db_session, sample_datagrid, sample_user, team_column, monkeypatch):
        from models import DatagridRow
        from services import cascade_service

        row = DatagridRow(
            datagrid=sample_datagrid, user=sample_user, tenant_id=sample_datagrid.tenant_id,
            data={"team": "Toronto Raptors"},
        )
        db_session.add(row)
        db_session.commit()
        monkeypatch.setattr(cascade_service.settings, "DATAGRID_PRUNE_ORPHANED_KEYS", True)

        report = CascadeService(db_session).delete_column(team_column)

        assert report.pruned_rows == 1
        db_session.refresh(row)
        assert row.data == {}
