import pytest
from uuid import uuid4

from core.exceptions import TenantNotFound, UserNotFound
from repositories.user_repository import UserRepository
from schemas.user import UserCreate


@pytest.mark.unit
class TestUserRepository:

    def test_create_user(self, db_session, sample_tenant):
        user = UserRepository(db_session).create(UserCreate(
            tenant_id=sample_tenant.id, email="test@example.com", first_name="John", last_name="Doe",
        ))

        assert user.tenant_id == sample_tenant.id
        assert user.is_active is True
        assert user.password_hash is None

    def test_create_for_missing_tenant(self, db_session):
        with pytest.raises(TenantNotFound):
            UserRepository(db_session).create(UserCreate(
                tenant_id=uuid4(), email="test@example.com", first_name="John", last_name="Doe",
            ))

    def test_get_scoped_to_tenant(self, db_session, sample_user, other_tenant):
        repo = UserRepository(db_session)

        assert repo.get_or_raise(sample_user.id, sample_user.tenant_id).id == sample_user.id
        with pytest.raises(UserNotFound):
            repo.get_or_raise(sample_user.id, other_tenant.id)

    def test_get_all_by_tenant(self, db_session, sample_tenant, other_tenant, factory):
        factory.user(sample_tenant, last_name="Lowry")
        factory.user(sample_tenant, last_name="Leonard")
        factory.user(other_tenant)

        users = UserRepository(db_session).get_all(sample_tenant.id)

        assert [u.last_name for u in users] == ["Leonard", "Lowry"]
