from typing import Generator
import pytest
from sqlalchemy import StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient
from faker import Faker

from main import app
from models.base import Base
from models import Tenant, User, Section, Datagrid, DatagridColumn
from db.session import build_engine, get_db

fake = Faker()

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# build_engine switches on SQLite foreign keys so ON DELETE CASCADE is enforced
engine = build_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a test database session."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_tenant(session: Session, **kwargs) -> Tenant:
    tenant = Tenant(
        name=kwargs.pop("name", fake.company()),
        subdomain=kwargs.pop("subdomain", fake.unique.domain_word()),
        **kwargs
    )
    session.add(tenant)
    session.commit()
    session.refresh(tenant)
    return tenant


def make_user(session: Session, tenant: Tenant, **kwargs) -> User:
    user = User(
        tenant=tenant,
        email=kwargs.pop("email", fake.email()),
        first_name=kwargs.pop("first_name", fake.first_name()),
        last_name=kwargs.pop("last_name", fake.last_name()),
        **kwargs
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_section(session: Session, tenant: Tenant, **kwargs) -> Section:
    section = Section(tenant=tenant, name=kwargs.pop("name", fake.word().capitalize()), **kwargs)
    session.add(section)
    session.commit()
    session.refresh(section)
    return section


def make_datagrid(session: Session, section: Section, **kwargs) -> Datagrid:
    datagrid = Datagrid(
        section=section,
        tenant_id=section.tenant_id,
        name=kwargs.pop("name", fake.word().capitalize()),
        **kwargs
    )
    session.add(datagrid)
    session.commit()
    session.refresh(datagrid)
    return datagrid


def make_column(session: Session, datagrid: Datagrid, key: str, type: str = "text", **kwargs) -> DatagridColumn:
    column = DatagridColumn(
        datagrid=datagrid,
        tenant_id=datagrid.tenant_id,
        key=key,
        label=kwargs.pop("label", key.replace("_", " ").title()),
        type=type,
        **kwargs
    )
    session.add(column)
    session.commit()
    session.refresh(column)
    return column


@pytest.fixture
def sample_tenant(db_session: Session) -> Tenant:
    """Create a sample tenant for testing."""
    return make_tenant(db_session)


@pytest.fixture
def other_tenant(db_session: Session) -> Tenant:
    """A second tenant for isolation tests."""
    return make_tenant(db_session)


@pytest.fixture
def sample_user(db_session: Session, sample_tenant: Tenant) -> User:
    """Create a sample user for testing."""
    return make_user(db_session, sample_tenant)


@pytest.fixture
def sample_section(db_session: Session, sample_tenant: Tenant) -> Section:
    """Create a sample section for testing."""
    return make_section(db_session, sample_tenant, name="Experience", order=1)


@pytest.fixture
def sample_datagrid(db_session: Session, sample_section: Section) -> Datagrid:
    """Create a sample datagrid for testing."""
    return make_datagrid(db_session, sample_section, name="Experience", order=1)


@pytest.fixture
def team_column(db_session: Session, sample_datagrid: Datagrid) -> DatagridColumn:
    """Required text column 'team' on the sample datagrid."""
    return make_column(db_session, sample_datagrid, "team", "text", required=True, order=1)


class DataFactory:
    """Builds persisted entities on the test session."""

    def __init__(self, session: Session):
        self.session = session

    def tenant(self, **kwargs) -> Tenant:
        return make_tenant(self.session, **kwargs)

    def user(self, tenant: Tenant, **kwargs) -> User:
        return make_user(self.session, tenant, **kwargs)

    def section(self, tenant: Tenant, **kwargs) -> Section:
        return make_section(self.session, tenant, **kwargs)

    def datagrid(self, section: Section, **kwargs) -> Datagrid:
        return make_datagrid(self.session, section, **kwargs)

    def column(self, datagrid: Datagrid, key: str, type: str = "text", **kwargs) -> DatagridColumn:
        return make_column(self.session, datagrid, key, type, **kwargs)


@pytest.fixture
def factory(db_session: Session) -> DataFactory:
    return DataFactory(db_session)
