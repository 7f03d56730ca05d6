import json

import typer
from typer import Option

from core.logging_config import setup_logging, get_logger

app = typer.Typer(help="Datagrid maintenance commands")
logger = get_logger(__name__)


@app.command()
def init_db():
    """Create all tables on the configured database"""
    from db.session import engine
    from models.base import Base
    import models  # noqa: F401 - registers the mapped tables

    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info(f"Created {len(Base.metadata.tables)} tables")


@app.command()
def seed(
    subdomain: str = Option("test", "--subdomain"),
    email: str = Option("test@example.com", "--email"),
):
    """
    Load a small demo data set: a tenant with one user, an Experience
    section and datagrid with a required 'team' column, and one row.
    """
    from db.session import db_context
    from repositories.datagrid_column_repository import DatagridColumnRepository
    from repositories.datagrid_repository import DatagridRepository
    from repositories.datagrid_row_repository import DatagridRowRepository
    from repositories.section_repository import SectionRepository
    from repositories.tenant_repository import TenantRepository
    from repositories.user_repository import UserRepository
    from schemas.datagrid import DatagridCreate
    from schemas.datagrid_column import DatagridColumnCreate
    from schemas.datagrid_row import DatagridRowCreate
    from schemas.section import SectionCreate
    from schemas.tenant import TenantCreate
    from schemas.user import UserCreate

    setup_logging()
    with db_context() as db:
        tenant_repo = TenantRepository(db)
        tenant = tenant_repo.get_by_subdomain(subdomain)
        if tenant is None:
            tenant = tenant_repo.create(TenantCreate(name="Test Tenant", subdomain=subdomain))

        user = UserRepository(db).create(UserCreate(
            tenant_id=tenant.id, email=email, first_name="John", last_name="Doe",
        ))
        section = SectionRepository(db).create(SectionCreate(
            tenant_id=tenant.id, name="Experience",
            description="Professional experience and achievements", order=1,
        ))
        datagrid = DatagridRepository(db).create(DatagridCreate(
            tenant_id=tenant.id, section_id=section.id, name="Experience",
            description="Professional experience entries", order=1,
        ))

        column_repo = DatagridColumnRepository(db)
        if column_repo.get_by_key("team") is None:
            column_repo.create(DatagridColumnCreate(
                tenant_id=tenant.id, datagrid_id=datagrid.id,
                key="team", label="Team", type="text", required=True, order=1,
            ))
        else:
            logger.warning("Column key 'team' already exists; the new datagrid is left without columns")

        row = DatagridRowRepository(db).create(DatagridRowCreate(
            tenant_id=tenant.id, user_id=user.id, datagrid_id=datagrid.id,
            data={"team": "Toronto Raptors"}, order=1,
        ))

        summary = {
            "tenant_id": str(tenant.id),
            "user_id": str(user.id),
            "section_id": str(section.id),
            "datagrid_id": str(datagrid.id),
            "row_id": str(row.id),
            "data": row.data,
        }

    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    app()
