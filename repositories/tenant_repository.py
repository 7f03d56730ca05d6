"""Tenant Repository - Data access layer for tenants"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.exceptions import DuplicateKeyError, TenantNotFound
from core.identity import ensure_id
from core.logging_config import get_logger
from db.session import get_db, commit_or_raise
from models import Tenant
from models.base import utcnow
from schemas.cascade import CascadeReport
from schemas.tenant import TenantCreate
from services.cascade_service import CascadeService

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"name", "domain", "is_active", "settings"}
NON_NULLABLE_FIELDS = {"name", "is_active"}


class TenantRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_or_raise(self, tenant_id: UUID | str) -> Tenant:
        tenant_id = ensure_id(tenant_id, "tenant_id")
        tenant = self.session.scalar(select(Tenant).where(Tenant.id == tenant_id))
        if not tenant:
            raise TenantNotFound(tenant_id)
        return tenant

    def get_by_subdomain(self, subdomain: str) -> Tenant | None:
        return self.session.scalar(select(Tenant).where(Tenant.subdomain == subdomain))

    def get_all(self, active_only: bool = False) -> list[Tenant]:
        stmt = select(Tenant)
        if active_only:
            stmt = stmt.where(Tenant.is_active.is_(True))
        return list(self.session.scalars(stmt.order_by(Tenant.name, Tenant.created_at.desc())).all())

    def create(self, tenant_data: TenantCreate) -> Tenant:
        """Create a tenant; subdomains are globally unique"""
        if self.get_by_subdomain(tenant_data.subdomain):
            raise DuplicateKeyError("subdomain", tenant_data.subdomain)

        tenant = Tenant(**tenant_data.model_dump())
        self.session.add(tenant)
        commit_or_raise(self.session, duplicate=("subdomain", tenant_data.subdomain))
        self.session.refresh(tenant)

        logger.info_ctx("Tenant created", tenant_id=tenant.id, subdomain=tenant.subdomain)
        return tenant

    def update(self, tenant: Tenant, update_data: dict) -> Tenant:
        for key, value in update_data.items():
            if key not in UPDATABLE_FIELDS:
                continue
            if key in NON_NULLABLE_FIELDS and value is None:
                continue
            setattr(tenant, key, value)
        tenant.updated_at = utcnow()

        commit_or_raise(self.session)
        self.session.refresh(tenant)
        return tenant

    def delete(self, tenant: Tenant) -> CascadeReport:
        """Delete a tenant with all of its users, sections, datagrids, columns and rows"""
        return CascadeService(self.session).delete_tenant(tenant)


def get_tenant_repository(db: Session = Depends(get_db)) -> TenantRepository:
    """Dependency for tenant repository"""
    return TenantRepository(db)
