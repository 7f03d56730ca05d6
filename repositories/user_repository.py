"""User Repository - Data access layer for users"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy import select

from core.exceptions import UserNotFound
from core.identity import ensure_id, assert_same_tenant
from core.logging_config import get_logger
from db.session import get_db, commit_or_raise
from models import User
from repositories.tenant_repository import TenantRepository
from schemas.user import UserCreate

logger = get_logger(__name__)


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_or_raise(self, user_id: UUID | str, tenant_id: Optional[UUID | str] = None) -> User:
        """Get a user, optionally scoped to a tenant"""
        stmt = select(User).where(User.id == ensure_id(user_id, "user_id"))
        if tenant_id is not None:
            stmt = stmt.where(User.tenant_id == ensure_id(tenant_id, "tenant_id"))
        user = self.session.scalar(stmt)
        if not user:
            raise UserNotFound(user_id)
        return user

    def get_all(self, tenant_id: Optional[UUID | str] = None) -> list[User]:
        stmt = select(User)
        if tenant_id is not None:
            stmt = stmt.where(User.tenant_id == ensure_id(tenant_id, "tenant_id"))
        return list(self.session.scalars(stmt.order_by(User.last_name, User.first_name)).all())

    def create(self, user_data: UserCreate) -> User:
        tenant_id = ensure_id(user_data.tenant_id, "tenant_id")
        tenant = TenantRepository(self.session).get_or_raise(tenant_id)
        assert_same_tenant(tenant.id, tenant_id)

        user = User(tenant=tenant, **user_data.model_dump(exclude={"tenant_id"}))
        self.session.add(user)
        commit_or_raise(self.session)
        self.session.refresh(user)

        logger.info_ctx("User created", tenant_id=tenant.id, user_id=user.id)
        return user


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Dependency for user repository"""
    return UserRepository(db)
