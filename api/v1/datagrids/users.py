"""Users API endpoints"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from repositories.user_repository import UserRepository, get_user_repository
from schemas.user import UserCreate, UserRead

router = APIRouter()


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    user_repo: UserRepository = Depends(get_user_repository),
):
    return user_repo.create(user_data)


@router.get("/", response_model=list[UserRead])
def list_users(
    tenant_id: Optional[UUID] = Query(None),
    user_repo: UserRepository = Depends(get_user_repository),
):
    return user_repo.get_all(tenant_id)


@router.get("/{user_id}/", response_model=UserRead)
def get_user(
    user_id: UUID,
    tenant_id: Optional[UUID] = Query(None),
    user_repo: UserRepository = Depends(get_user_repository),
):
    return user_repo.get_or_raise(user_id, tenant_id)
