"""Identifier and tenant scoping checks shared by every repository"""

import re
import uuid
from typing import Any

from core.exceptions import InvalidIdentifier, ScopeMismatchError

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE,
)


def new_id() -> uuid.UUID:
    return uuid.uuid4()


def validate_id(candidate: Any) -> bool:
    """True only for a UUID instance or its canonical 8-4-4-4-12 text form."""
    if isinstance(candidate, uuid.UUID):
        return bool(UUID_PATTERN.fullmatch(str(candidate)))
    if not isinstance(candidate, str):
        return False
    return bool(UUID_PATTERN.fullmatch(candidate))


def ensure_id(candidate: Any, field: str) -> uuid.UUID:
    if not validate_id(candidate):
        raise InvalidIdentifier(field, candidate)
    if isinstance(candidate, uuid.UUID):
        return candidate
    return uuid.UUID(candidate)


def assert_same_tenant(parent_tenant_id: Any, child_tenant_id: Any) -> None:
    if str(parent_tenant_id).lower() != str(child_tenant_id).lower():
        raise ScopeMismatchError(parent_tenant_id, child_tenant_id)
