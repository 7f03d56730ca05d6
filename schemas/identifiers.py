"""Identifier field type for request schemas"""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator

from core.identity import validate_id


def _canonical_id(value: Any) -> Any:
    if not validate_id(value):
        raise ValueError("must be a UUID in canonical 8-4-4-4-12 form")
    return value


EntityId = Annotated[UUID, BeforeValidator(_canonical_id)]
