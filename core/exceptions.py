"""Domain errors raised by the datagrid core.

Every error carries a stable ``code`` so that callers (the HTTP layer, the
CLI) can map it to their own status without parsing messages.
"""

from typing import Any, Optional

from schemas.column_schema import FieldError


class DatagridError(Exception):
    code = "datagrid_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class NotFoundError(DatagridError):
    code = "not_found"
    entity = "entity"

    def __init__(self, entity_id: Any = None, message: Optional[str] = None):
        self.entity_id = entity_id
        super().__init__(
            message or f"{self.entity.capitalize()} not found",
            {"entity": self.entity, "id": str(entity_id) if entity_id is not None else None},
        )


class TenantNotFound(NotFoundError):
    code = "tenant_not_found"
    entity = "tenant"


class UserNotFound(NotFoundError):
    code = "user_not_found"
    entity = "user"


class SectionNotFound(NotFoundError):
    code = "section_not_found"
    entity = "section"


class DatagridNotFound(NotFoundError):
    code = "datagrid_not_found"
    entity = "datagrid"


class ColumnNotFound(NotFoundError):
    code = "column_not_found"
    entity = "column"


class RowNotFound(NotFoundError):
    code = "row_not_found"
    entity = "row"


class ScopeMismatchError(DatagridError):
    """A child entity's tenant disagrees with its parent's tenant."""
    code = "tenant_mismatch"

    def __init__(self, parent_tenant_id: Any, child_tenant_id: Any):
        self.parent_tenant_id = parent_tenant_id
        self.child_tenant_id = child_tenant_id
        super().__init__(
            "Tenant mismatch between parent and child entity",
            {"parent_tenant_id": str(parent_tenant_id), "child_tenant_id": str(child_tenant_id)},
        )


class ValidationFailure(DatagridError):
    code = "validation_failed"

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(message, {"errors": [error.model_dump(exclude_none=True) for error in self.errors]})

    @property
    def keys(self) -> list[str]:
        return list(dict.fromkeys(error.key for error in self.errors))


class SchemaViolation(ValidationFailure):
    """Row payload rejected by the datagrid's column schema."""
    code = "schema_violation"

    def __init__(self, errors: list[FieldError]):
        super().__init__(errors, "Row data does not match the datagrid columns")


class InvalidIdentifier(ValidationFailure):
    code = "invalid_identifier"

    def __init__(self, field: str, value: Any):
        super().__init__(
            [FieldError(key=field, code="invalid_type", message=f"{field} must be a valid UUID")],
            f"{field} must be a valid UUID",
        )
        self.value = value


class DuplicateKeyError(DatagridError):
    code = "duplicate_key"

    def __init__(self, field: str, value: Any, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(
            message or f"A record with {field} '{value}' already exists",
            {"field": field, "value": value},
        )


class StorageError(DatagridError):
    code = "storage_error"


class IntegrityError(StorageError):
    """A cascade or transactional write could not complete and was rolled back."""
    code = "integrity_error"
