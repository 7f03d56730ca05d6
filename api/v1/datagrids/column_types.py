"""Column Types API endpoints - read-only, served from the column type registry"""

from fastapi import APIRouter

from schemas.column_schema import ColumnTypeRead
from services.column_type_registry import get_column_type_registry

router = APIRouter()


@router.get("/", response_model=list[ColumnTypeRead])
def list_column_types():
    """List the column types row values can be validated as"""
    handlers = get_column_type_registry().get_all_handlers()
    return [
        ColumnTypeRead(handle=handle, label=handler.label, description=handler.description)
        for handle, handler in sorted(handlers.items())
    ]
