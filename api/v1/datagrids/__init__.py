"""Datagrid API routes"""

from fastapi import APIRouter
from . import tenants, users, sections, datagrids, columns, rows, user_sections, column_types

router = APIRouter()

router.include_router(tenants.router, prefix="/tenants", tags=["Tenants"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(user_sections.router, prefix="/users", tags=["User Sections"])
router.include_router(sections.router, prefix="/sections", tags=["Sections"])
router.include_router(datagrids.router, prefix="/datagrids", tags=["Datagrids"])
router.include_router(columns.router, prefix="/datagrid-columns", tags=["Datagrid Columns"])
router.include_router(rows.router, prefix="/datagrid-rows", tags=["Datagrid Rows"])
router.include_router(column_types.router, prefix="/column-types", tags=["Column Types"])
