from models.tenant import Tenant
from models.user import User

# Datagrid hierarchy
from models.section import Section
from models.datagrid import Datagrid
from models.datagrid_column import DatagridColumn
from models.datagrid_row import DatagridRow
