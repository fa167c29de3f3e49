"""Database layer package.

Public re-exports so callers can write::

    from sitearch.db import get_connection, init_db
    from sitearch.db import pages, tenants
"""

from sitearch.db.connection import get_connection
from sitearch.db.migrations import init_db
from sitearch.db import pages, tenants

__all__ = ["get_connection", "init_db", "pages", "tenants"]
