"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from sitearch.api import app

    uvicorn sitearch.api:app --reload
"""

from sitearch.api.app import app

__all__ = ["app"]
