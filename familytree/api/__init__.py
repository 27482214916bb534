"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from familytree.api import app

    uvicorn familytree.api:app --reload
"""

from familytree.api.app import app

__all__ = ["app"]
