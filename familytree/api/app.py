"""FastAPI application factory.

Lifespan
--------
On startup the app initialises the schema in the configured database.
Requests then open their own connection through
:func:`familytree.api.deps.get_db`.

Routers
-------
    /families  — family creation, membership, tree projection, bulk import,
                 node add / edit / delete / account linking
    /nodes     — account lookup for a single tree node

Errors
------
Domain exceptions from :mod:`familytree.errors` are translated to HTTP
status codes by the handlers registered in :func:`create_app`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from familytree import __version__
from familytree.api.routers import families as families_router
from familytree.api.routers import nodes as nodes_router
from familytree.api.routers import tree_nodes as tree_nodes_router
from familytree.config import settings
from familytree.db import get_connection, init_db
from familytree.errors import (
    FamilyTreeError,
    ForbiddenError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from familytree.log import configure_logging

log = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[FamilyTreeError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 400),
    (ForbiddenError, 403),
    (PersistenceError, 500),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create or migrate the schema before serving requests."""
    configure_logging(settings.log_level)
    conn = get_connection()
    try:
        init_db(conn)
    finally:
        conn.close()
    log.info("Database ready at %s", settings.db_path)
    yield


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status = 500
    for error_cls, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            status = code
            break
    if status >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
        detail = "Internal server error"
    else:
        detail = str(exc)
    return JSONResponse(status_code=status, content={"detail": detail})


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Family Tree API",
        description=(
            "REST interface for the family relationship graph: tree "
            "projection, relative insertion, node editing and removal, "
            "account linking, and bulk import of family units."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FamilyTreeError, _domain_error_handler)

    app.include_router(families_router.router, prefix="/families", tags=["families"])
    app.include_router(tree_nodes_router.router, prefix="/families", tags=["tree"])
    app.include_router(nodes_router.router, prefix="/nodes", tags=["nodes"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn familytree.api.app:app --reload
app = create_app()
