"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single SQLite connection (shared across all
requests via ``request.app.state.db``) and initialises the schema.  On
shutdown it closes the connection cleanly.

Routers
-------
    /tenants                     client CRUD
    /tenants/{id}/pages          page list, CSV import, admin edits
    /tenants/{id}/tree|stats|…   derived site-map views
    /template                    CSV import template download
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from sitearch.db import get_connection, init_db
from sitearch.engine.parser import template_csv
from sitearch.logging_config import configure_logging

from sitearch.api.routers import tenants as tenants_router
from sitearch.api.routers import pages as pages_router
from sitearch.api.routers import views as views_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the DB on startup and close it on shutdown."""
    conn = get_connection()
    init_db(conn)
    app.state.db = conn
    try:
        yield
    finally:
        conn.close()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()
    app = FastAPI(
        title="Site Architecture API",
        description=(
            "REST interface for client site maps: SEO keyword-research "
            "imports reconciled against admin edits, the URL-path tree "
            "with rolled-up volume, and site-wide progress statistics."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tenants_router.router, prefix="/tenants", tags=["tenants"])
    app.include_router(pages_router.router, prefix="/tenants", tags=["pages"])
    app.include_router(views_router.router, prefix="/tenants", tags=["views"])

    @app.get("/template", response_class=PlainTextResponse, tags=["pages"])
    def download_template() -> PlainTextResponse:
        """Return the CSV import template with its required column order."""
        return PlainTextResponse(
            template_csv(),
            media_type="text/csv",
            headers={
                "Content-Disposition": 'attachment; filename="seo-keyword-research-template.csv"'
            },
        )

    return app


# Module-level instance used by uvicorn:
#   uvicorn sitearch.api.app:app --reload
app = create_app()
