"""
HTTP boundary
=============
FastAPI app serving composited icon grids.

Run with:
    readme-icons serve
or
    uvicorn readme_icons.server:create_app --factory
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import PlainTextResponse, Response

from readme_icons import __version__
from readme_icons.catalog import get_catalog
from readme_icons.config import load_config
from readme_icons.grid import LayoutRequest, composite

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "ok", "version": __version__}


@router.get("/api/icons")
def icons_grid(
    request: Request,
    i: str | None = Query(default=None, description="Comma-separated icon slugs"),
    t: str | None = Query(default=None, description="'light' for white cells"),
    perline: str | None = Query(default=None, description="Icons per row (1-50)"),
    size: str | None = Query(default=None, description="Icon edge in px (16-128)"),
):
    """
    Render the requested icons as one SVG grid.

    - **400** when `i` is missing or empty
    - **404** when none of the slugs are in the catalog
    """
    layout = LayoutRequest.from_query(i, t, perline, size)
    result = composite(layout, request.app.state.catalog)
    if not result.ok:
        return PlainTextResponse(result.error.message, status_code=result.error.status_code)

    return Response(
        content=result.svg,
        media_type=SVG_MEDIA_TYPE,
        headers={"Cache-Control": request.app.state.cache_control},
    )


def create_app(config: dict | None = None) -> FastAPI:
    """Build the app; the catalog is loaded here, once, before any request."""
    config = config or load_config()
    catalog = get_catalog(config["catalog"].get("path"))
    logger.info("Serving %d icons from catalog '%s'", len(catalog), catalog.name)

    app = FastAPI(
        title="readme-icons",
        description="Skill-icon grids for README files",
        version=__version__,
    )
    app.state.catalog = catalog
    app.state.cache_control = config["server"]["cache_control"]
    app.include_router(router)
    return app


def run_server(config: dict, host: str | None = None, port: int | None = None) -> None:
    import uvicorn

    server = config["server"]
    uvicorn.run(
        create_app(config),
        host=host or server["host"],
        port=port or server["port"],
        log_level=str(server.get("log_level", "info")).lower(),
    )
