"""FastAPI application exposing the schema browser."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from schemadex import __version__
from schemadex.browser import SchemaBrowser
from schemadex.config import AppConfig
from schemadex.errors import (
    IndexingError,
    InvalidPattern,
    LinkNotRecognized,
    LookupFailure,
    MalformedDocument,
    ReadFailure,
    SchemadexError,
)
from schemadex.models import SchemaReference, SearchResourceResult

LOGGER = logging.getLogger(__name__)


class SchemaPathPayload(BaseModel):
    path: str


class LinkPayload(BaseModel):
    link: str


class ResetPayload(BaseModel):
    resource: str


class SearchPayload(BaseModel):
    keyword: str


def _status_for(exc: SchemadexError) -> int:
    if isinstance(exc, LookupFailure):
        return 404
    if isinstance(exc, (IndexingError, InvalidPattern, LinkNotRecognized)):
        return 400
    if isinstance(exc, MalformedDocument):
        return 422
    if isinstance(exc, ReadFailure):
        return 500
    return 400


def _http_error(exc: SchemadexError) -> HTTPException:
    status = _status_for(exc)
    if status >= 500:
        LOGGER.error("%s", exc)
    return HTTPException(status_code=status, detail=str(exc))


def _browser(request: Request) -> SchemaBrowser:
    return request.app.state.browser


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the API around a fresh :class:`SchemaBrowser`.

    The configured schema directory, if any, is indexed before the app is
    returned.
    """
    app = FastAPI(title="schemadex", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.browser = SchemaBrowser.from_config(config or AppConfig(), base_dir=Path.cwd())

    @app.on_event("startup")
    async def startup_event() -> None:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    @app.post("/schema-path")
    async def set_schema_path(payload: SchemaPathPayload, request: Request) -> dict[str, Any]:
        path = payload.path.strip()
        if not path:
            raise HTTPException(status_code=400, detail="No path provided")
        if "\0" in path:
            raise HTTPException(status_code=400, detail="Invalid path: contains null byte")

        directory = Path(path).expanduser()
        try:
            stats = await asyncio.to_thread(_browser(request).index_directory, directory)
        except SchemadexError as exc:
            raise _http_error(exc) from exc

        return {
            "status": "ok",
            "directory": str(directory),
            "stats": {
                "resources": stats.resources,
                "defaults": stats.defaults,
                "versioned": stats.versioned,
            },
        }

    @app.get("/schemas")
    async def list_schemas(request: Request) -> dict[str, List[str]]:
        return {"schemas": _browser(request).list_resources()}

    @app.get("/schemas/{resource}/versions")
    async def list_versions(resource: str, request: Request) -> dict[str, List[str]]:
        try:
            versions = _browser(request).list_versions(resource)
        except SchemadexError as exc:
            raise _http_error(exc) from exc
        return {"versions": versions}

    @app.get("/schemas/{resource}/content")
    async def get_content(resource: str, request: Request, version: str = "") -> Response:
        try:
            content = await asyncio.to_thread(_browser(request).get_content, resource, version)
        except SchemadexError as exc:
            raise _http_error(exc) from exc
        return Response(content=content, media_type="application/json")

    @app.post("/position/resolve")
    async def resolve_link(payload: LinkPayload, request: Request) -> SchemaReference:
        try:
            return _browser(request).resolve_link(payload.link)
        except SchemadexError as exc:
            raise _http_error(exc) from exc

    @app.get("/position")
    async def current_position(request: Request) -> dict[str, List[SchemaReference]]:
        return {"position": _browser(request).current_position()}

    @app.post("/position/reset")
    async def reset_position(payload: ResetPayload, request: Request) -> dict[str, List[SchemaReference]]:
        browser = _browser(request)
        browser.reset_position(payload.resource)
        return {"position": browser.current_position()}

    @app.post("/search")
    async def search(payload: SearchPayload, request: Request) -> dict[str, List[SearchResourceResult]]:
        keyword = payload.keyword.strip()
        if not keyword:
            raise HTTPException(status_code=400, detail="Empty keyword")
        try:
            results = await asyncio.to_thread(_browser(request).search, keyword)
        except SchemadexError as exc:
            raise _http_error(exc) from exc
        return {"results": results}

    return app
