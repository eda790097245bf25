"""
Culture Kernel HTTP API.

One read-only route, GET /rituals, answering with JSON or a terminal view
depending on the client's User-Agent.

Run with: uvicorn culture_kernel.api:app --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from . import __version__
from .config import KernelConfig
from .kernel.codec import decode_all
from .kernel.errors import StoreError
from .kernel.seeding import ensure_seeded
from .kernel.store import CatalogStore
from .render import negotiate

logger = logging.getLogger(__name__)


def get_store(request: Request) -> CatalogStore:
    """The store handle injected by the composition root."""
    return request.app.state.store


def create_app(
    store: Optional[CatalogStore] = None,
    source: Optional[Union[str, Path]] = None,
) -> FastAPI:
    """
    Build the API around a store handle.

    When `source` is given, the catalog is self-healed on startup, before
    the first request is accepted; an InitError aborts startup.
    """
    if store is None:
        config = KernelConfig.from_env()
        store = CatalogStore(config.db_path, timeout=config.timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if source is not None:
            ensure_seeded(app.state.store, source)
        yield

    app = FastAPI(
        title="Culture Kernel API",
        description="The ritual catalog, as JSON or as a terminal view",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "service": "culture-kernel"}

    @app.get("/rituals")
    def list_rituals(request: Request, user_agent: Optional[str] = Header(default=None)):
        """
        List every ritual in the catalog.

        curl and wget get the terminal rendering; any other client, or none,
        gets a JSON array. Stored records that no longer decode are skipped.
        """
        try:
            payloads = get_store(request).get_all()
        except StoreError as e:
            logger.error("Catalog read failed: %s", e)
            raise HTTPException(status_code=500, detail=str(e))

        rendering = negotiate(decode_all(payloads), user_agent)
        return Response(content=rendering.body, media_type=rendering.media_type)

    return app


def _default_app() -> FastAPI:
    config = KernelConfig.from_env()
    return create_app(CatalogStore(config.db_path, timeout=config.timeout), source=config.source_path)


app = _default_app()
