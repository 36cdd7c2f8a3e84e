"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocoin import __version__
from geocoin.api.dependencies import set_session
from geocoin.api.routes import api_router
from geocoin.config import GameConfig
from geocoin.engine.session import GameSession
from geocoin.systems.storage import KeyValueStore
from geocoin.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, store: KeyValueStore | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    ``store`` overrides the backend chosen from ``config.storage_path``.
    """
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        session = GameSession(_config, store=store)
        set_session(session)
        logger.info("API server started: %d caches around the start.", len(session.active_caches))
        yield
        session.close()
        set_session(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocoin",
        description=(
            "Location-based coin collecting: game core API.\n\n"
            "## API Groups\n\n"
            "- **State**: Player position, coins, nearby caches, event feed\n"
            "- **Player**: Location fixes, explicit moves, single-tile steps\n"
            "- **Caches**: Inspect a visible cache, withdraw coins\n"
            "- **Control**: Game reset\n"
            "- **Config**: Read-only game configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
