"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocache import __version__
from geocache.api.dependencies import set_session
from geocache.api.routes import api_router
from geocache.config import GameConfig
from geocache.engine.session import GameSession
from geocache.persistence.storage import JsonFileStorage, Storage
from geocache.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, storage: Storage | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config
    _storage = storage if storage is not None else JsonFileStorage(config.save_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level, _config.log_file)
        session = GameSession(_config, _storage)
        session.load()
        set_session(session)
        logger.info("API server started at %s", session.position)
        yield
        set_session(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocache World",
        description=(
            "Deterministic location-based geocache game. Local API for the map client.\n\n"
            "## API Groups\n\n"
            "- **State** : Player position, inventory and the caches surfaced around the player\n"
            "- **Caches** : Inspect one cache; take and place coins\n"
            "- **Control** : Tile-step movement, geolocation fixes, reset\n"
            "- **Config** : Read-only world constants\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Polled by the map after every move."},
            {"name": "Caches", "description": "Cache contents and coin transfers. Transfers are saved immediately."},
            {"name": "Control", "description": "Player movement and resetting all saved data."},
            {"name": "Config", "description": "Tile size, visibility radius, spawn probability, coin limits."},
        ],
    )

    # CORS: the map client is served from a separate dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
