"""Application entry point: wires the cache, refresher and HTTP routes."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .dataapi import (
    AlphaVantageDataSource,
    ConfigError,
    DataAPIConfig,
    DataSource,
    PayloadCache,
    create_data_router,
    load_config,
)

logger = logging.getLogger(__name__)

HOST = "0.0.0.0"
PORT = 8080


def create_app(
    config: DataAPIConfig,
    payload_cache: PayloadCache | None = None,
    source: DataSource | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    The cache is created here (or injected) and shared by reference between
    the data source and the router. The source is started in the lifespan and
    fetches in the background, so the server accepts requests right away.
    """
    cache = payload_cache if payload_cache is not None else PayloadCache()
    if source is None:
        source = AlphaVantageDataSource(config=config, payload_cache=cache)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await source.start()
        try:
            yield
        finally:
            await source.stop()

    app = FastAPI(title="Digital currency data API", lifespan=lifespan)
    app.include_router(create_data_router(cache))
    app.state.payload_cache = cache
    app.state.data_source = source
    return app


def _log_level(name: str) -> int | None:
    """Numeric level for a level name, or None if unknown."""
    return logging.getLevelNamesMapping().get(name.strip().upper())


def run() -> None:
    """Console entry point. Exits with status 1 on bad configuration."""
    level_name = os.environ.get("LOG_LEVEL", "INFO")
    level = _log_level(level_name)
    logging.basicConfig(
        level=level if level is not None else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if level is None:
        logger.warning("Unknown LOG_LEVEL %r, using INFO", level_name)

    try:
        config = load_config()
    except ConfigError as e:
        logger.critical("%s", e)
        sys.exit(1)

    uvicorn.run(create_app(config), host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
