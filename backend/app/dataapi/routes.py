"""HTTP endpoints for the cached payload and health probes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from .cache import PayloadCache

logger = logging.getLogger(__name__)


def create_data_router(payload_cache: PayloadCache) -> APIRouter:
    """Create the data API router with a reference to the payload cache.

    This factory pattern lets us inject the PayloadCache without globals.
    """
    router = APIRouter(tags=["data"])

    @router.get("/")
    async def get_data() -> Response:
        """Last successfully fetched payload, verbatim.

        500 with an empty body until the first fetch succeeds.
        """
        payload = payload_cache.get()
        if payload is None:
            logger.debug("Data requested before the first successful refresh")
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return JSONResponse(content=payload)

    @router.get("/healthz/live")
    async def liveness() -> Response:
        return Response(status_code=status.HTTP_200_OK)

    @router.get("/healthz/ready")
    async def readiness() -> Response:
        """Ready once a payload has been cached at least once."""
        if payload_cache.has_data:
            return Response(status_code=status.HTTP_200_OK)
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
