"""Alpha Vantage API client that keeps the payload cache fresh."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from .cache import PayloadCache
from .config import DataAPIConfig
from .errors import PayloadParseError, RemoteAPIError, TransportError
from .interface import DataSource

logger = logging.getLogger(__name__)

API_ENDPOINT = "https://www.alphavantage.co/query"
API_FUNCTION = "DIGITAL_CURRENCY_DAILY"
ERROR_KEY = "Error Message"


class AlphaVantageDataSource(DataSource):
    """DataSource backed by the Alpha Vantage DIGITAL_CURRENCY_DAILY endpoint.

    Fetches the configured currency/market pair and stores the parsed JSON
    object in the PayloadCache, untouched.

    Timing is a two-state timer:
      - after a success: wait `refresh_interval` (hours, quota-bound)
      - after any failure: wait `retry_interval` (seconds)
    Retries never stop; a failure leaves the previous payload in the cache.
    """

    def __init__(
        self,
        config: DataAPIConfig,
        payload_cache: PayloadCache,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._cache = payload_cache
        self._client = client
        self._owns_client = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        if self._client is None:
            self._client = httpx.Client()
            self._owns_client = True
        # First fetch happens inside the task so startup never waits on the API
        self._task = asyncio.create_task(self._refresh_loop(), name="alphavantage-refresher")
        logger.info(
            "Alpha Vantage refresher started: %s/%s, refresh %.0fs, retry %.0fs",
            self._config.currency,
            self._config.market,
            self._config.refresh_interval,
            self._config.retry_interval,
        )

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        # Injected clients belong to the caller
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
            self._owns_client = False
        logger.info("Alpha Vantage refresher stopped")

    # --- Internal ---

    async def _refresh_loop(self) -> None:
        """Refresh forever. No delay before the very first fetch."""
        delay = 0.0
        while True:
            if delay > 0:
                logger.info("Sleeping for %d seconds before refreshing the data", delay)
                await asyncio.sleep(delay)
            delay = await self._refresh_once()

    async def _refresh_once(self) -> float:
        """Run one fetch cycle. Returns the delay before the next one."""
        logger.info("Refreshing the data")
        try:
            # httpx.Client is synchronous, keep it off the event loop
            payload = await asyncio.to_thread(self._fetch_payload)
        except TransportError as e:
            logger.error("Error fetching data: %s", e)
            return self._config.retry_interval
        except PayloadParseError as e:
            logger.error("Cannot parse fetched data: %s", e)
            return self._config.retry_interval
        except RemoteAPIError as e:
            logger.error("Fetch API error: %s", e)
            return self._config.retry_interval
        except Exception:
            logger.exception("Unexpected failure while refreshing the data")
            return self._config.retry_interval

        self._cache.set(payload)
        logger.info("Refresh succeeded (version %d)", self._cache.version)
        return self._config.refresh_interval

    def _request_params(self) -> dict[str, str]:
        return {
            "function": API_FUNCTION,
            "symbol": self._config.currency,
            "market": self._config.market,
            "apikey": self._config.api_key,
        }

    def _fetch_payload(self) -> dict[str, Any]:
        """Synchronous call to the Alpha Vantage API. Runs in a thread.

        Raises a FetchError subclass for every kind of failure.
        """
        if self._client is None:
            raise TransportError("HTTP client is not open")

        try:
            response = self._client.get(API_ENDPOINT, params=self._request_params())
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise TransportError(f"status {response.status_code}", status_code=response.status_code)

        logger.debug("Parsing fetched data (%d bytes)", len(response.content))
        return parse_payload(response.content)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_payload(body: bytes) -> dict[str, Any]:
    """Decode a response body into a payload dict.

    Raises PayloadParseError if the body is not a JSON object and
    RemoteAPIError if the object carries the API's error key.
    """
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError as e:
        raise PayloadParseError(str(e)) from e

    if not isinstance(payload, dict):
        raise PayloadParseError(f"expected a JSON object, got {type(payload).__name__}")

    if ERROR_KEY in payload:
        raise RemoteAPIError(str(payload[ERROR_KEY]))

    return payload
