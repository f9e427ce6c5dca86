"""Fixtures for data API tests.

The remote Alpha Vantage API is replaced by an ``httpx.MockTransport`` that
plays back a scripted list of responses, one per request.
"""

from collections.abc import Callable, Iterator

import httpx
import pytest

SAMPLE_PAYLOAD = {
    "Meta Data": {
        "1. Information": "Daily Prices and Volumes for Digital Currency",
        "2. Digital Currency Code": "BTC",
        "4. Market Code": "EUR",
    },
    "Time Series (Digital Currency Daily)": {
        "2024-03-01": {"1. open": "56000.10", "4. close": "57000.20"},
    },
}


class ScriptedAPI:
    """Callable httpx transport handler replaying canned responses.

    Each item is either an httpx.Response or an exception to raise. The last
    item repeats once the script runs out.
    """

    def __init__(self, *script: httpx.Response | Exception) -> None:
        self._script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self._script)) - 1
        item = self._script[index]
        if isinstance(item, Exception):
            raise item
        # Fresh copy so a repeated item is not read twice
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)


@pytest.fixture
def make_client() -> Iterator[Callable[..., tuple[httpx.Client, ScriptedAPI]]]:
    """Factory returning an httpx.Client wired to a ScriptedAPI.

    Clients are closed on teardown; the data source leaves injected clients open.
    """
    clients: list[httpx.Client] = []

    def _make(*script: httpx.Response | Exception) -> tuple[httpx.Client, ScriptedAPI]:
        api = ScriptedAPI(*script)
        client = httpx.Client(transport=httpx.MockTransport(api))
        clients.append(client)
        return client, api

    yield _make

    for client in clients:
        client.close()
