"""Tests for the data and health endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.dataapi.cache import PayloadCache
from app.dataapi.routes import create_data_router

from .conftest import SAMPLE_PAYLOAD


@pytest.fixture
def cache() -> PayloadCache:
    return PayloadCache()


@pytest.fixture
def client(cache) -> TestClient:
    app = FastAPI()
    app.include_router(create_data_router(cache))
    return TestClient(app)


class TestDataEndpoint:
    """Tests for GET /."""

    def test_500_before_first_fetch(self, client):
        """Test that / is a 500 with an empty body while nothing is cached."""
        response = client.get("/")
        assert response.status_code == 500
        assert response.content == b""

    def test_returns_payload_verbatim(self, client, cache):
        """Test that / returns the cached payload as JSON."""
        cache.set(SAMPLE_PAYLOAD)

        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == SAMPLE_PAYLOAD

    def test_follows_replacement(self, client, cache):
        """Test that / serves the newest payload after a replacement."""
        cache.set({"Meta Data": {"version": 1}})
        cache.set({"Meta Data": {"version": 2}})

        assert client.get("/").json() == {"Meta Data": {"version": 2}}

    def test_get_does_not_mutate_cache(self, client, cache):
        """Test that serving the payload leaves the cache untouched."""
        cache.set(SAMPLE_PAYLOAD)
        version = cache.version

        client.get("/")
        client.get("/healthz/ready")

        assert cache.version == version
        assert cache.get() is SAMPLE_PAYLOAD


class TestHealthEndpoints:
    """Tests for the liveness and readiness probes."""

    def test_live_without_data(self, client):
        """Test that liveness is 200 before any fetch."""
        response = client.get("/healthz/live")
        assert response.status_code == 200
        assert response.content == b""

    def test_live_with_data(self, client, cache):
        """Test that liveness is 200 after a fetch."""
        cache.set(SAMPLE_PAYLOAD)
        assert client.get("/healthz/live").status_code == 200

    def test_ready_503_without_data(self, client):
        """Test that readiness is 503 with an empty body before any fetch."""
        response = client.get("/healthz/ready")
        assert response.status_code == 503
        assert response.content == b""

    def test_ready_200_with_data(self, client, cache):
        """Test that readiness is 200 with an empty body once cached."""
        cache.set(SAMPLE_PAYLOAD)
        response = client.get("/healthz/ready")
        assert response.status_code == 200
        assert response.content == b""

    def test_unknown_route(self, client):
        """Test that other paths are not served."""
        assert client.get("/healthz").status_code == 404

    def test_only_get_allowed(self, client):
        """Test that the routes are read-only."""
        assert client.post("/").status_code == 405
