"""Pytest configuration and fixtures."""

import pytest

from app.dataapi.config import DataAPIConfig


@pytest.fixture
def config() -> DataAPIConfig:
    """Config with short intervals so loop tests finish quickly."""
    return DataAPIConfig(
        api_key="test-key",
        currency="BTC",
        market="EUR",
        refresh_interval=3600.0,
        retry_interval=0.01,
    )
