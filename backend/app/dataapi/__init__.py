"""Digital currency data API.

Public API:
    PayloadCache            - Thread-safe single-slot payload store
    DataSource              - Abstract interface for the background producer
    AlphaVantageDataSource  - Refresher polling Alpha Vantage into the cache
    DataAPIConfig           - Immutable environment-derived settings
    load_config             - Read DataAPIConfig from the environment
    create_data_router      - FastAPI router factory for data and health endpoints
"""

from .alphavantage_client import AlphaVantageDataSource
from .cache import PayloadCache
from .config import DataAPIConfig, load_config
from .errors import ConfigError
from .interface import DataSource
from .routes import create_data_router

__all__ = [
    "AlphaVantageDataSource",
    "ConfigError",
    "DataAPIConfig",
    "DataSource",
    "PayloadCache",
    "create_data_router",
    "load_config",
]
