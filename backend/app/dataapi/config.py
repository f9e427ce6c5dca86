"""Environment-derived configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_API_KEY = "API_KEY"
ENV_CURRENCY = "CURRENCY"
ENV_MARKET = "MARKET"
ENV_REFRESH_INTERVAL = "REFRESH_INTERVAL"
ENV_RETRY_INTERVAL = "RETRY_INTERVAL"

# The free Alpha Vantage key is heavily rate limited, so poll rarely once we
# have data and retry quickly after a failure.
DEFAULT_REFRESH_INTERVAL = 2 * 60 * 60.0
DEFAULT_RETRY_INTERVAL = 5.0


@dataclass(frozen=True, slots=True)
class DataAPIConfig:
    """Immutable settings for the refresher. Read once at startup."""

    api_key: str
    currency: str
    market: str
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    retry_interval: float = DEFAULT_RETRY_INTERVAL

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"DataAPIConfig(currency={self.currency!r}, market={self.market!r}, "
            f"refresh_interval={self.refresh_interval}, retry_interval={self.retry_interval})"
        )


def _required(env: Mapping[str, str], name: str, what: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigError(f"No {what} provided (set {name})")
    return value


def _interval(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def load_config(env: Mapping[str, str] | None = None) -> DataAPIConfig:
    """Build a DataAPIConfig from environment variables.

    - API_KEY, CURRENCY, MARKET are required and must be non-blank.
    - REFRESH_INTERVAL / RETRY_INTERVAL (seconds) are optional overrides.

    Raises ConfigError on the first missing or invalid value.
    """
    if env is None:
        env = os.environ

    config = DataAPIConfig(
        api_key=_required(env, ENV_API_KEY, "API key"),
        currency=_required(env, ENV_CURRENCY, "currency ticker"),
        market=_required(env, ENV_MARKET, "market name"),
        refresh_interval=_interval(env, ENV_REFRESH_INTERVAL, DEFAULT_REFRESH_INTERVAL),
        retry_interval=_interval(env, ENV_RETRY_INTERVAL, DEFAULT_RETRY_INTERVAL),
    )
    logger.info("Data API config: %s/%s", config.currency, config.market)
    return config
