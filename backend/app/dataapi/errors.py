"""Exceptions raised inside the data API."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """A required setting is missing or invalid. Fatal at startup."""


class FetchError(Exception):
    """A refresh attempt failed. Absorbed by the data source loop."""


class TransportError(FetchError):
    """Network failure or non-200 response from the remote API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PayloadParseError(FetchError):
    """Response body is not a JSON object."""


class RemoteAPIError(FetchError):
    """Response parsed, but the API reported an error in the payload."""
