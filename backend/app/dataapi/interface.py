"""Abstract interface for the background data source."""

from __future__ import annotations

from abc import ABC, abstractmethod


class DataSource(ABC):
    """Contract for the payload producer.

    Implementations push payloads into a shared PayloadCache on their own
    schedule. HTTP handlers never call the data source directly, they read
    from the cache.

    Lifecycle:
        source = AlphaVantageDataSource(config, cache)
        await source.start()
        # ... app runs ...
        await source.stop()
    """

    @abstractmethod
    async def start(self) -> None:
        """Launch the background task that writes to the PayloadCache.

        Returns without waiting for the first fetch. Must be called once.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Cancel the background task and release resources.

        Safe to call multiple times. After stop(), the source will not write
        to the cache again.
        """
