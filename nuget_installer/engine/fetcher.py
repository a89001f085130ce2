# Path: nuget_installer/engine/fetcher.py
"""
Concurrent Fetcher

Downloads every dependency concurrently: one task per dependency,
joined with asyncio.gather. The first failure decides the outcome and
cancels the fetches still in flight.
"""

import asyncio
from typing import Optional, Sequence

import aiohttp

from nuget_installer.core.logger import get_logger
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.core.errors import DownloadFailure
from nuget_installer.engine.protocol_handlers import HTTPHandler
from nuget_installer.engine.registry import RegistryResolver
from nuget_installer.engine.retry_manager import RetryManager
from nuget_installer.engine.result import DependencyRecord, DownloadedPayload
from nuget_installer.constants import (
    DEFAULT_REGISTRY_URL,
    LOG_INPUT,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class ConcurrentFetcher:
    """
    All-or-nothing concurrent package retrieval.

    Example:
        fetcher = ConcurrentFetcher(http_handler, retry_manager, resolver)
        payloads = await fetcher.fetch_all(dependencies)
    """

    def __init__(
        self,
        http_handler: HTTPHandler,
        retry_manager: RetryManager,
        resolver: Optional[RegistryResolver] = None,
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize fetcher.

        Args:
            http_handler: Shared HTTP handler (owns the connection pool)
            retry_manager: Retry policy for transport errors
            resolver: URL resolver (configured registry_url if None)
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self.http_handler = http_handler
        self.retry_manager = retry_manager
        self.resolver = resolver if resolver else RegistryResolver(
            self.config.get('registry_url', DEFAULT_REGISTRY_URL)
        )

    async def fetch_one(self, dependency: DependencyRecord) -> DownloadedPayload:
        """
        Fetch a single dependency, retrying transport failures.

        Raises:
            DownloadFailure: For any failure, with the transport error as cause
        """
        url = self.resolver.url(dependency)

        try:
            return await self.retry_manager.retry_async(
                self.http_handler.fetch, url, dependency
            )
        except DownloadFailure:
            raise
        except asyncio.TimeoutError as e:
            raise DownloadFailure(dependency, "request timed out", cause=e, url=url) from e
        except aiohttp.ClientError as e:
            raise DownloadFailure(dependency, f"transport error: {e}", cause=e, url=url) from e

    async def fetch_all(
        self,
        dependencies: Sequence[DependencyRecord]
    ) -> list[DownloadedPayload]:
        """
        Fetch every dependency concurrently.

        Args:
            dependencies: Records to fetch

        Returns:
            One payload per dependency

        Raises:
            DownloadFailure: The first failure; remaining fetches are cancelled
        """
        if not dependencies:
            return []

        logger.info(f"{LOG_INPUT} Fetching {len(dependencies)} packages concurrently")

        tasks = [
            asyncio.create_task(self.fetch_one(dependency), name=f"fetch:{dependency.name}")
            for dependency in dependencies
        ]

        try:
            payloads = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # Let cancelled tasks unwind before the session is closed
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        total = sum(payload.size for payload in payloads)
        logger.info(f"{LOG_OUTPUT} Fetched {len(payloads)} packages ({total} bytes)")

        return list(payloads)


__all__ = ['ConcurrentFetcher']
