# Path: nuget_installer/engine/protocol_handlers.py
"""
Protocol Handlers

HTTP/HTTPS package retrieval with explicit redirect handling.

Architecture:
- Async HTTP client (aiohttp) with a shared, bounded connection pool
- Automatic redirects disabled; 302 hops followed in a loop with a budget
- Full response body buffered in memory (archives are inspected in memory)
- Status failures raised as DownloadFailure; transport errors propagate
  unchanged so RetryManager can classify them
"""

import time
from typing import Optional
from urllib.parse import urljoin

import aiohttp

from nuget_installer.core.logger import get_logger
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.core.errors import DownloadFailure
from nuget_installer.engine.result import DependencyRecord, DownloadedPayload
from nuget_installer.constants import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_CONCURRENT,
    HTTP_OK,
    HTTP_FOUND,
    HEADER_LOCATION,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')

HEADER_USER_AGENT = 'User-Agent'
HEADER_ACCEPT = 'Accept'
DEFAULT_ACCEPT_HEADER = '*/*'
FORCE_CLOSE_CONNECTIONS = True


class HTTPHandler:
    """
    HTTP/HTTPS package download handler.

    Features:
    - Async HTTP with aiohttp
    - Redirect budget (302 only, Location header)
    - Connection pool limit shared by all concurrent fetches
    - Configurable timeouts and User-Agent

    Example:
        async with HTTPHandler() as handler:
            payload = await handler.fetch(url, dependency)
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        max_redirects: Optional[int] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        max_concurrent: Optional[int] = None,
    ):
        """
        Initialize HTTP handler.

        Args:
            config: Optional ConfigLoader instance
            max_redirects: Redirect budget per fetch (from config if None)
            timeout: Total request timeout in seconds (from config if None)
            connect_timeout: Connect timeout in seconds (from config if None)
            max_concurrent: Connection pool size (from config if None)
        """
        self.config = config if config else ConfigLoader()

        self.max_redirects = max_redirects if max_redirects is not None else \
            self.config.get('max_redirects', DEFAULT_MAX_REDIRECTS)
        self.timeout = timeout if timeout is not None else \
            self.config.get('request_timeout', DEFAULT_TIMEOUT)
        self.connect_timeout = connect_timeout if connect_timeout is not None else \
            self.config.get('connect_timeout', DEFAULT_CONNECT_TIMEOUT)
        self.max_concurrent = max_concurrent if max_concurrent is not None else \
            self.config.get('max_concurrent', DEFAULT_MAX_CONCURRENT)
        self.user_agent = self.config.get('user_agent')

        self._session: Optional[aiohttp.ClientSession] = None

    async def fetch(
        self,
        url: str,
        dependency: DependencyRecord,
        max_redirects: Optional[int] = None
    ) -> DownloadedPayload:
        """
        Download a package archive into memory.

        Args:
            url: Registry URL for the package
            dependency: Dependency being fetched (error context)
            max_redirects: Override for the redirect budget

        Returns:
            DownloadedPayload with the complete body

        Raises:
            DownloadFailure: Unexpected status, missing Location header,
                or redirect budget exhausted
            aiohttp.ClientError / asyncio.TimeoutError: Transport failure
        """
        limit = self.max_redirects if max_redirects is None else max_redirects
        budget = limit
        redirects_followed = 0
        current_url = url
        start_time = time.time()

        logger.info(f"{LOG_INPUT} Downloading {dependency}: {url}")

        session = await self._get_session()

        while True:
            logger.debug(f"{LOG_PROCESS} GET {current_url}")

            async with session.get(
                current_url,
                headers=self._build_headers(),
                allow_redirects=False,
            ) as response:

                if response.status == HTTP_OK:
                    data = await response.read()
                    duration = time.time() - start_time
                    logger.info(
                        f"{LOG_OUTPUT} Downloaded {dependency}: {len(data)} bytes "
                        f"in {duration:.2f}s ({redirects_followed} redirects)"
                    )
                    return DownloadedPayload(
                        dependency=dependency,
                        data=data,
                        url=current_url,
                        redirects_followed=redirects_followed,
                        duration=duration,
                    )

                if response.status != HTTP_FOUND:
                    logger.error(f"{LOG_OUTPUT} HTTP {response.status} for {dependency}")
                    raise DownloadFailure(
                        dependency,
                        f"unexpected response status {response.status}",
                        status_code=response.status,
                        url=current_url,
                    )

                if budget <= 0:
                    logger.error(f"{LOG_OUTPUT} Too many redirects for {dependency}")
                    raise DownloadFailure(
                        dependency,
                        f"too many redirects (limit {limit})",
                        status_code=response.status,
                        url=current_url,
                    )

                location = response.headers.get(HEADER_LOCATION)
                if not location:
                    raise DownloadFailure(
                        dependency,
                        "redirect response without a Location header",
                        status_code=response.status,
                        url=current_url,
                    )

            budget -= 1
            redirects_followed += 1
            current_url = urljoin(current_url, location)
            logger.info(f"{LOG_PROCESS} Redirected to {current_url} ({budget} redirects left)")

    def _build_headers(self) -> dict[str, str]:
        """Build HTTP request headers."""
        headers = {HEADER_ACCEPT: DEFAULT_ACCEPT_HEADER}
        if self.user_agent:
            headers[HEADER_USER_AGENT] = self.user_agent
        return headers

    async def _get_session(self) -> aiohttp.ClientSession:
        """
        Get or create aiohttp session.

        Returns:
            ClientSession instance
        """
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_concurrent,
                force_close=FORCE_CLOSE_CONNECTIONS
            )

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(
                    total=self.timeout,
                    connect=self.connect_timeout
                )
            )

        return self._session

    async def close(self):
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


__all__ = ['HTTPHandler']
