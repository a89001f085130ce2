# Path: nuget_installer/engine/retry_manager.py
"""
Retry Manager

Exponential backoff retry for transient transport failures.

Architecture:
- tenacity AsyncRetrying drives the attempts
- Only transport errors (connection, timeout, truncated body) are retried
- Status-code and redirect failures are final and propagate immediately
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import aiohttp
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nuget_installer.core.logger import get_logger
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_MAX_RETRY_DELAY,
    LOG_PROCESS,
)

logger = get_logger(__name__, 'engine')

RETRYABLE_EXCEPTIONS = (
    aiohttp.ClientConnectionError,
    aiohttp.ClientPayloadError,
    asyncio.TimeoutError,
)


class RetryManager:
    """
    Manages retry logic with exponential backoff.

    delay = base_delay * 2 ** (attempt - 1), capped at max_delay

    Example:
        manager = RetryManager(max_retries=2, base_delay=1.0)
        payload = await manager.retry_async(handler.fetch, url)
    """

    def __init__(
        self,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize retry manager.

        Args:
            max_retries: Retries after the first attempt (from config if None)
            base_delay: Initial retry delay in seconds (from config if None)
            max_delay: Maximum retry delay cap (from config if None)
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()

        self.max_retries = max_retries if max_retries is not None else \
            self.config.get('retry_attempts', DEFAULT_RETRY_ATTEMPTS)

        self.base_delay = base_delay if base_delay is not None else \
            self.config.get('retry_delay', DEFAULT_RETRY_DELAY)

        self.max_delay = max_delay if max_delay is not None else \
            self.config.get('max_retry_delay', DEFAULT_MAX_RETRY_DELAY)

    def is_retryable_error(self, error: BaseException) -> bool:
        """Transport-level failures are retryable; everything else is final."""
        return isinstance(error, RETRYABLE_EXCEPTIONS)

    async def retry_async(
        self,
        func: Callable[..., Awaitable[Any]],
        *args,
        **kwargs
    ) -> Any:
        """
        Execute async function with retry logic.

        Args:
            func: Async function to execute
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Result of the first successful attempt

        Raises:
            The last exception once retries are exhausted, or any
            non-retryable exception immediately
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(self.max_retries, 0) + 1),
            wait=wait_exponential(multiplier=self.base_delay, max=self.max_delay),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            before_sleep=self._log_retry,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                result = await func(*args, **kwargs)
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        f"{LOG_PROCESS} Retry succeeded on attempt "
                        f"{attempt.retry_state.attempt_number}"
                    )
                return result

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            f"{LOG_PROCESS} Attempt {retry_state.attempt_number} failed: {error!r}. "
            f"Retrying in {delay:.1f}s..."
        )


__all__ = ['RetryManager', 'RETRYABLE_EXCEPTIONS']
