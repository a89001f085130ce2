# Path: nuget_installer/tests/test_fetcher.py
"""
Concurrent Fetcher Tests

All-or-nothing semantics, cancellation of in-flight fetches and retry
of transport failures.
"""

import asyncio

import aiohttp
import pytest

from nuget_installer.core.errors import DownloadFailure
from nuget_installer.engine.fetcher import ConcurrentFetcher
from nuget_installer.engine.registry import RegistryResolver
from nuget_installer.engine.retry_manager import RetryManager
from nuget_installer.engine.result import DependencyRecord, DownloadedPayload


class ScriptedHandler:
    """
    Stand-in for HTTPHandler.

    behaviours maps a package name to a list of steps consumed one per
    call: bytes to succeed, an exception to raise, or a float to sleep.
    """

    def __init__(self, behaviours):
        self.behaviours = {name: list(steps) for name, steps in behaviours.items()}
        self.calls = []
        self.cancelled = []

    async def fetch(self, url, dependency, max_redirects=None):
        self.calls.append(dependency.name)
        step = self.behaviours[dependency.name].pop(0)

        if isinstance(step, BaseException):
            raise step
        if isinstance(step, float):
            try:
                await asyncio.sleep(step)
            except asyncio.CancelledError:
                self.cancelled.append(dependency.name)
                raise
            step = b'late'

        return DownloadedPayload(dependency=dependency, data=step, url=url)

    async def close(self):
        pass


def _fetcher(handler, retries=0):
    return ConcurrentFetcher(
        http_handler=handler,
        retry_manager=RetryManager(max_retries=retries, base_delay=0, max_delay=0),
        resolver=RegistryResolver('http://registry.test/api/v2/package'),
    )


def _deps(*names):
    return [DependencyRecord(name, '1.0.0') for name in names]


def test_all_payloads_returned_in_order():
    handler = ScriptedHandler({'A': [b'a'], 'B': [b'b'], 'C': [b'c']})

    payloads = asyncio.run(_fetcher(handler).fetch_all(_deps('A', 'B', 'C')))

    assert [p.data for p in payloads] == [b'a', b'b', b'c']
    assert payloads[1].url == 'http://registry.test/api/v2/package/B/1.0.0'


def test_no_dependencies_makes_no_requests():
    handler = ScriptedHandler({})

    assert asyncio.run(_fetcher(handler).fetch_all([])) == []
    assert handler.calls == []


def test_first_failure_cancels_in_flight_fetches():
    failure = DownloadFailure(DependencyRecord('B', '1.0.0'), 'unexpected response status 500',
                              status_code=500)
    handler = ScriptedHandler({'A': [30.0], 'B': [failure], 'C': [30.0]})

    with pytest.raises(DownloadFailure) as excinfo:
        asyncio.run(_fetcher(handler).fetch_all(_deps('A', 'B', 'C')))

    assert excinfo.value.dependency.name == 'B'
    assert 'A' in handler.cancelled
    assert set(handler.cancelled) <= {'A', 'C'}


def test_transport_error_is_wrapped():
    error = aiohttp.ClientConnectionError('connection refused')
    handler = ScriptedHandler({'A': [error]})

    with pytest.raises(DownloadFailure, match='transport error') as excinfo:
        asyncio.run(_fetcher(handler).fetch_one(_deps('A')[0]))

    assert excinfo.value.cause is error
    assert excinfo.value.url == 'http://registry.test/api/v2/package/A/1.0.0'


def test_timeout_is_wrapped():
    handler = ScriptedHandler({'A': [asyncio.TimeoutError()]})

    with pytest.raises(DownloadFailure, match='timed out'):
        asyncio.run(_fetcher(handler).fetch_one(_deps('A')[0]))


def test_transport_errors_are_retried():
    handler = ScriptedHandler({
        'A': [aiohttp.ClientConnectionError('reset'), aiohttp.ClientPayloadError('short'), b'ok'],
    })

    payload = asyncio.run(_fetcher(handler, retries=2).fetch_one(_deps('A')[0]))

    assert payload.data == b'ok'
    assert handler.calls == ['A', 'A', 'A']


def test_status_failures_are_not_retried():
    failure = DownloadFailure(DependencyRecord('A', '1.0.0'), 'unexpected response status 404',
                              status_code=404)
    handler = ScriptedHandler({'A': [failure, b'never']})

    with pytest.raises(DownloadFailure):
        asyncio.run(_fetcher(handler, retries=2).fetch_one(_deps('A')[0]))

    assert handler.calls == ['A']


def test_unreachable_registry(no_retry):
    from nuget_installer.engine.protocol_handlers import HTTPHandler

    async def scenario():
        async with HTTPHandler(connect_timeout=5) as handler:
            fetcher = ConcurrentFetcher(
                http_handler=handler,
                retry_manager=no_retry,
                resolver=RegistryResolver('http://127.0.0.1:1/api/v2/package'),
            )
            return await fetcher.fetch_all(_deps('A'))

    with pytest.raises(DownloadFailure) as excinfo:
        asyncio.run(scenario())

    assert isinstance(excinfo.value.cause, aiohttp.ClientError)
