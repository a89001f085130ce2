# Path: nuget_installer/tests/conftest.py
"""
Shared fixtures for installer tests.

FakeRegistry serves packages from an in-process aiohttp application;
build_nupkg assembles package archives in memory.
"""

import io
import zipfile
from pathlib import Path
from typing import Optional

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.engine.retry_manager import RetryManager


def build_nupkg(entries: dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Build a package archive holding the given entries."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=compression) as archive:
        for name, contents in entries.items():
            archive.writestr(name, contents)
    return buffer.getvalue()


class FakeRegistry:
    """
    Minimal package registry.

    Args:
        packages: name -> archive bytes served with 200
        statuses: name -> status code returned instead of the package
        redirects: name -> number of 302 hops before the package
    """

    def __init__(
        self,
        packages: Optional[dict[str, bytes]] = None,
        statuses: Optional[dict[str, int]] = None,
        redirects: Optional[dict[str, int]] = None,
    ):
        self.packages = packages or {}
        self.statuses = statuses or {}
        self.redirects = redirects or {}
        self.requests: list[str] = []
        self.server: Optional[TestServer] = None

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/api/v2/package/{name}/{version}', self._package)
        app.router.add_get('/cdn/{name}/{hop}', self._cdn)
        return app

    async def _package(self, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        return self._respond(request.match_info['name'], 0)

    async def _cdn(self, request: web.Request) -> web.Response:
        self.requests.append(request.path)
        return self._respond(request.match_info['name'], int(request.match_info['hop']))

    def _respond(self, name: str, hop: int) -> web.Response:
        if name in self.statuses:
            return web.Response(status=self.statuses[name])
        if hop < self.redirects.get(name, 0):
            return web.Response(status=302, headers={'Location': f'/cdn/{name}/{hop + 1}'})
        if name not in self.packages:
            return web.Response(status=404)
        return web.Response(body=self.packages[name], content_type='application/octet-stream')

    @property
    def registry_url(self) -> str:
        return str(self.server.make_url('/api/v2/package'))

    async def __aenter__(self) -> 'FakeRegistry':
        self.server = TestServer(self.build_app())
        await self.server.start_server()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.server.close()


@pytest.fixture
def no_retry() -> RetryManager:
    """Retry policy that fails on the first transport error."""
    return RetryManager(max_retries=0, base_delay=0, max_delay=0)


@pytest.fixture
def fresh_config():
    """Re-read configuration from the (monkeypatched) environment."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def write_manifest(tmp_path):
    """Write a Cargo.toml with the given nuget dependency lines."""
    def _write(body: str) -> Path:
        path = tmp_path / 'Cargo.toml'
        path.write_text(
            '[package]\nname = "app"\nversion = "0.1.0"\n\n' + body,
            encoding='utf-8',
        )
        return path
    return _write
