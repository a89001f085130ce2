# Path: nuget_installer/tests/test_coordinator.py
"""
Install Coordinator Tests

End-to-end runs against an in-process registry: manifest -> fetch ->
extract -> materialize.
"""

import asyncio

import pytest

from nuget_installer.core.errors import (
    DownloadFailure,
    ExtractionFailure,
    ManifestMalformed,
    ManifestMissing,
    WriteFailure,
)
from nuget_installer.engine.coordinator import InstallCoordinator, run_install
from nuget_installer.engine.fetcher import ConcurrentFetcher
from nuget_installer.engine.result import DownloadedPayload
from nuget_installer.tests.conftest import FakeRegistry, build_nupkg

WIDGETS = build_nupkg({
    'lib/uap10.0/Acme.Widgets.winmd': b'widgets',
    'lib/uap10.0/Acme.Widgets.Extra.winmd': b'extra',
    'lib/uap10.0/Acme.Widgets.dll': b'dll',
})
GADGETS = build_nupkg({'lib/uap10.0/Acme.Gadgets.winmd': b'gadgets'})

TWO_DEPENDENCIES = (
    '[package.metadata.nuget_dependencies]\n'
    '"Acme.Widgets" = "1.0.0"\n'
    '"Acme.Gadgets" = "2.0.0"\n'
)


def _install(registry, manifest, output_dir, retry_manager):
    async def scenario():
        async with registry:
            coordinator = InstallCoordinator(
                output_dir=output_dir,
                registry_url=registry.registry_url,
                retry_manager=retry_manager,
            )
            return await coordinator.install(manifest)

    return asyncio.run(scenario())


def test_installs_every_dependency(tmp_path, write_manifest, no_retry):
    manifest = write_manifest(TWO_DEPENDENCIES)
    output_dir = tmp_path / 'target' / 'nuget'
    registry = FakeRegistry(
        packages={'Acme.Widgets': WIDGETS, 'Acme.Gadgets': GADGETS},
        redirects={'Acme.Gadgets': 2},
    )

    result = _install(registry, manifest, output_dir, no_retry)

    assert result.success
    assert result.first_failure is None
    assert (output_dir / 'Acme.Widgets' / 'Acme.Widgets.winmd').read_bytes() == b'widgets'
    assert (output_dir / 'Acme.Widgets' / 'Acme.Widgets.Extra.winmd').read_bytes() == b'extra'
    assert not (output_dir / 'Acme.Widgets' / 'Acme.Widgets.dll').exists()
    assert (output_dir / 'Acme.Gadgets' / 'Acme.Gadgets.winmd').read_bytes() == b'gadgets'

    summary = result.to_dict()
    assert [d['name'] for d in summary['dependencies']] == ['Acme.Widgets', 'Acme.Gadgets']
    assert summary['dependencies'][0]['files'] == ['Acme.Widgets.winmd', 'Acme.Widgets.Extra.winmd']


def test_rerun_is_idempotent(tmp_path, write_manifest, no_retry):
    manifest = write_manifest(TWO_DEPENDENCIES)
    output_dir = tmp_path / 'out'
    packages = {'Acme.Widgets': WIDGETS, 'Acme.Gadgets': GADGETS}

    _install(FakeRegistry(packages=packages), manifest, output_dir, no_retry)
    result = _install(FakeRegistry(packages=packages), manifest, output_dir, no_retry)

    assert result.success
    assert sorted(p.name for p in (output_dir / 'Acme.Widgets').iterdir()) == \
        ['Acme.Widgets.Extra.winmd', 'Acme.Widgets.winmd']


def test_download_failure_writes_nothing(tmp_path, write_manifest, no_retry):
    manifest = write_manifest(
        '[package.metadata.nuget_dependencies]\n'
        '"Acme.Widgets" = "1.0.0"\n'
        '"Acme.Missing" = "9.9.9"\n'
        '"Acme.Gadgets" = "2.0.0"\n'
    )
    output_dir = tmp_path / 'out'
    registry = FakeRegistry(
        packages={'Acme.Widgets': WIDGETS, 'Acme.Gadgets': GADGETS},
        statuses={'Acme.Missing': 500},
    )

    with pytest.raises(DownloadFailure) as excinfo:
        _install(registry, manifest, output_dir, no_retry)

    assert excinfo.value.dependency.name == 'Acme.Missing'
    assert excinfo.value.status_code == 500
    assert 'Acme.Missing 9.9.9' in str(excinfo.value)
    assert not output_dir.exists()


def test_bad_archive_fails_only_its_dependency(tmp_path, write_manifest, no_retry):
    manifest = write_manifest(TWO_DEPENDENCIES)
    output_dir = tmp_path / 'out'
    registry = FakeRegistry(packages={'Acme.Widgets': b'not a zip', 'Acme.Gadgets': GADGETS})

    result = _install(registry, manifest, output_dir, no_retry)

    assert not result.success
    assert [o.dependency.name for o in result.failures] == ['Acme.Widgets']
    assert isinstance(result.first_failure, ExtractionFailure)
    assert (output_dir / 'Acme.Gadgets' / 'Acme.Gadgets.winmd').exists()
    assert not (output_dir / 'Acme.Widgets').exists()

    with pytest.raises(ExtractionFailure):
        result.raise_for_failure()


def test_empty_dependency_table(tmp_path, write_manifest, no_retry):
    manifest = write_manifest('[package.metadata.nuget_dependencies]\n')
    registry = FakeRegistry()

    result = _install(registry, manifest, tmp_path / 'out', no_retry)

    assert result.success
    assert result.outcomes == []
    assert registry.requests == []


def test_manifest_errors_precede_network(tmp_path, write_manifest, no_retry):
    registry = FakeRegistry(packages={'Acme.Widgets': WIDGETS})

    with pytest.raises(ManifestMissing):
        _install(registry, tmp_path / 'absent.toml', tmp_path / 'out', no_retry)

    manifest = write_manifest('[package.metadata.nuget_dependencies]\n"Acme.Widgets" = 1\n')
    with pytest.raises(ManifestMalformed):
        _install(registry, manifest, tmp_path / 'out', no_retry)

    assert registry.requests == []


def _serve_payloads(monkeypatch, packages):
    """Replace network retrieval with fixed archive bytes."""
    async def fetch_all(self, dependencies):
        return [DownloadedPayload(dependency=d, data=packages[d.name]) for d in dependencies]

    monkeypatch.setattr(ConcurrentFetcher, 'fetch_all', fetch_all)


def test_run_install_success(tmp_path, write_manifest, monkeypatch):
    _serve_payloads(monkeypatch, {'Acme.Widgets': WIDGETS, 'Acme.Gadgets': GADGETS})
    reported = []

    result = run_install(
        manifest_path=write_manifest(TWO_DEPENDENCIES),
        output_dir=tmp_path / 'out',
        on_result=reported.append,
    )

    assert result.success
    assert reported == [result]
    assert (tmp_path / 'out' / 'Acme.Gadgets' / 'Acme.Gadgets.winmd').exists()


def test_run_install_raises_first_failure(tmp_path, write_manifest, monkeypatch):
    _serve_payloads(monkeypatch, {'Acme.Widgets': WIDGETS, 'Acme.Gadgets': b'not a zip'})
    output_dir = tmp_path / 'out'
    output_dir.mkdir()
    (output_dir / 'Acme.Widgets').write_bytes(b'in the way')
    reported = []

    with pytest.raises(WriteFailure) as excinfo:
        run_install(
            manifest_path=write_manifest(TWO_DEPENDENCIES),
            output_dir=output_dir,
            on_result=reported.append,
        )

    assert excinfo.value.dependency.name == 'Acme.Widgets'
    assert len(reported) == 1
    assert [o.dependency.name for o in reported[0].failures] == ['Acme.Widgets', 'Acme.Gadgets']
    assert isinstance(reported[0].failures[1].error, ExtractionFailure)


def test_run_install_extraction_failure(tmp_path, write_manifest, monkeypatch):
    _serve_payloads(monkeypatch, {'Acme.Widgets': b'not a zip', 'Acme.Gadgets': GADGETS})

    with pytest.raises(ExtractionFailure) as excinfo:
        run_install(manifest_path=write_manifest(TWO_DEPENDENCIES), output_dir=tmp_path / 'out')

    assert excinfo.value.dependency.name == 'Acme.Widgets'
    assert (tmp_path / 'out' / 'Acme.Gadgets' / 'Acme.Gadgets.winmd').exists()
