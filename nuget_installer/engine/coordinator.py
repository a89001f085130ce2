# Path: nuget_installer/engine/coordinator.py
"""
Install Coordinator

Main workflow orchestrator for an install run.
Coordinates: manifest → fetch (concurrent) → extract → materialize.

Architecture:
- Manifest errors abort before any network activity
- Fetch is all-or-nothing: one DownloadFailure aborts the run and
  nothing is written
- Extraction and write failures are scoped to their dependency; the
  others still install, and the first failure is the terminal error
- IPO logging throughout
"""

import asyncio
import time
from pathlib import Path
from typing import Callable, Optional

from nuget_installer.core.logger import get_logger
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.core.errors import DependencyError
from nuget_installer.engine.manifest_reader import ManifestReader
from nuget_installer.engine.registry import RegistryResolver
from nuget_installer.engine.protocol_handlers import HTTPHandler
from nuget_installer.engine.retry_manager import RetryManager
from nuget_installer.engine.fetcher import ConcurrentFetcher
from nuget_installer.engine.extraction.archive_handler import ArchiveHandler
from nuget_installer.engine.materializer import OutputMaterializer
from nuget_installer.engine.result import (
    DependencyOutcome,
    DownloadedPayload,
    InstallResult,
)
from nuget_installer.constants import (
    DEFAULT_REGISTRY_URL,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class InstallCoordinator:
    """
    Coordinates a complete install run.

    Workflow:
    1. Read manifest and extract pinned dependencies
    2. Fetch all packages concurrently (first failure aborts)
    3. For each payload, in turn:
       a. Extract selected entries in memory
       b. Write them to <output_dir>/<name>/
    4. Report per-dependency outcomes

    Example:
        coordinator = InstallCoordinator()
        result = await coordinator.install()
        result.raise_for_failure()
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        output_dir: Optional[Path] = None,
        registry_url: Optional[str] = None,
        http_handler: Optional[HTTPHandler] = None,
        retry_manager: Optional[RetryManager] = None,
    ):
        """
        Initialize install coordinator.

        Args:
            config: Optional ConfigLoader instance
            output_dir: Root for dependency directories (from config if None)
            registry_url: Registry base path (from config if None)
            http_handler: Optional HTTP handler (created from config if None)
            retry_manager: Optional retry policy (created from config if None)
        """
        self.config = config if config else ConfigLoader()

        registry_url = registry_url if registry_url is not None else \
            self.config.get('registry_url', DEFAULT_REGISTRY_URL)

        self.manifest_reader = ManifestReader(self.config)
        self.http_handler = http_handler if http_handler else HTTPHandler(self.config)
        self.retry_manager = retry_manager if retry_manager else RetryManager(config=self.config)
        self.fetcher = ConcurrentFetcher(
            http_handler=self.http_handler,
            retry_manager=self.retry_manager,
            resolver=RegistryResolver(registry_url),
            config=self.config
        )
        self.archive_handler = ArchiveHandler()
        self.materializer = OutputMaterializer(output_dir, self.config)

    async def install(self, manifest_path: Optional[Path] = None) -> InstallResult:
        """
        Run the install pipeline.

        Args:
            manifest_path: Manifest to read (configured manifest_path if None)

        Returns:
            InstallResult with one outcome per dependency

        Raises:
            ManifestMissing, ManifestMalformed: Before any network activity
            DownloadFailure: First failed fetch; nothing is written
        """
        start_time = time.time()
        result = InstallResult(output_dir=self.materializer.output_dir)

        dependencies = self.manifest_reader.load(manifest_path)
        logger.info(f"{LOG_INPUT} Installing {len(dependencies)} NuGet dependencies")

        try:
            payloads = await self.fetcher.fetch_all(dependencies)
        finally:
            await self.close()

        for payload in payloads:
            result.outcomes.append(self.process_payload(payload))

        result.total_duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} Install complete: "
            f"{len(result.outcomes) - len(result.failures)}/{len(result.outcomes)} succeeded "
            f"in {result.total_duration:.1f}s"
        )

        return result

    def process_payload(self, payload: DownloadedPayload) -> DependencyOutcome:
        """
        Extract and materialize one downloaded package.

        Failures are recorded on the outcome rather than raised, so the
        remaining dependencies are still processed.
        """
        outcome = DependencyOutcome(dependency=payload.dependency)

        try:
            outcome.extraction = self.archive_handler.extract(payload)
            logger.info(
                f"{LOG_PROCESS} {payload.dependency}: "
                + ', '.join(f.name for f in outcome.extraction.files)
            )
            outcome.materialized = self.materializer.materialize(
                payload.dependency,
                outcome.extraction.files
            )
            outcome.success = True

        except DependencyError as e:
            outcome.error = e
            logger.error(f"{LOG_OUTPUT} {payload.dependency} FAILED at {e.stage}: {e}")

        return outcome

    async def close(self):
        """Close coordinator and release network resources."""
        logger.debug("Closing install coordinator")
        await self.http_handler.close()


def run_install(
    manifest_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    registry_url: Optional[str] = None,
    config: Optional[ConfigLoader] = None,
    on_result: Optional[Callable[[InstallResult], None]] = None,
) -> InstallResult:
    """
    Blocking entry point: run the whole pipeline and raise on failure.

    Args:
        manifest_path: Manifest to read (configured manifest_path if None)
        output_dir: Root for dependency directories (from config if None)
        registry_url: Registry base path (from config if None)
        config: Optional ConfigLoader instance
        on_result: Called with the result before any failure is raised

    Returns:
        InstallResult when every dependency installed

    Raises:
        PipelineError: The run's terminal error
    """
    coordinator = InstallCoordinator(
        config=config,
        output_dir=output_dir,
        registry_url=registry_url
    )
    result = asyncio.run(coordinator.install(manifest_path))
    if on_result is not None:
        on_result(result)
    result.raise_for_failure()
    return result


__all__ = ['InstallCoordinator', 'run_install']
