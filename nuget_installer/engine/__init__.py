# Path: nuget_installer/engine/__init__.py
"""
Installer Engine Module

Install pipeline components.
Exports public APIs for install workflow execution.

Architecture:
- InstallCoordinator: Main orchestrator
- ManifestReader: Pinned dependencies from the manifest
- RegistryResolver: Package download URLs
- ConcurrentFetcher / HTTPHandler / RetryManager: Retrieval
- ArchiveHandler: In-memory entry selection
- OutputMaterializer: Files on disk
"""

from nuget_installer.engine.coordinator import InstallCoordinator, run_install
from nuget_installer.engine.manifest_reader import ManifestReader, extract_dependencies
from nuget_installer.engine.registry import RegistryResolver, package_url
from nuget_installer.engine.protocol_handlers import HTTPHandler
from nuget_installer.engine.retry_manager import RetryManager
from nuget_installer.engine.fetcher import ConcurrentFetcher
from nuget_installer.engine.extraction import ArchiveHandler, EntrySelector
from nuget_installer.engine.materializer import OutputMaterializer
from nuget_installer.engine.result import (
    DependencyRecord,
    DownloadedPayload,
    ExtractedFile,
    SkippedEntry,
    ExtractionResult,
    MaterializeResult,
    DependencyOutcome,
    InstallResult,
)

__all__ = [
    # Main coordinator
    'InstallCoordinator',
    'run_install',

    # Manifest
    'ManifestReader',
    'extract_dependencies',

    # Retrieval
    'RegistryResolver',
    'package_url',
    'HTTPHandler',
    'RetryManager',
    'ConcurrentFetcher',

    # Extraction / output
    'ArchiveHandler',
    'EntrySelector',
    'OutputMaterializer',

    # Result objects
    'DependencyRecord',
    'DownloadedPayload',
    'ExtractedFile',
    'SkippedEntry',
    'ExtractionResult',
    'MaterializeResult',
    'DependencyOutcome',
    'InstallResult',
]
