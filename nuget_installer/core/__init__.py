# Path: nuget_installer/core/__init__.py
"""
Installer Core Module

Core utilities for the installer: configuration, logging and the
pipeline error taxonomy.
"""

from .config_loader import ConfigLoader
from .logger import get_logger, configure_logging
from .errors import (
    PipelineError,
    ManifestMissing,
    ManifestMalformed,
    DependencyError,
    DownloadFailure,
    ExtractionFailure,
    WriteFailure,
)

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
    'PipelineError',
    'ManifestMissing',
    'ManifestMalformed',
    'DependencyError',
    'DownloadFailure',
    'ExtractionFailure',
    'WriteFailure',
]
