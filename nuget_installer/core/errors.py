# Path: nuget_installer/core/errors.py
"""
Pipeline Errors

Terminal failure values for an install run. Every error carries enough
context (dependency, cause) to diagnose without verbose logging.

Taxonomy:
- ManifestMissing:   manifest cannot be located or read
- ManifestMalformed: metadata/dependency table or a version has the wrong shape
- DownloadFailure:   network error, unexpected status, redirect budget exhausted
- ExtractionFailure: archive container cannot be opened
- WriteFailure:      filesystem write error while materializing a file
"""

from pathlib import Path
from typing import Optional


class PipelineError(Exception):
    """Base class for every install pipeline failure."""

    stage: str = 'pipeline'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ManifestMissing(PipelineError):
    """Manifest file could not be located or read."""

    stage = 'manifest'

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"No manifest could be found at {self.path}")


class ManifestMalformed(PipelineError):
    """Manifest metadata does not have the expected shape."""

    stage = 'manifest'

    def __init__(self, reason: str, path: Optional[Path] = None):
        self.reason = reason
        self.path = Path(path) if path else None
        location = f" ({self.path})" if self.path else ''
        super().__init__(f"The manifest was malformed{location}: {reason}")


class DependencyError(PipelineError):
    """Failure scoped to a single dependency."""

    def __init__(self, dependency, message: str, cause: Optional[BaseException] = None):
        self.dependency = dependency
        self.cause = cause
        super().__init__(message)


class DownloadFailure(DependencyError):
    """Dependency could not be downloaded from the registry."""

    stage = 'download'

    def __init__(
        self,
        dependency,
        reason: str,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        self.reason = reason
        self.status_code = status_code
        self.url = url
        super().__init__(
            dependency,
            f"There was an error downloading the NuGet package {dependency}: {reason}",
            cause,
        )


class ExtractionFailure(DependencyError):
    """Downloaded archive could not be opened."""

    stage = 'extraction'

    def __init__(self, dependency, cause: BaseException):
        super().__init__(
            dependency,
            f"The archive for NuGet package {dependency} could not be opened: {cause}",
            cause,
        )


class WriteFailure(DependencyError):
    """Extracted file could not be written to its destination."""

    stage = 'write'

    def __init__(self, dependency, file_name: str, path: Path, cause: BaseException):
        self.file_name = file_name
        self.path = Path(path)
        super().__init__(
            dependency,
            f"Could not write {file_name} for NuGet package {dependency} to {self.path}: {cause}",
            cause,
        )


__all__ = [
    'PipelineError',
    'ManifestMissing',
    'ManifestMalformed',
    'DependencyError',
    'DownloadFailure',
    'ExtractionFailure',
    'WriteFailure',
]
