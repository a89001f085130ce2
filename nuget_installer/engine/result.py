# Path: nuget_installer/engine/result.py
"""
Install Result Objects

Type-safe, structured values passed between pipeline stages.

Architecture:
- DependencyRecord: name/version pair declared in the manifest
- DownloadedPayload: raw archive bytes for one dependency
- ExtractedFile / SkippedEntry: per-entry extraction outcome
- ExtractionResult: all outcomes for one archive
- MaterializeResult: files written for one dependency
- DependencyOutcome / InstallResult: complete run summary
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from nuget_installer.core.errors import PipelineError


@dataclass(frozen=True)
class DependencyRecord:
    """
    A pinned dependency to fetch from the registry.

    Attributes:
        name: Package id as declared in the manifest
        version: Exact version string
    """
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name} {self.version}"


@dataclass
class DownloadedPayload:
    """
    Raw package archive for one dependency.

    Attributes:
        dependency: Dependency the bytes belong to
        data: Complete response body
        url: Final URL after redirects
        redirects_followed: Number of 302 hops taken
        duration: Download duration in seconds
    """
    dependency: DependencyRecord
    data: bytes
    url: str = ''
    redirects_followed: int = 0
    duration: float = 0.0

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ExtractedFile:
    """A selected archive entry, decompressed. `name` carries no directory."""
    name: str
    contents: bytes


@dataclass(frozen=True)
class SkippedEntry:
    """A selected archive entry that could not be decompressed."""
    entry_name: str
    reason: str


EntryOutcome = Union[ExtractedFile, SkippedEntry]


@dataclass
class ExtractionResult:
    """
    Result of scanning one archive.

    Attributes:
        dependency: Dependency the archive belongs to
        files: Successfully extracted files
        skipped: Selected entries that failed to decompress
        entries_scanned: Total entries in the archive
        duration: Extraction duration in seconds
    """
    dependency: DependencyRecord
    files: list[ExtractedFile] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    entries_scanned: int = 0
    duration: float = 0.0

    def add(self, outcome: EntryOutcome) -> None:
        """Record a per-entry outcome."""
        if isinstance(outcome, ExtractedFile):
            self.files.append(outcome)
        else:
            self.skipped.append(outcome)


@dataclass
class MaterializeResult:
    """Files written for one dependency."""
    dependency: DependencyRecord
    directory: Path
    written: list[Path] = field(default_factory=list)


@dataclass
class DependencyOutcome:
    """
    Final state of one dependency after extraction and materialization.

    Attributes:
        dependency: The dependency
        success: Whether every stage completed
        extraction: Extraction result, if the archive was opened
        materialized: Write result, if writing completed
        error: Failure that stopped this dependency
    """
    dependency: DependencyRecord
    success: bool = False
    extraction: Optional[ExtractionResult] = None
    materialized: Optional[MaterializeResult] = None
    error: Optional[PipelineError] = None

    def to_dict(self) -> dict[str, any]:
        """Convert to dictionary for logging/storage."""
        return {
            'name': self.dependency.name,
            'version': self.dependency.version,
            'success': self.success,
            'files': [f.name for f in self.extraction.files] if self.extraction else [],
            'skipped': [s.entry_name for s in self.extraction.skipped] if self.extraction else [],
            'directory': str(self.materialized.directory) if self.materialized else None,
            'error_stage': self.error.stage if self.error else None,
            'error_message': str(self.error) if self.error else None,
        }


@dataclass
class InstallResult:
    """
    Complete result for one install run.

    The first recorded failure is the run's terminal error.
    """
    outcomes: list[DependencyOutcome] = field(default_factory=list)
    output_dir: Optional[Path] = None
    total_duration: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return all(outcome.success for outcome in self.outcomes)

    @property
    def failures(self) -> list[DependencyOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def first_failure(self) -> Optional[PipelineError]:
        failures = self.failures
        return failures[0].error if failures else None

    def raise_for_failure(self) -> None:
        """Raise the terminal error, if any dependency failed."""
        error = self.first_failure
        if error is not None:
            raise error

    def to_dict(self) -> dict[str, any]:
        """Convert to dictionary for logging/storage."""
        return {
            'success': self.success,
            'output_dir': str(self.output_dir) if self.output_dir else None,
            'dependencies': [outcome.to_dict() for outcome in self.outcomes],
            'total_duration': self.total_duration,
            'timestamp': self.timestamp.isoformat(),
        }


__all__ = [
    'DependencyRecord',
    'DownloadedPayload',
    'ExtractedFile',
    'SkippedEntry',
    'EntryOutcome',
    'ExtractionResult',
    'MaterializeResult',
    'DependencyOutcome',
    'InstallResult',
]
