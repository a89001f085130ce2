# Path: nuget_installer/engine/extraction/archive_handler.py
"""
Archive Handler

In-memory inspection of NuGet package archives (.nupkg, ZIP format).
Selects Windows metadata entries and decompresses them.

Architecture:
- EntrySelector decides which entries are wanted (extension + directory)
- ArchiveHandler opens the container and yields one outcome per
  selected entry: ExtractedFile or SkippedEntry
- Container-level failure raises ExtractionFailure; a corrupt entry
  only produces a SkippedEntry and a warning

CRITICAL PRINCIPLE: Nothing touches disk here. Writing belongs to the
OutputMaterializer.
"""

import io
import time
import zipfile
import zlib
from pathlib import PurePosixPath
from typing import Iterator, Optional

from nuget_installer.core.logger import get_logger
from nuget_installer.core.errors import ExtractionFailure
from nuget_installer.engine.result import (
    DownloadedPayload,
    EntryOutcome,
    ExtractedFile,
    ExtractionResult,
    SkippedEntry,
)
from nuget_installer.constants import (
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from nuget_installer.engine.extraction.constants import (
    ZIP_READ_MODE,
    ARCHIVE_PATH_SEPARATOR,
    WINDOWS_PATH_SEPARATOR,
    TARGET_EXTENSION,
    TARGET_DIRECTORY,
)

logger = get_logger(__name__, 'extraction')

# Raised by ZipFile.read for a single damaged or unreadable member
ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    EOFError,
    OSError,
)


class EntrySelector:
    """
    Path-based selection rule for archive entries.

    An entry is selected iff its extension equals `extension` and its
    containing directory equals `directory` (separators normalized).

    Example:
        selector = EntrySelector()
        selector.matches('lib/uap10.0/Microsoft.Graphics.Canvas.winmd')  # True
        selector.matches('lib/win/Microsoft.Graphics.Canvas.winmd')      # False
    """

    def __init__(self, extension: str = TARGET_EXTENSION, directory: str = TARGET_DIRECTORY):
        self.extension = extension
        self.directory = PurePosixPath(self._normalize(directory))

    @staticmethod
    def _normalize(name: str) -> str:
        # Archive names are relative; a leading separator is dropped
        return name.replace(WINDOWS_PATH_SEPARATOR, ARCHIVE_PATH_SEPARATOR).lstrip(ARCHIVE_PATH_SEPARATOR)

    def entry_path(self, name: str) -> PurePosixPath:
        """Archive entry name as a normalized posix path."""
        return PurePosixPath(self._normalize(name))

    def matches(self, name: str) -> bool:
        if name.endswith(ARCHIVE_PATH_SEPARATOR) or name.endswith(WINDOWS_PATH_SEPARATOR):
            return False
        path = self.entry_path(name)
        return path.suffix == self.extension and path.parent == self.directory


class ArchiveHandler:
    """
    Opens package archives and extracts the selected entries.

    Example:
        handler = ArchiveHandler()
        result = handler.extract(payload)
        for file in result.files:
            print(file.name, len(file.contents))
    """

    def __init__(self, selector: Optional[EntrySelector] = None):
        """
        Initialize archive handler.

        Args:
            selector: Entry selection rule (winmd under lib/uap10.0 if None)
        """
        self.selector = selector if selector else EntrySelector()

    def extract(self, payload: DownloadedPayload) -> ExtractionResult:
        """
        Extract every selected entry from a downloaded archive.

        Args:
            payload: Downloaded package bytes

        Returns:
            ExtractionResult with extracted files and skipped entries

        Raises:
            ExtractionFailure: If the archive container cannot be opened
        """
        dependency = payload.dependency
        logger.info(f"{LOG_INPUT} Inspecting archive for {dependency} ({payload.size} bytes)")

        start_time = time.time()
        result = ExtractionResult(dependency=dependency)

        try:
            archive = zipfile.ZipFile(io.BytesIO(payload.data), ZIP_READ_MODE)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError) as e:
            logger.error(f"{LOG_OUTPUT} Cannot open archive for {dependency}: {e}")
            raise ExtractionFailure(dependency, e) from e

        with archive:
            infos = archive.infolist()
            result.entries_scanned = len(infos)

            for outcome in self._iter_selected(archive, infos):
                result.add(outcome)

        result.duration = time.time() - start_time

        logger.info(
            f"{LOG_OUTPUT} {dependency}: {len(result.files)} files selected, "
            f"{len(result.skipped)} skipped, {result.entries_scanned} entries scanned"
        )

        return result

    def _iter_selected(
        self,
        archive: zipfile.ZipFile,
        infos: list[zipfile.ZipInfo]
    ) -> Iterator[EntryOutcome]:
        """Yield an outcome for each entry the selector accepts."""
        for info in infos:
            if info.is_dir() or not self.selector.matches(info.filename):
                continue

            logger.debug(f"{LOG_PROCESS} Selected entry: {info.filename}")
            yield self.read_entry(archive, info)

    def read_entry(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> EntryOutcome:
        """
        Decompress one entry completely.

        The declared uncompressed size is not trusted as a length bound;
        the member stream is read until exhausted.

        Returns:
            ExtractedFile, or SkippedEntry when decompression fails
        """
        name = self.selector.entry_path(info.filename).name

        try:
            with archive.open(info, ZIP_READ_MODE) as member:
                contents = member.read()
        except ENTRY_READ_ERRORS as e:
            logger.warning(
                f"Could not read {info.filename} (compression={info.compress_type}): {e}"
            )
            return SkippedEntry(entry_name=info.filename, reason=str(e))

        return ExtractedFile(name=name, contents=contents)


__all__ = ['ArchiveHandler', 'EntrySelector', 'ENTRY_READ_ERRORS']
