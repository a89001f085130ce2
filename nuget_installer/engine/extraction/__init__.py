# Path: nuget_installer/engine/extraction/__init__.py
"""
Extraction Module

In-memory selection and decompression of package archive entries.

Use ArchiveHandler to extract a downloaded payload.
Use EntrySelector to change which entries are selected.
"""

from nuget_installer.engine.extraction.archive_handler import (
    ArchiveHandler,
    EntrySelector,
)

__all__ = [
    'ArchiveHandler',
    'EntrySelector',
]
