# Path: nuget_installer/engine/extraction/constants.py
"""
Extraction Module Constants

Selection rules for package archive entries.
NO HARDCODED VALUES in extraction handlers - all configuration here.
"""

# ============================================================================
# ARCHIVE READING
# ============================================================================

ZIP_READ_MODE = 'r'

# Separator used inside archives after normalization
ARCHIVE_PATH_SEPARATOR = '/'
WINDOWS_PATH_SEPARATOR = '\\'

# ============================================================================
# ENTRY SELECTION
# ============================================================================

# Windows metadata files for the UWP target framework
TARGET_EXTENSION = '.winmd'
TARGET_DIRECTORY = 'lib/uap10.0'

# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'ZIP_READ_MODE',
    'ARCHIVE_PATH_SEPARATOR',
    'WINDOWS_PATH_SEPARATOR',
    'TARGET_EXTENSION',
    'TARGET_DIRECTORY',
]
