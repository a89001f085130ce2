# Path: nuget_installer/engine/manifest_reader.py
"""
Manifest Reader

Loads the project manifest and extracts the pinned NuGet dependencies
declared under [package.metadata.nuget_dependencies].

Architecture:
- load(): read + parse TOML, then extract
- extract_dependencies(): pure shape validation over a parsed document
- Fail fast: any malformed entry rejects the whole manifest
"""

import sys
from pathlib import Path, PureWindowsPath
from typing import Any, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from nuget_installer.core.logger import get_logger
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.core.errors import ManifestMissing, ManifestMalformed
from nuget_installer.engine.result import DependencyRecord
from nuget_installer.constants import (
    MANIFEST_PACKAGE_TABLE,
    MANIFEST_METADATA_TABLE,
    MANIFEST_DEPENDENCIES_TABLE,
    LOG_INPUT,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')

# Names become directory names under the output root
PATH_SEPARATORS = ('/', '\\')
RESERVED_NAMES = ('.', '..')


def is_safe_name(name: str) -> bool:
    """True if the name is usable as a single directory component."""
    if name in RESERVED_NAMES or PureWindowsPath(name).drive:
        return False
    return not any(separator in name for separator in PATH_SEPARATORS)


def extract_dependencies(
    manifest: Mapping[str, Any],
    path: Optional[Path] = None
) -> list[DependencyRecord]:
    """
    Extract dependency records from a parsed manifest.

    Args:
        manifest: Parsed manifest document
        path: Manifest location, used in error messages only

    Returns:
        One DependencyRecord per declared entry

    Raises:
        ManifestMalformed: If a table is missing or any entry has the wrong shape
    """
    package = manifest.get(MANIFEST_PACKAGE_TABLE)
    if not isinstance(package, Mapping):
        raise ManifestMalformed(f"missing [{MANIFEST_PACKAGE_TABLE}] table", path)

    metadata = package.get(MANIFEST_METADATA_TABLE)
    if not isinstance(metadata, Mapping):
        raise ManifestMalformed(
            f"missing [{MANIFEST_PACKAGE_TABLE}.{MANIFEST_METADATA_TABLE}] table", path
        )

    table_name = f"{MANIFEST_PACKAGE_TABLE}.{MANIFEST_METADATA_TABLE}.{MANIFEST_DEPENDENCIES_TABLE}"
    entries = metadata.get(MANIFEST_DEPENDENCIES_TABLE)
    if not isinstance(entries, Mapping):
        raise ManifestMalformed(f"missing [{table_name}] table", path)

    dependencies = []
    for name, version in entries.items():
        if not isinstance(version, str):
            raise ManifestMalformed(
                f"version of '{name}' in [{table_name}] must be a string, "
                f"got {type(version).__name__}",
                path,
            )
        if not name or not version.strip():
            raise ManifestMalformed(f"empty name or version in [{table_name}]", path)
        if not is_safe_name(name):
            raise ManifestMalformed(
                f"'{name}' in [{table_name}] is not a plain package name", path
            )
        dependencies.append(DependencyRecord(name=name, version=version))

    return dependencies


class ManifestReader:
    """
    Reads dependency declarations from a manifest file.

    Example:
        reader = ManifestReader()
        dependencies = reader.load(Path('Cargo.toml'))
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize manifest reader.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()

    def load(self, path: Optional[Path] = None) -> list[DependencyRecord]:
        """
        Read, parse and extract dependencies from a manifest.

        Args:
            path: Manifest path (configured manifest_path if None)

        Returns:
            Declared dependency records

        Raises:
            ManifestMissing: If the file cannot be read
            ManifestMalformed: If the file is not valid TOML or has the wrong shape
        """
        path = Path(path) if path is not None else Path(self.config.get('manifest_path'))
        logger.info(f"{LOG_INPUT} Reading manifest: {path}")

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ManifestMissing(path, e) from e

        try:
            document = tomllib.loads(raw.decode('utf-8'))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ManifestMalformed(f"invalid TOML: {e}", path) from e

        dependencies = extract_dependencies(document, path)

        logger.info(f"{LOG_OUTPUT} Found {len(dependencies)} NuGet dependencies")
        for dependency in dependencies:
            logger.debug(f"{LOG_OUTPUT}   {dependency}")

        return dependencies


__all__ = ['ManifestReader', 'extract_dependencies', 'is_safe_name']
