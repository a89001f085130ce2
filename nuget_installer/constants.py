# Path: nuget_installer/constants.py
"""
NuGet Installer Constants

Module-wide constants for the dependency install pipeline.
Extraction-specific constants live in engine/extraction/constants.py.

No hardcoded environment - all overridable values come from .env via config_loader.
"""

from pathlib import Path

# ============================================================================
# MANIFEST LAYOUT
# ============================================================================
DEFAULT_MANIFEST_NAME: str = 'Cargo.toml'
MANIFEST_PACKAGE_TABLE: str = 'package'
MANIFEST_METADATA_TABLE: str = 'metadata'
MANIFEST_DEPENDENCIES_TABLE: str = 'nuget_dependencies'

# ============================================================================
# REGISTRY
# ============================================================================
DEFAULT_REGISTRY_URL: str = 'https://www.nuget.org/api/v2/package'

# ============================================================================
# HTTP STATUS CODES
# ============================================================================
HTTP_OK: int = 200
HTTP_FOUND: int = 302

HEADER_LOCATION: str = 'Location'

# ============================================================================
# DOWNLOAD CONFIGURATION DEFAULTS
# ============================================================================
DEFAULT_MAX_REDIRECTS: int = 5
DEFAULT_TIMEOUT: int = 300  # 5 minutes for large packages
DEFAULT_CONNECT_TIMEOUT: int = 30
DEFAULT_MAX_CONCURRENT: int = 10  # Connection pool limit
DEFAULT_RETRY_ATTEMPTS: int = 2  # Retries after the first attempt
DEFAULT_RETRY_DELAY: float = 1.0
DEFAULT_MAX_RETRY_DELAY: float = 30.0

# ============================================================================
# OUTPUT
# ============================================================================
DEFAULT_OUTPUT_DIR: Path = Path('target') / 'nuget'

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'nuget_installer'
LOGGER_CORE: str = 'nuget_installer.core'
LOGGER_ENGINE: str = 'nuget_installer.engine'
LOGGER_CLI: str = 'nuget_installer.cli'
LOGGER_EXTRACTION: str = 'nuget_installer.extraction'

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

LOG_FILE_ACTIVITY: str = 'installer_activity.log'
LOG_FILE_DOWNLOADS: str = 'downloads.log'
LOG_FILE_ERRORS: str = 'errors.log'

# ============================================================================
# ENVIRONMENT VARIABLE KEYS (for reference in config_loader.py)
# ============================================================================
ENV_MANIFEST_PATH: str = 'NUGET_MANIFEST_PATH'
ENV_OUTPUT_DIR: str = 'NUGET_OUTPUT_DIR'
ENV_REGISTRY_URL: str = 'NUGET_REGISTRY_URL'

ENV_MAX_REDIRECTS: str = 'NUGET_MAX_REDIRECTS'
ENV_REQUEST_TIMEOUT: str = 'NUGET_REQUEST_TIMEOUT'
ENV_CONNECT_TIMEOUT: str = 'NUGET_CONNECT_TIMEOUT'
ENV_MAX_CONCURRENT: str = 'NUGET_MAX_CONCURRENT'
ENV_RETRY_ATTEMPTS: str = 'NUGET_RETRY_ATTEMPTS'
ENV_RETRY_DELAY: str = 'NUGET_RETRY_DELAY'
ENV_MAX_RETRY_DELAY: str = 'NUGET_MAX_RETRY_DELAY'
ENV_USER_AGENT: str = 'NUGET_USER_AGENT'

ENV_LOG_LEVEL: str = 'NUGET_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'NUGET_LOG_CONSOLE'
ENV_LOG_DIR: str = 'NUGET_LOG_DIR'

# ============================================================================
# EXPORTS
# ============================================================================
__all__ = [
    # Manifest
    'DEFAULT_MANIFEST_NAME',
    'MANIFEST_PACKAGE_TABLE',
    'MANIFEST_METADATA_TABLE',
    'MANIFEST_DEPENDENCIES_TABLE',

    # Registry
    'DEFAULT_REGISTRY_URL',

    # HTTP
    'HTTP_OK',
    'HTTP_FOUND',
    'HEADER_LOCATION',

    # Download defaults
    'DEFAULT_MAX_REDIRECTS',
    'DEFAULT_TIMEOUT',
    'DEFAULT_CONNECT_TIMEOUT',
    'DEFAULT_MAX_CONCURRENT',
    'DEFAULT_RETRY_ATTEMPTS',
    'DEFAULT_RETRY_DELAY',
    'DEFAULT_MAX_RETRY_DELAY',

    # Output
    'DEFAULT_OUTPUT_DIR',

    # Logging
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',
    'LOGGER_ROOT',
    'LOGGER_CORE',
    'LOGGER_ENGINE',
    'LOGGER_CLI',
    'LOGGER_EXTRACTION',
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'LOG_FILE_ACTIVITY',
    'LOG_FILE_DOWNLOADS',
    'LOG_FILE_ERRORS',

    # Environment variable keys
    'ENV_MANIFEST_PATH',
    'ENV_OUTPUT_DIR',
    'ENV_REGISTRY_URL',
    'ENV_MAX_REDIRECTS',
    'ENV_REQUEST_TIMEOUT',
    'ENV_CONNECT_TIMEOUT',
    'ENV_MAX_CONCURRENT',
    'ENV_RETRY_ATTEMPTS',
    'ENV_RETRY_DELAY',
    'ENV_MAX_RETRY_DELAY',
    'ENV_USER_AGENT',
    'ENV_LOG_LEVEL',
    'ENV_LOG_CONSOLE',
    'ENV_LOG_DIR',
]
