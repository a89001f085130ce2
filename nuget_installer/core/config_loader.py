# Path: nuget_installer/core/config_loader.py
"""
Installer Configuration Loader

Centralized configuration management for the NuGet installer.
Loads environment variables with type safety and defaults.

Architecture:
- Singleton pattern for global configuration
- Type-safe access with validation
- Sensible defaults (nothing is required)
- Optional .env file in the working directory or the project root
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import load_dotenv

from nuget_installer import __version__
from nuget_installer.constants import (
    ENV_MANIFEST_PATH,
    ENV_OUTPUT_DIR,
    ENV_REGISTRY_URL,
    ENV_MAX_REDIRECTS,
    ENV_REQUEST_TIMEOUT,
    ENV_CONNECT_TIMEOUT,
    ENV_MAX_CONCURRENT,
    ENV_RETRY_ATTEMPTS,
    ENV_RETRY_DELAY,
    ENV_MAX_RETRY_DELAY,
    ENV_USER_AGENT,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    ENV_LOG_DIR,
    DEFAULT_MANIFEST_NAME,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REGISTRY_URL,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_CONCURRENT,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_MAX_RETRY_DELAY,
)


class ConfigLoader:
    """
    Singleton configuration loader.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults.

    Example:
        config = ConfigLoader()
        output_dir = config.get('output_dir')
        max_redirects = config.get('max_redirects')
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern.
        """
        if ConfigLoader._initialized:
            return

        # .env in the working directory wins over one at the project root
        # config_loader.py is at: <root>/nuget_installer/core/config_loader.py
        project_root = Path(__file__).resolve().parent.parent.parent
        for env_path in (Path.cwd() / '.env', project_root / '.env'):
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, interpolate=True)
                break

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next call re-reads the environment."""
        cls._instance = None
        cls._initialized = False

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values
        """
        config = {
            # ================================================================
            # PATHS
            # ================================================================
            'manifest_path': self._get_path(ENV_MANIFEST_PATH) or Path(DEFAULT_MANIFEST_NAME),
            'output_dir': self._get_path(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR,
            'log_dir': self._get_path(ENV_LOG_DIR),

            # ================================================================
            # REGISTRY / DOWNLOAD CONFIGURATION
            # ================================================================
            'registry_url': self._get_env(ENV_REGISTRY_URL, DEFAULT_REGISTRY_URL),
            'max_redirects': self._get_int(ENV_MAX_REDIRECTS, DEFAULT_MAX_REDIRECTS),
            'request_timeout': self._get_int(ENV_REQUEST_TIMEOUT, DEFAULT_TIMEOUT),
            'connect_timeout': self._get_int(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
            'max_concurrent': self._get_int(ENV_MAX_CONCURRENT, DEFAULT_MAX_CONCURRENT),
            'retry_attempts': self._get_int(ENV_RETRY_ATTEMPTS, DEFAULT_RETRY_ATTEMPTS),
            'retry_delay': self._get_float(ENV_RETRY_DELAY, DEFAULT_RETRY_DELAY),
            'max_retry_delay': self._get_float(ENV_MAX_RETRY_DELAY, DEFAULT_MAX_RETRY_DELAY),
            'user_agent': self._get_env(ENV_USER_AGENT, f'NugetInstaller/{__version__}'),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env(ENV_LOG_LEVEL, 'INFO'),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, True),
        }

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """
        Get integer environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found or invalid

        Returns:
            Integer value
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable, falling back to default when invalid."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path environment variable.

        Args:
            key: Environment variable name
            required: If True, raises ValueError when missing

        Returns:
            Path object or None
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return None

        return Path(value.strip())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to configuration."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    def items(self):
        """Get all configuration key-value pairs."""
        return self._config.items()


__all__ = ['ConfigLoader']
