# Path: nuget_installer/core/logger.py
"""
Installer Logger

Centralized logging configuration for the NuGet installer.

Architecture:
- Component-based logging (core, engine, cli, extraction)
- Optional file output, console output to stderr
- Configurable log levels
- IPO (Input-Process-Output) structured logging
"""

import logging
from typing import Optional

from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOG_FILE_ACTIVITY,
    LOG_FILE_DOWNLOADS,
    LOG_FILE_ERRORS,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_CLI,
    LOGGER_EXTRACTION,
)

COMPONENT_LOGGERS = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'cli': LOGGER_CLI,
    'extraction': LOGGER_EXTRACTION,
}


class InstallerLogger:
    """
    Centralized logger for the installer.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Fetching Win2D.uwp 1.25.0")
        logger.info("[PROCESS] Following redirect (4 left)")
        logger.info("[OUTPUT] Downloaded 2.1MB")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize installer logger.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self._configured = False

    def configure(self, level: Optional[str] = None) -> None:
        """
        Configure logging system for the installer.

        Args:
            level: Optional level name overriding the configured one
        """
        log_dir = self.config.get('log_dir')
        log_level = (level or self.config.get('log_level', 'INFO')).upper()
        console_output = self.config.get('log_console', True)
        numeric_level = getattr(logging, log_level, logging.INFO)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(numeric_level)
        logger.handlers.clear()

        engine_logger = logging.getLogger(LOGGER_ENGINE)
        engine_logger.handlers.clear()

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / LOG_FILE_ACTIVITY)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            # Every request, redirect and retry
            download_handler = logging.FileHandler(log_dir / LOG_FILE_DOWNLOADS)
            download_handler.setLevel(logging.DEBUG)
            download_handler.setFormatter(formatter)
            engine_logger.addHandler(download_handler)

            error_handler = logging.FileHandler(log_dir / LOG_FILE_ERRORS)
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            logger.addHandler(error_handler)

        if console_output:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(numeric_level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'cli', 'extraction')

        Returns:
            Configured logger instance
        """
        if not self._configured:
            self.configure()

        prefix = COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


_installer_logger = InstallerLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for an installer component.

    Args:
        name: Module name (typically __name__)
        component: Component type ('core', 'engine', 'cli', 'extraction')

    Returns:
        Configured logger instance

    Example:
        from nuget_installer.core.logger import get_logger

        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Processing install request")
    """
    return _installer_logger.get_logger(name, component)


def configure_logging(config: Optional[ConfigLoader] = None, level: Optional[str] = None) -> None:
    """
    Configure installer logging system.

    Call once at startup; calling again re-applies the configuration.

    Args:
        config: Optional ConfigLoader instance
        level: Optional level name overriding the configured one
    """
    global _installer_logger

    if config:
        _installer_logger = InstallerLogger(config)

    _installer_logger.configure(level)


__all__ = ['get_logger', 'configure_logging', 'InstallerLogger']
