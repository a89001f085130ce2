# Path: nuget_installer/__init__.py
"""
NuGet Installer

Fetches NuGet packages pinned in a Cargo manifest, extracts their
Windows metadata (.winmd) files and writes them under target/nuget/.
"""

__version__ = '0.1.0'

from .engine.coordinator import InstallCoordinator, run_install
from .cli.install_cli import InstallCLI, main

__all__ = ['InstallCoordinator', 'run_install', 'InstallCLI', 'main', '__version__']
