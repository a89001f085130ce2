# Path: nuget_installer/cli/__init__.py
"""
Installer CLI Module

Command-line interface for the install pipeline.
"""

from nuget_installer.cli.install_cli import InstallCLI, build_parser, main

__all__ = ['InstallCLI', 'build_parser', 'main']
