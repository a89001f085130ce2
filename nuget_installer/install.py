# Path: nuget_installer/install.py
"""
NuGet Installer - Main Entry Point

Usage:
    python -m nuget_installer.install install
    python -m nuget_installer.install install --manifest-path Cargo.toml
"""

import sys

from nuget_installer.cli.install_cli import main


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInstall cancelled by user.", file=sys.stderr)
        sys.exit(130)
