# Path: nuget_installer/cli/install_cli.py
"""
Install CLI Interface

Command-line interface for installing NuGet dependencies declared in
a Cargo manifest.

Architecture:
- argparse program with one subcommand: install
- Flags override the environment configuration for this run
- Exit code 0 on success, 1 on any pipeline error (message on stderr)

Usage:
    nuget install
    nuget install --manifest-path path/to/Cargo.toml --output-dir target/nuget
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from nuget_installer import __version__
from nuget_installer.core.logger import get_logger, configure_logging
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.core.errors import PipelineError
from nuget_installer.engine.coordinator import run_install
from nuget_installer.engine.result import InstallResult
from nuget_installer.constants import LOG_INPUT, LOG_OUTPUT

logger = get_logger(__name__, 'cli')

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='nuget',
        description='A utility for interacting with nuget packages',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='subcommand', metavar='<subcommand>')
    subparsers.required = True

    install = subparsers.add_parser(
        'install',
        help='Download the packages in [package.metadata.nuget_dependencies]',
    )
    install.add_argument(
        '--manifest-path',
        type=Path,
        default=None,
        help='Path to Cargo.toml (default: ./Cargo.toml)',
    )
    install.add_argument(
        '--output-dir',
        type=Path,
        default=None,
        help='Directory receiving one folder per package (default: target/nuget)',
    )
    install.add_argument(
        '--registry-url',
        default=None,
        help='Package download base path (default: https://www.nuget.org/api/v2/package)',
    )
    install.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level for this run',
    )

    return parser


class InstallCLI:
    """
    Command-line front end for the install pipeline.

    Example:
        cli = InstallCLI()
        exit_code = cli.run(['install', '--output-dir', 'target/nuget'])
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """Initialize install CLI."""
        self.config = config if config else ConfigLoader()
        self.parser = build_parser()

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """
        Parse arguments and execute the selected subcommand.

        Args:
            argv: Arguments (sys.argv[1:] if None)

        Returns:
            Process exit code
        """
        args = self.parser.parse_args(argv)

        if args.log_level:
            configure_logging(level=args.log_level)

        if args.subcommand == 'install':
            return self._install(args)

        self.parser.error(f"unknown subcommand: {args.subcommand}")

    def _install(self, args: argparse.Namespace) -> int:
        """Run the install subcommand."""
        logger.info(f"{LOG_INPUT} Starting install")

        try:
            run_install(
                manifest_path=args.manifest_path,
                output_dir=args.output_dir,
                registry_url=args.registry_url,
                config=self.config,
                on_result=self._display_result,
            )

        except PipelineError as e:
            print(f"error: {e}", file=sys.stderr)
            logger.info(f"{LOG_OUTPUT} Install failed at {e.stage}")
            return EXIT_FAILURE

        except KeyboardInterrupt:
            print("\nInstall interrupted by user.", file=sys.stderr)
            return EXIT_INTERRUPTED

        return EXIT_SUCCESS

    def _display_result(self, result: InstallResult) -> None:
        """Print one line per dependency and a summary."""
        for outcome in result.outcomes:
            if outcome.success:
                names = ', '.join(f.name for f in outcome.extraction.files) or 'no files'
                print(f"  Installed {outcome.dependency} -> {outcome.materialized.directory} ({names})")
            else:
                print(f"  Failed {outcome.dependency} at {outcome.error.stage}")

        succeeded = len(result.outcomes) - len(result.failures)
        print(f"{succeeded}/{len(result.outcomes)} packages installed in {result.total_duration:.1f}s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    cli = InstallCLI()
    return cli.run(argv)


if __name__ == '__main__':
    sys.exit(main())


__all__ = ['InstallCLI', 'build_parser', 'main']
