# Path: nuget_installer/engine/materializer.py
"""
Output Materializer

Writes extracted files to <output_dir>/<dependency name>/<file name>.

Architecture:
- Directory per dependency (parents created, idempotent)
- Existing files overwritten, so installs are repeatable
- First write failure stops the dependency; nothing is rolled back
"""

from pathlib import Path
from typing import Optional, Sequence

from nuget_installer.core.logger import get_logger
from nuget_installer.core.config_loader import ConfigLoader
from nuget_installer.core.errors import WriteFailure
from nuget_installer.engine.result import (
    DependencyRecord,
    ExtractedFile,
    MaterializeResult,
)
from nuget_installer.constants import (
    DEFAULT_OUTPUT_DIR,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)

logger = get_logger(__name__, 'engine')


class OutputMaterializer:
    """
    Materializes extracted files on disk.

    Example:
        materializer = OutputMaterializer(Path('target/nuget'))
        result = materializer.materialize(dependency, files)
        # target/nuget/Win2D.uwp/Microsoft.Graphics.Canvas.winmd
    """

    def __init__(self, output_dir: Optional[Path] = None, config: Optional[ConfigLoader] = None):
        """
        Initialize materializer.

        Args:
            output_dir: Root for dependency directories (from config if None)
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self.output_dir = Path(output_dir) if output_dir is not None else \
            Path(self.config.get('output_dir', DEFAULT_OUTPUT_DIR))

    def dependency_dir(self, dependency: DependencyRecord) -> Path:
        """Destination directory for a dependency."""
        return self.output_dir / dependency.name

    def materialize(
        self,
        dependency: DependencyRecord,
        files: Sequence[ExtractedFile]
    ) -> MaterializeResult:
        """
        Write extracted files for one dependency.

        Args:
            dependency: Owning dependency (names the directory)
            files: Files to write

        Returns:
            MaterializeResult listing the written paths

        Raises:
            WriteFailure: On the first file (or directory) that cannot be written,
                or when the dependency directory would leave output_dir
        """
        target_dir = self.dependency_dir(dependency)
        logger.info(f"{LOG_INPUT} Materializing {len(files)} files for {dependency} into {target_dir}")

        if target_dir.resolve().parent != self.output_dir.resolve():
            logger.error(f"{LOG_OUTPUT} {target_dir} is outside {self.output_dir}")
            raise WriteFailure(
                dependency,
                dependency.name,
                target_dir,
                ValueError(f"destination is outside the output directory {self.output_dir}"),
            )

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"{LOG_OUTPUT} Cannot create {target_dir}: {e}")
            raise WriteFailure(dependency, target_dir.name, target_dir, e) from e

        result = MaterializeResult(dependency=dependency, directory=target_dir)

        for extracted in files:
            destination = target_dir / extracted.name
            try:
                destination.write_bytes(extracted.contents)
            except OSError as e:
                logger.error(f"{LOG_OUTPUT} Cannot write {destination}: {e}")
                raise WriteFailure(dependency, extracted.name, destination, e) from e

            logger.debug(f"{LOG_PROCESS} Wrote {destination} ({len(extracted.contents)} bytes)")
            result.written.append(destination)

        logger.info(f"{LOG_OUTPUT} {dependency}: {len(result.written)} files written")

        return result


__all__ = ['OutputMaterializer']
