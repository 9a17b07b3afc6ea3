"""Core logic for building .deb packages by orchestrating the dpkg tool chain."""

import enum
from pathlib import Path
import shutil

from pyvider.telemetry import logger

from ..exceptions import BuildError, ExternalToolError, FilesystemError
from ..models import BuildConfiguration, BuildResult, PackageIdentity
from ..tools import run_command
from .architecture import detect_architecture
from .metadata import write_control, write_copyright
from .size import compute_installed_size
from .staging import install_maintainer_scripts, stage_payload


class BuildState(enum.Enum):
    PENDING = "pending"
    DETECTING_ARCHITECTURE = "detecting-architecture"
    STAGING_FILES = "staging-files"
    COMPUTING_SIZE = "computing-size"
    WRITING_METADATA = "writing-metadata"
    INSTALLING_SCRIPTS = "installing-scripts"
    BUILDING_ARCHIVE = "building-archive"
    DONE = "done"
    FAILED = "failed"


class BuildOrchestrator:
    ARCHIVE_TOOL = "dpkg-deb"
    COMPRESSION_TYPE = "gzip"
    COMPRESSION_LEVEL = 9

    def __init__(self, config: BuildConfiguration) -> None:
        self.config = config
        self.state = BuildState.PENDING
        self.identity: PackageIdentity | None = None

    def _transition(self, state: BuildState) -> None:
        logger.debug(f"Build state: {self.state.value} -> {state.value}")
        self.state = state

    def _run_subprocess(self, command: list[str], cwd: Path | str | None = None) -> str:
        try:
            result = run_command(command, cwd=cwd)
        except OSError as e:
            raise ExternalToolError(
                f"Failed to launch command: {' '.join(command)}\n  Error: {e}"
            ) from e
        if result.returncode != 0:
            error_message = (
                f"Command failed with exit code {result.returncode}.\n"
                f"  Command: {' '.join(command)}\n"
                f"  Stdout:\n{result.stdout.strip()}\n"
                f"  Stderr:\n{result.stderr.strip()}"
            )
            raise ExternalToolError(error_message)
        return result.stdout.strip()

    def archive_command(self, working_dir: Path, archive_path: Path) -> list[str]:
        return [
            self.ARCHIVE_TOOL,
            "-Z",
            self.COMPRESSION_TYPE,
            "-z",
            str(self.COMPRESSION_LEVEL),
            "--build",
            str(working_dir),
            str(archive_path),
        ]

    def build_package(self) -> BuildResult:
        logger.info("Building deb package...")
        try:
            return self._build()
        except BuildError as e:
            logger.error(f"Packaging failed during {self.state.value}: {e}")
            self._transition(BuildState.FAILED)
            raise

    def _build(self) -> BuildResult:
        config = self.config
        directories = config.directories

        self._transition(BuildState.DETECTING_ARCHITECTURE)
        architecture = detect_architecture()
        self.identity = PackageIdentity(
            product_name=config.product_name,
            version=config.version,
            architecture=architecture,
        )
        logger.info("Building package " + self.identity.archive_name)

        self._transition(BuildState.STAGING_FILES)
        tree = stage_payload(config)

        self._transition(BuildState.COMPUTING_SIZE)
        installed_size = compute_installed_size(directories.dist)
        logger.info(f"Installed size: {installed_size} KiB", dist=str(directories.dist))

        self._transition(BuildState.WRITING_METADATA)
        write_control(tree, self.identity, installed_size, config.metadata)
        write_copyright(tree, config.metadata)

        self._transition(BuildState.INSTALLING_SCRIPTS)
        install_maintainer_scripts(directories.maintainer_scripts, tree)

        self._transition(BuildState.BUILDING_ARCHIVE)
        archive_path = directories.out / self.identity.archive_name
        self._run_subprocess(self.archive_command(tree.root, archive_path))

        if not config.keep_working_dir:
            logger.info(f"Removing working directory {tree.root}")
            try:
                shutil.rmtree(tree.root)
            except OSError as e:
                raise FilesystemError(
                    f"Failed to remove working directory '{tree.root}': {e}"
                ) from e

        self._transition(BuildState.DONE)
        logger.info(f"Package built: {archive_path}")
        return BuildResult(
            identity=self.identity,
            installed_size=installed_size,
            working_dir=tree.root,
            archive_path=archive_path,
        )
