"""Construction of the working directory mirroring the installed package layout."""

from pathlib import Path
import shutil

from pyvider.telemetry import logger

from ..exceptions import FilesystemError
from ..models import BuildConfiguration, StagingTree


def copy_tree(source: Path, destination: Path) -> None:
    """Recursively copies `source` over `destination`, overwriting existing files."""
    if not source.is_dir():
        raise FilesystemError(f"Source directory not found: {source}")
    try:
        shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Failed to copy '{source}' to '{destination}': {e}"
        ) from e


def _empty_dir(path: Path) -> None:
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def prepare_working_dir(working_dir: Path) -> None:
    """Creates the working directory, clearing anything a previous build left."""
    logger.info(f"Preparing working directory {working_dir}")
    try:
        working_dir.mkdir(parents=True, exist_ok=True)
        _empty_dir(working_dir)
    except OSError as e:
        raise FilesystemError(
            f"Failed to prepare working directory '{working_dir}': {e}"
        ) from e


def stage_payload(config: BuildConfiguration) -> StagingTree:
    directories = config.directories
    tree = StagingTree(root=directories.working, product_name=config.product_name)
    prepare_working_dir(tree.root)

    logger.info(f"Preparing bin directory {tree.bin_dir}")
    copy_tree(directories.bin, tree.bin_dir)

    logger.info(f"Preparing share directory {tree.share_dir}")
    copy_tree(directories.share, tree.share_dir)
    return tree


def install_maintainer_scripts(scripts_dir: Path, tree: StagingTree) -> None:
    """Copies the pre/post install hooks into the DEBIAN control directory."""
    logger.info("Copying install scripts...", source=str(scripts_dir))
    copy_tree(scripts_dir, tree.control_dir)
