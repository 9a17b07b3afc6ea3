"""Installed-Size accounting over the distribution tree."""

from collections.abc import Iterator
import os
from pathlib import Path
import stat

from ..exceptions import FilesystemError

KIBIBYTE = 1024


def _raise_walk_error(error: OSError) -> None:
    raise FilesystemError(
        f"Failed to traverse distribution tree at '{error.filename}': {error}"
    ) from error


def iter_file_sizes(root: Path) -> Iterator[int]:
    """Yields the byte size of every regular file under `root`, skipping symlinks."""
    if not root.is_dir():
        raise FilesystemError(f"Distribution directory not found: {root}")
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for name in filenames:
            path = os.path.join(dirpath, name)
            try:
                st = os.lstat(path)
            except OSError as e:
                raise FilesystemError(f"Failed to stat '{path}': {e}") from e
            if stat.S_ISREG(st.st_mode):
                yield st.st_size


def to_kibibytes(total_bytes: int) -> int:
    """Rounds a byte count to whole KiB, with exact halves rounding up."""
    return (total_bytes + KIBIBYTE // 2) // KIBIBYTE


def compute_installed_size(root: Path) -> int:
    return to_kibibytes(sum(iter_file_sizes(root)))
