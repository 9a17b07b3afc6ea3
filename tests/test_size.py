"""Tests for Installed-Size accounting."""

from pathlib import Path

import pytest

from debpack.exceptions import FilesystemError
from debpack.models import DirectoryInfo
from debpack.packaging.size import compute_installed_size, iter_file_sizes, to_kibibytes


def test_installed_size_of_distribution_tree(dist_tree: DirectoryInfo) -> None:
    assert sum(iter_file_sizes(dist_tree.dist)) == 204800
    assert compute_installed_size(dist_tree.dist) == 200


def test_empty_tree_is_zero(tmp_path: Path) -> None:
    assert compute_installed_size(tmp_path) == 0


def test_symlinks_and_directories_are_excluded(tmp_path: Path) -> None:
    (tmp_path / "nested" / "deeper").mkdir(parents=True)
    target = tmp_path / "nested" / "deeper" / "payload.bin"
    target.write_bytes(b"a" * 2048)
    (tmp_path / "alias.bin").symlink_to(target)
    (tmp_path / "dir-alias").symlink_to(tmp_path / "nested", target_is_directory=True)

    assert list(iter_file_sizes(tmp_path)) == [2048]
    assert compute_installed_size(tmp_path) == 2


def test_iter_file_sizes_is_lazy(tmp_path: Path) -> None:
    (tmp_path / "a").write_bytes(b"12")
    sizes = iter_file_sizes(tmp_path)
    assert next(sizes) == 2
    with pytest.raises(StopIteration):
        next(sizes)


@pytest.mark.parametrize(
    ("total_bytes", "expected"),
    [(0, 0), (511, 0), (512, 1), (1024, 1), (1535, 1), (1536, 2), (2560, 3), (204800, 200)],
)
def test_to_kibibytes_rounds_half_up(total_bytes: int, expected: int) -> None:
    assert to_kibibytes(total_bytes) == expected


def test_missing_distribution_tree(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError, match="Distribution directory not found"):
        compute_installed_size(tmp_path / "missing")
