"""Tests for the .deb reader."""

from pathlib import Path
from typing import Callable

import pytest

from conftest import SAMPLE_CONTROL, ar_archive, tar_gz
from debpack.exceptions import InvalidPackageError
from debpack.packaging.reader import DebReader, parse_control


def test_reader_parses_members_and_control(
    tmp_path: Path, make_deb: Callable[..., Path]
) -> None:
    reader = DebReader(make_deb(tmp_path / "Sample-1.2.0-linux-amd64.deb"))

    assert list(reader.members) == ["debian-binary", "control.tar.gz", "data.tar.gz"]
    assert reader.format_version == "2.0"
    assert reader.control["Package"] == "Sample"
    assert reader.control["Installed-Size"] == "200"
    assert reader.control["Description"] == "Sample tool.\nLonger description."
    assert "Architecture: amd64" in reader.get_info()


def test_reader_file_not_found() -> None:
    """Tests that the reader raises FileNotFoundError for a non-existent file."""
    with pytest.raises(FileNotFoundError):
        DebReader(Path("/tmp/non-existent-deb-file.deb"))


def test_reader_invalid_magic(tmp_path: Path) -> None:
    bad_file = tmp_path / "bad.deb"
    bad_file.write_bytes(b"this is not a valid file")
    with pytest.raises(InvalidPackageError, match="Invalid ar archive magic"):
        DebReader(bad_file)


def test_reader_requires_data_member(tmp_path: Path) -> None:
    path = tmp_path / "partial.deb"
    path.write_bytes(
        ar_archive(
            [
                ("debian-binary", b"2.0\n"),
                ("control.tar.gz", tar_gz({"./control": SAMPLE_CONTROL.encode()})),
            ]
        )
    )
    with pytest.raises(InvalidPackageError, match="data.tar"):
        DebReader(path)


def test_reader_truncated_member(tmp_path: Path, make_deb: Callable[..., Path]) -> None:
    path = make_deb(tmp_path / "trunc.deb")
    path.write_bytes(path.read_bytes()[:-40])
    with pytest.raises(InvalidPackageError, match="Truncated"):
        DebReader(path)


def test_reader_control_archive_without_control(tmp_path: Path) -> None:
    path = tmp_path / "nocontrol.deb"
    path.write_bytes(
        ar_archive(
            [
                ("debian-binary", b"2.0\n"),
                ("control.tar.gz", tar_gz({"./md5sums": b""})),
                ("data.tar.gz", tar_gz({})),
            ]
        )
    )
    with pytest.raises(InvalidPackageError, match="control file"):
        DebReader(path)


def test_parse_control_rejects_garbage() -> None:
    with pytest.raises(InvalidPackageError, match="Malformed control line"):
        parse_control("Package Sample\n")
