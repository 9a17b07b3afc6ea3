"""Pytest fixtures for the entire debpack test suite."""

import io
from pathlib import Path
import subprocess
import tarfile
from typing import Callable

import pytest

from debpack.models import BuildConfiguration, DirectoryInfo


@pytest.fixture
def dist_tree(tmp_path: Path) -> DirectoryInfo:
    """
    Creates a pre-built distribution tree plus packaging scripts.

    The regular files under `dist` total 204800 bytes.
    """
    dist = tmp_path / "dist"
    bin_dir = dist / "bin"
    share_dir = dist / "share"
    scripts_dir = tmp_path / "package" / "scripts" / "linux" / "deb"
    for d in (bin_dir, share_dir / "resources", scripts_dir):
        d.mkdir(parents=True)

    (bin_dir / "sample").write_bytes(b"\x7fELF" + b"\x00" * (200000 - 4))
    (share_dir / "resources" / "data.txt").write_bytes(b"x" * 4800)

    postinst = scripts_dir / "postinst"
    postinst.write_text("#!/bin/sh\nset -e\nln -sf /opt/sample/bin/sample /usr/local/bin/sample\n")
    postinst.chmod(0o755)
    postrm = scripts_dir / "postrm"
    postrm.write_text("#!/bin/sh\nrm -f /usr/local/bin/sample\n")
    postrm.chmod(0o755)

    return DirectoryInfo(
        out=tmp_path / "out",
        bin=bin_dir,
        share=share_dir,
        dist=dist,
        pkg=tmp_path / "package",
    )


@pytest.fixture
def build_config(dist_tree: DirectoryInfo) -> BuildConfiguration:
    return BuildConfiguration(
        product_name="Sample", version="1.2.0", directories=dist_tree
    )


@pytest.fixture
def completed_process() -> Callable[..., subprocess.CompletedProcess[str]]:
    """A factory for fake subprocess results."""

    def _make(
        returncode: int = 0, stdout: str = "", stderr: str = ""
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(
            args=["fake"], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _make


SAMPLE_CONTROL = (
    "Package: Sample\n"
    "Version: 1.2.0\n"
    "Architecture: amd64\n"
    "Installed-Size: 200\n"
    "Description: Sample tool.\n"
    " Longer description.\n"
)


def tar_gz(files: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def ar_archive(members: list[tuple[str, bytes]]) -> bytes:
    out = bytearray(b"!<arch>\n")
    for name, body in members:
        header = (
            f"{name + '/':<16}{0:<12}{0:<6}{0:<6}{'100644':<8}{len(body):<10}".encode("ascii")
            + b"`\n"
        )
        out += header + body
        if len(body) % 2:
            out += b"\n"
    return bytes(out)


@pytest.fixture
def make_deb() -> Callable[..., Path]:
    """A factory fixture writing a minimal, well-formed .deb archive."""

    def _make(path: Path, control: str = SAMPLE_CONTROL) -> Path:
        path.write_bytes(
            ar_archive(
                [
                    ("debian-binary", b"2.0\n"),
                    ("control.tar.gz", tar_gz({"./control": control.encode("utf-8")})),
                    ("data.tar.gz", tar_gz({"./opt/sample/bin/sample": b"bin"})),
                ]
            )
        )
        return path

    return _make
