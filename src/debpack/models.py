from pathlib import Path
from typing import Any

from attrs import define, field, validators

DEBIAN_COPYRIGHT_FORMAT_URL: str = (
    "https://www.debian.org/doc/packaging-manuals/copyright-format/1.0/"
)
WORKING_DIR_NAME: str = "working"
CONTROL_DIR_NAME: str = "DEBIAN"
MAINTAINER_SCRIPTS_SUBDIR: tuple[str, ...] = ("scripts", "linux", "deb")


def _single_token(instance: Any, attribute: Any, value: str) -> None:
    if not value or value != value.strip() or any(c.isspace() for c in value):
        raise ValueError(
            f"'{attribute.name}' must be a non-empty string without whitespace, got {value!r}"
        )


def _single_line(instance: Any, attribute: Any, value: str) -> None:
    if "\n" in value or "\r" in value:
        raise ValueError(f"'{attribute.name}' must not contain line breaks.")


@define(frozen=True, slots=True)
class PackageMetadata:
    """Fixed metadata shared by every package this tool produces."""

    maintainer: str = field(
        default="RStudio, PBC <quarto@rstudio.org>", validator=_single_line
    )
    homepage: str = field(
        default="https://github.com/quarto-dev/quarto-cli", validator=_single_line
    )
    description: str = field(
        default=(
            "Quarto is an academic, scientific, and technical publishing "
            "system built on Pandoc."
        ),
        validator=_single_line,
    )
    section: str = field(default="user/text", validator=_single_line)
    priority: str = field(default="optional", validator=_single_line)
    upstream_name: str = field(default="Quarto", validator=_single_line)
    copyright: str = field(default="RStudio, PBC.", validator=_single_line)
    license: str = field(default="GPL-2+", validator=_single_line)


DEFAULT_PACKAGE_METADATA = PackageMetadata()


@define(frozen=True, slots=True)
class DirectoryInfo:
    out: Path = field(converter=Path)
    bin: Path = field(converter=Path)
    share: Path = field(converter=Path)
    dist: Path = field(converter=Path)
    pkg: Path = field(converter=Path)

    @property
    def working(self) -> Path:
        return self.out / WORKING_DIR_NAME

    @property
    def maintainer_scripts(self) -> Path:
        return self.pkg.joinpath(*MAINTAINER_SCRIPTS_SUBDIR)


@define(frozen=True, slots=True)
class BuildConfiguration:
    product_name: str = field(validator=_single_token)
    version: str = field(validator=_single_token)
    directories: DirectoryInfo = field(
        validator=validators.instance_of(DirectoryInfo)
    )
    metadata: PackageMetadata = field(default=DEFAULT_PACKAGE_METADATA)
    keep_working_dir: bool = field(default=True)


@define(frozen=True, slots=True)
class PackageIdentity:
    product_name: str
    version: str
    architecture: str = field(validator=_single_token)

    @property
    def name(self) -> str:
        return f"{self.product_name}-{self.version}-linux-{self.architecture}"

    @property
    def archive_name(self) -> str:
        return f"{self.name}.deb"


@define(frozen=True, slots=True)
class StagingTree:
    """Layout of the working directory handed to `dpkg-deb --build`."""

    root: Path
    product_name: str

    @property
    def install_prefix(self) -> Path:
        return self.root / "opt" / self.product_name.lower()

    @property
    def bin_dir(self) -> Path:
        return self.install_prefix / "bin"

    @property
    def share_dir(self) -> Path:
        return self.install_prefix / "share"

    @property
    def control_dir(self) -> Path:
        return self.root / CONTROL_DIR_NAME


@define(frozen=True, slots=True)
class BuildResult:
    identity: PackageIdentity
    installed_size: int
    working_dir: Path
    archive_path: Path
