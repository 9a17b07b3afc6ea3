"""Loading of the [tool.debpack] build manifest."""

from pathlib import Path
import tomllib
from typing import Any

import attrs

from .exceptions import ConfigurationError
from .models import (
    DEFAULT_PACKAGE_METADATA,
    BuildConfiguration,
    DirectoryInfo,
    PackageMetadata,
)

DIRECTORY_KEYS: tuple[str, ...] = ("out", "bin", "share", "dist", "pkg")
SOURCE_DIRECTORY_KEYS: tuple[str, ...] = ("bin", "share", "dist", "pkg")


def read_manifest(manifest_path: Path) -> dict[str, Any]:
    """Returns the [tool.debpack] table of a TOML manifest."""
    try:
        with manifest_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in '{manifest_path}': {e}") from e

    debpack_conf = data.get("tool", {}).get("debpack", {})
    if not debpack_conf:
        raise ConfigurationError(
            f"A [tool.debpack] section was not found in {manifest_path.name}."
        )
    return debpack_conf


def _resolve_directories(
    manifest_dir: Path, dirs_conf: dict[str, Any], out: str | None
) -> DirectoryInfo:
    if out:
        dirs_conf = {**dirs_conf, "out": out}
    missing = [key for key in DIRECTORY_KEYS if not dirs_conf.get(key)]
    if missing:
        raise ConfigurationError(
            "Missing required directories in [tool.debpack.directories]: "
            + ", ".join(missing)
        )

    resolved = {key: (manifest_dir / dirs_conf[key]).resolve() for key in DIRECTORY_KEYS}
    for key in SOURCE_DIRECTORY_KEYS:
        if not resolved[key].is_dir():
            raise ConfigurationError(
                f"Directory '{key}' does not exist: {resolved[key]}"
            )
    return DirectoryInfo(**resolved)


def _build_metadata(metadata_conf: dict[str, Any]) -> PackageMetadata:
    known = {a.name for a in attrs.fields(PackageMetadata)}
    unknown = sorted(set(metadata_conf) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in [tool.debpack.metadata]: {', '.join(unknown)}"
        )
    try:
        return attrs.evolve(DEFAULT_PACKAGE_METADATA, **metadata_conf)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def load_configuration(
    manifest_path: Path,
    version: str | None = None,
    out: str | None = None,
    keep_working_dir: bool | None = None,
) -> BuildConfiguration:
    debpack_conf = read_manifest(manifest_path)
    manifest_dir = manifest_path.parent

    product_name = debpack_conf.get("product_name")
    final_version = version or debpack_conf.get("version")
    if not product_name or not final_version:
        raise ConfigurationError(
            "Missing required configuration. Set 'product_name' and 'version' "
            "in [tool.debpack] or provide --version."
        )

    directories = _resolve_directories(
        manifest_dir, debpack_conf.get("directories", {}), out
    )
    metadata = _build_metadata(debpack_conf.get("metadata", {}))
    if keep_working_dir is None:
        keep_working_dir = debpack_conf.get("keep_working_dir", True)
    if not isinstance(keep_working_dir, bool):
        raise ConfigurationError("'keep_working_dir' in [tool.debpack] must be a boolean.")

    try:
        return BuildConfiguration(
            product_name=str(product_name),
            version=str(final_version),
            directories=directories,
            metadata=metadata,
            keep_working_dir=keep_working_dir,
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
