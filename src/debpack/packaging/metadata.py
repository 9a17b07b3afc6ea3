"""Rendering of the DEBIAN/control and DEBIAN/copyright metadata files."""

from pathlib import Path

import jinja2
from pyvider.telemetry import logger

from ..exceptions import FilesystemError
from ..models import (
    DEBIAN_COPYRIGHT_FORMAT_URL,
    PackageIdentity,
    PackageMetadata,
    StagingTree,
)

_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

CONTROL_FIELD_ORDER: tuple[str, ...] = (
    "Package",
    "Version",
    "Architecture",
    "Installed-Size",
    "Section",
    "Priority",
    "Maintainer",
    "Homepage",
    "Description",
)


def _get_template_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def control_fields(
    identity: PackageIdentity, installed_size: int, metadata: PackageMetadata
) -> list[tuple[str, str]]:
    values = {
        "Package": identity.product_name,
        "Version": identity.version,
        "Architecture": identity.architecture,
        "Installed-Size": str(installed_size),
        "Section": metadata.section,
        "Priority": metadata.priority,
        "Maintainer": metadata.maintainer,
        "Homepage": metadata.homepage,
        "Description": metadata.description,
    }
    return [(name, values[name]) for name in CONTROL_FIELD_ORDER]


def render_control(
    identity: PackageIdentity, installed_size: int, metadata: PackageMetadata
) -> str:
    template = _get_template_env().get_template("control.j2")
    return template.render(
        fields=control_fields(identity, installed_size, metadata)
    )


def render_copyright(metadata: PackageMetadata) -> str:
    template = _get_template_env().get_template("copyright.j2")
    return template.render(
        format_url=DEBIAN_COPYRIGHT_FORMAT_URL, metadata=metadata
    )


def _write_control_file(tree: StagingTree, name: str, text: str) -> Path:
    target = tree.control_dir / name
    try:
        tree.control_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Failed to write '{target}': {e}") from e
    return target


def write_control(
    tree: StagingTree,
    identity: PackageIdentity,
    installed_size: int,
    metadata: PackageMetadata,
) -> Path:
    logger.info("Creating control file")
    control = render_control(identity, installed_size, metadata)
    logger.info(control)
    return _write_control_file(tree, "control", control)


def write_copyright(tree: StagingTree, metadata: PackageMetadata) -> Path:
    logger.info("Creating copyright file")
    return _write_control_file(tree, "copyright", render_copyright(metadata))
