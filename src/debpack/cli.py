"""The `debpack` command-line interface."""

import importlib.metadata
from pathlib import Path
import shutil

import click

from .config import load_configuration, read_manifest
from .exceptions import BuildError, VerificationError
from .models import WORKING_DIR_NAME
from .packaging.orchestrator import BuildOrchestrator
from .packaging.reader import DebReader

try:
    __version__ = importlib.metadata.version("debpack")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="debpack",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Debian installer package build tool."""
    pass


@cli.command("package")
@click.option(
    "--version",
    "version",
    help="Override the version from the manifest.",
)
@click.option(
    "--out",
    type=click.Path(file_okay=False, resolve_path=True),
    help="Override the output directory from the manifest.",
)
@click.option(
    "--keep-working-dir/--remove-working-dir",
    default=None,
    help="Keep the staging directory after a successful build (default: keep).",
)
@click.option(
    "--manifest",
    "manifest_path",
    default="pyproject.toml",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to the TOML manifest holding the [tool.debpack] table.",
)
@click.pass_context
def package_command(
    ctx: click.Context,
    version: str | None,
    out: str | None,
    keep_working_dir: bool | None,
    manifest_path: str,
) -> None:
    """Builds the .deb package and immediately verifies it."""
    click.echo("🚀 Building deb package...")
    try:
        manifest = Path(manifest_path)
        config = load_configuration(
            manifest, version=version, out=out, keep_working_dir=keep_working_dir
        )

        orchestrator = BuildOrchestrator(config)
        result = orchestrator.build_package()
        click.secho(f"✅ Package built successfully: {result.archive_path}", fg="green")
        click.echo(f"   Installed-Size: {result.installed_size} KiB")
    except BuildError as e:
        click.secho(f"❌ Packaging Failed:\n{e}", fg="red", err=True)
        raise click.Abort() from e

    click.echo("\n" + "=" * 20 + " Auto-Verification " + "=" * 20)
    ctx.invoke(verify_command, package_file=str(result.archive_path))


@cli.command("verify")
@click.argument(
    "package_file",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
)
def verify_command(package_file: str) -> None:
    """Verifies a .deb package and prints its control information."""
    package_path = Path(package_file)
    click.echo(f"🔍 Verifying package '{package_path}'...")
    try:
        reader = DebReader(package_path)
        click.echo(reader.get_info())

        control = reader.control
        missing = [k for k in ("Package", "Version", "Architecture") if k not in control]
        if missing:
            raise VerificationError(f"Control file lacks fields: {', '.join(missing)}")
        expected_name = (
            f"{control['Package']}-{control['Version']}-linux-{control['Architecture']}.deb"
        )
        if package_path.name != expected_name:
            raise VerificationError(
                f"File name '{package_path.name}' does not match control data "
                f"(expected '{expected_name}')."
            )
    except VerificationError as e:
        click.secho(f"❌ Verification failed: {e}", fg="red", err=True)
        raise click.Abort() from e
    click.secho("✅ Package verification successful.", fg="green")


@cli.command("clean")
@click.option(
    "--manifest",
    "manifest_path",
    default="pyproject.toml",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to the TOML manifest holding the [tool.debpack] table.",
)
def clean_command(manifest_path: str) -> None:
    """Removes the working directory left behind by previous builds."""
    click.echo("🧹 Cleaning working directory...")
    try:
        manifest = Path(manifest_path)
        out_dir = read_manifest(manifest).get("directories", {}).get("out")
        if not out_dir:
            raise BuildError("No 'out' directory configured in [tool.debpack.directories].")
    except BuildError as e:
        click.secho(f"❌ Clean failed: {e}", fg="red", err=True)
        raise click.Abort() from e

    working_dir = (manifest.parent / out_dir / WORKING_DIR_NAME).resolve()
    if working_dir.exists():
        try:
            shutil.rmtree(working_dir)
        except OSError as e:
            click.secho(f"❌ Clean failed: {e}", fg="red", err=True)
            raise click.Abort() from e
        click.secho(f"✅ Removed working directory: {working_dir}", fg="green")
    else:
        click.secho("i️ Working directory not found, nothing to clean.", fg="yellow")


main = cli
