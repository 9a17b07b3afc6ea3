"""Detection of the Debian architecture of the packaging machine."""

from collections.abc import Sequence

from pyvider.telemetry import logger

from ..exceptions import ArchitectureDetectionError, ToolNotFoundError
from ..tools import run_command

ARCHITECTURE_QUERY: tuple[str, ...] = ("dpkg-architecture", "-qDEB_BUILD_ARCH")


def detect_architecture(command: Sequence[str] = ARCHITECTURE_QUERY) -> str:
    try:
        result = run_command(list(command))
    except (ToolNotFoundError, OSError) as e:
        logger.error("Can't detect package architecture.")
        raise ArchitectureDetectionError(
            f"Undetectable architecture. Packaging failed: {e}"
        ) from e

    architecture = result.stdout.strip() if result.returncode == 0 else ""
    if not architecture:
        logger.error(
            "Can't detect package architecture.",
            exit_code=result.returncode,
            stderr=result.stderr.strip(),
        )
        raise ArchitectureDetectionError(
            "Undetectable architecture. Packaging failed."
        )
    if any(c.isspace() for c in architecture):
        logger.error("Unexpected architecture query output.", output=architecture)
        raise ArchitectureDetectionError(
            f"Expected a single architecture name, got {architecture!r}. Packaging failed."
        )
    return architecture
