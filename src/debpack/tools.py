"""
Lookup and execution of the external Debian tools the packager drives.
"""

from pathlib import Path
import shutil
import subprocess

from pyvider.telemetry import logger

from .exceptions import ToolNotFoundError


def require_tool(tool_name: str) -> Path:
    """Returns the resolved path of an executable, or raises if it is not on PATH."""
    resolved = shutil.which(tool_name)
    if not resolved:
        raise ToolNotFoundError(
            f"'{tool_name}' not found in PATH. Please install dpkg-dev."
        )
    return Path(resolved)


def run_command(
    command: list[str], cwd: Path | str | None = None
) -> subprocess.CompletedProcess[str]:
    """
    Runs a command with captured text output and returns the completed process.

    A non-zero exit status is not an error here; callers decide what it means.
    """
    executable = require_tool(command[0])
    logger.info(f"Running command: {' '.join(command)}")
    result = subprocess.run(
        [str(executable), *command[1:]],
        capture_output=True,
        text=True,
        cwd=cwd,
        check=False,
    )
    if result.stderr:
        logger.debug("Command stderr", output=result.stderr.strip())
    return result
