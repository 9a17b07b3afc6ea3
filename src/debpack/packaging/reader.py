"""Python-based reader for .deb package metadata."""

import io
from pathlib import Path
import tarfile

from ..exceptions import InvalidPackageError
from ..models import CONTROL_DIR_NAME

AR_MAGIC = b"!<arch>\n"
AR_HEADER_SIZE = 60
AR_HEADER_END = b"`\n"
DEBIAN_BINARY_MEMBER = "debian-binary"


def parse_control(text: str) -> dict[str, str]:
    """Parses a single control stanza, folding continuation lines into their field."""
    fields: dict[str, str] = {}
    current: str | None = None
    for line in text.splitlines():
        if not line.strip():
            continue
        if line[0] in " \t":
            if current is None:
                raise InvalidPackageError(f"Continuation line without a field: {line!r}")
            fields[current] += "\n" + line.strip()
            continue
        name, sep, value = line.partition(":")
        if not sep:
            raise InvalidPackageError(f"Malformed control line: {line!r}")
        current = name.strip()
        fields[current] = value.strip()
    return fields


class DebReader:
    """Reads the ar container of a .deb file and the control file inside it."""

    def __init__(self, package_path: Path) -> None:
        if not package_path.is_file():
            raise FileNotFoundError(f"Package not found at: {package_path}")
        self.package_path = package_path
        self.members = self._read_members()
        self.control = parse_control(self._read_control_text())

    def _read_members(self) -> dict[str, bytes]:
        data = self.package_path.read_bytes()
        if not data.startswith(AR_MAGIC):
            raise InvalidPackageError(
                f"Invalid ar archive magic. Found {data[: len(AR_MAGIC)]!r}."
            )

        members: dict[str, bytes] = {}
        offset = len(AR_MAGIC)
        while offset < len(data):
            header = data[offset : offset + AR_HEADER_SIZE]
            if len(header) != AR_HEADER_SIZE or header[58:60] != AR_HEADER_END:
                raise InvalidPackageError(f"Truncated ar member header at offset {offset}.")
            name = header[0:16].decode("ascii", errors="replace").strip().rstrip("/")
            try:
                size = int(header[48:58].decode("ascii", errors="replace").strip())
            except ValueError as e:
                raise InvalidPackageError(f"Invalid size for ar member '{name}'.") from e
            start = offset + AR_HEADER_SIZE
            body = data[start : start + size]
            if len(body) != size:
                raise InvalidPackageError(f"Truncated ar member '{name}'.")
            members[name] = body
            offset = start + size + (size % 2)

        names = list(members)
        if not names or names[0] != DEBIAN_BINARY_MEMBER:
            raise InvalidPackageError("First archive member must be 'debian-binary'.")
        for prefix in ("control.tar", "data.tar"):
            if not any(n.startswith(prefix) for n in names):
                raise InvalidPackageError(f"Archive has no '{prefix}*' member.")
        return members

    @property
    def format_version(self) -> str:
        return self.members[DEBIAN_BINARY_MEMBER].decode("ascii").strip()

    def _read_control_text(self) -> str:
        name = next(n for n in self.members if n.startswith("control.tar"))
        try:
            with tarfile.open(fileobj=io.BytesIO(self.members[name]), mode="r:*") as tar:
                for member in tar.getmembers():
                    if member.isfile() and Path(member.name).parts[-1:] == ("control",):
                        extracted = tar.extractfile(member)
                        if extracted is not None:
                            return extracted.read().decode("utf-8")
        except tarfile.TarError as e:
            raise InvalidPackageError(f"Unreadable control archive '{name}': {e}") from e
        raise InvalidPackageError(f"No {CONTROL_DIR_NAME}/control file in '{name}'.")

    def get_info(self) -> str:
        """Returns a human-readable string of the package information."""
        c = self.control
        return (
            f"Debian Package Information (parsed by Python):\n"
            f"  Format Version: {self.format_version}\n"
            f"  Members: {', '.join(self.members)}\n"
            f"  Package: {c.get('Package', '?')}\n"
            f"  Version: {c.get('Version', '?')}\n"
            f"  Architecture: {c.get('Architecture', '?')}\n"
            f"  Installed-Size: {c.get('Installed-Size', '?')} KiB"
        )
