"""
Builds Debian (.deb) installer packages from a pre-built distribution tree
by staging the payload, generating DEBIAN metadata and driving `dpkg-deb`.
"""

from .models import (
    DEFAULT_PACKAGE_METADATA,
    BuildConfiguration,
    BuildResult,
    DirectoryInfo,
    PackageIdentity,
    PackageMetadata,
)
from .packaging.orchestrator import BuildOrchestrator, BuildState

__all__ = [
    "DEFAULT_PACKAGE_METADATA",
    "BuildConfiguration",
    "BuildOrchestrator",
    "BuildResult",
    "BuildState",
    "DirectoryInfo",
    "PackageIdentity",
    "PackageMetadata",
]
