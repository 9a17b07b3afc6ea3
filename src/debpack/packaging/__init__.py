"""
The `packaging` sub-package contains the steps that turn a distribution tree
into a .deb archive.

This includes:
- Detecting the target architecture and staging the payload.
- Computing Installed-Size and rendering the DEBIAN metadata files.
- Orchestrating `dpkg-deb` and reading the produced archive back.
"""
