"""Host platform detection for the legacy default-shell alias."""

from __future__ import annotations

import platform as _platform
import sys

_MACHINE_ALIASES = {
    "arm64": "aarch64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "i386": "i686",
    "i586": "i686",
}

_OS_ALIASES = {
    "win32": "windows",
    "cygwin": "windows",
}


def current_platform(machine: str | None = None, system: str | None = None) -> str:
    """Return the ``<arch>-<os>`` identifier of the running host.

    >>> current_platform("arm64", "darwin")
    'aarch64-darwin'
    """
    arch = (machine or _platform.machine()).lower()
    os_name = (system or sys.platform).lower()
    if os_name.startswith("linux"):
        os_name = "linux"
    arch = _MACHINE_ALIASES.get(arch, arch)
    os_name = _OS_ALIASES.get(os_name, os_name)
    return f"{arch}-{os_name}"
