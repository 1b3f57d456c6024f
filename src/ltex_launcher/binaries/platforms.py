"""Platform detection and mapping."""
import platform
from typing import Dict, NamedTuple, Optional, Tuple

from ltex_launcher.errors import UnsupportedArchitectureError, UnsupportedPlatformError
from ltex_launcher.types import Architecture, ArchiveKind, Os


class PlatformMapping(NamedTuple):
    """Platform-specific release values."""
    asset_os: str
    archive_kind: ArchiveKind
    archive_suffix: str


PLATFORM_MAPPINGS: Dict[Os, PlatformMapping] = {
    Os.MAC: PlatformMapping(
        asset_os="mac",
        archive_kind=ArchiveKind.GZIP_TAR,
        archive_suffix="tar.gz",
    ),
    Os.LINUX: PlatformMapping(
        asset_os="linux",
        archive_kind=ArchiveKind.GZIP_TAR,
        archive_suffix="tar.gz",
    ),
    Os.WINDOWS: PlatformMapping(
        asset_os="windows",
        archive_kind=ArchiveKind.ZIP,
        archive_suffix="zip",
    ),
}

# None marks architectures with no published assets
ARCH_MAPPINGS: Dict[Architecture, Optional[str]] = {
    Architecture.AARCH64: "aarch64",
    Architecture.X86_64: "x64",
    Architecture.X86: None,
}

SYSTEM_NAMES = {
    "Darwin": Os.MAC,
    "Linux": Os.LINUX,
    "Windows": Os.WINDOWS,
}

MACHINE_NAMES = {
    "arm64": Architecture.AARCH64,
    "aarch64": Architecture.AARCH64,
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "x64": Architecture.X86_64,
    "i386": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
}


def current_platform() -> Tuple[Os, Architecture]:
    """Get the current operating system and CPU architecture."""
    system = platform.system()
    machine = platform.machine().lower()

    if system not in SYSTEM_NAMES:
        raise UnsupportedPlatformError(system)

    if machine not in MACHINE_NAMES:
        raise UnsupportedPlatformError(system, machine)

    return SYSTEM_NAMES[system], MACHINE_NAMES[machine]


def get_platform_mapping(os_: Os) -> PlatformMapping:
    return PLATFORM_MAPPINGS[os_]


def get_arch_tag(arch: Architecture, tool: str) -> str:
    """Get the asset architecture tag, rejecting unsupported architectures."""
    tag = ARCH_MAPPINGS[arch]
    if tag is None:
        raise UnsupportedArchitectureError(arch.name.lower(), tool)
    return tag
