"""Core type definitions"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

Os = Enum("Os", ["MAC", "LINUX", "WINDOWS"])
Architecture = Enum("Architecture", ["AARCH64", "X86_64", "X86"])
ArchiveKind = Enum("ArchiveKind", ["ZIP", "GZIP_TAR"])


class InstallationStatus(Enum):
    """Coarse progress signal shown by the host while a server is installed"""

    NONE = "none"
    CHECKING_FOR_UPDATE = "checking_for_update"
    DOWNLOADING = "downloading"
    FAILED = "failed"


@dataclass(frozen=True)
class Worktree:
    """Project directory scope used to look up settings and binaries"""

    root: Path
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BinaryDescriptor:
    """Fully resolved language server executable"""

    path: str
    arguments: Optional[List[str]] = None


@dataclass(frozen=True)
class Command:
    """Process launch description handed to the host"""

    command: str
    args: List[str]
    env: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BinarySettings:
    path: Optional[str] = None
    arguments: Optional[List[str]] = None


@dataclass(frozen=True)
class LspSettings:
    """Worktree-scoped settings for one language server"""

    binary: Optional[BinarySettings] = None
    initialization_options: Optional[Any] = None
    settings: Optional[Any] = None


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    download_url: str


@dataclass(frozen=True)
class GithubRelease:
    version: str
    assets: List[ReleaseAsset]


@dataclass(frozen=True)
class GithubReleaseOptions:
    require_assets: bool = True
    pre_release: bool = False


@dataclass(frozen=True)
class CleanupWarning:
    """Stale install entry that could not be removed"""

    path: Path
    error: str
