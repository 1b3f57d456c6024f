"""Resolve, install and launch LTeX language servers."""

__version__ = "0.1.0"

from ltex_launcher.types import (
    BinaryDescriptor,
    Command,
    InstallationStatus,
    Worktree,
)
from ltex_launcher.resolver import LanguageServerResolver
from ltex_launcher.extension import LtexExtension
from ltex_launcher.errors import (
    ResolutionError,
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
    AssetNotFoundError,
    NetworkOrFilesystemError,
    SettingsError,
    UnknownLanguageServerError,
)

__all__ = [
    "BinaryDescriptor",
    "Command",
    "InstallationStatus",
    "Worktree",
    "LanguageServerResolver",
    "LtexExtension",
    "ResolutionError",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
    "AssetNotFoundError",
    "NetworkOrFilesystemError",
    "SettingsError",
    "UnknownLanguageServerError",
]
