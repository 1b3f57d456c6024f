"""Language server binary resolution."""

import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Tuple

from ltex_launcher.binaries.cache import is_file, remove_stale_entries
from ltex_launcher.binaries.fetcher import download_and_extract
from ltex_launcher.binaries.platforms import current_platform, get_arch_tag, get_platform_mapping
from ltex_launcher.binaries.releases import latest_github_release
from ltex_launcher.errors import AssetNotFoundError, NetworkOrFilesystemError
from ltex_launcher.logging import get_logger, log_with_data
from ltex_launcher.servers import LanguageServerConfig
from ltex_launcher.settings import load_lsp_settings
from ltex_launcher.types import (
    Architecture,
    ArchiveKind,
    BinaryDescriptor,
    CleanupWarning,
    GithubRelease,
    GithubReleaseOptions,
    InstallationStatus,
    LspSettings,
    Os,
    Worktree,
)
from ltex_launcher.worktrees import which

logger = get_logger(__name__)

SettingsProvider = Callable[[str, Worktree], LspSettings]
SearchPathLookup = Callable[[Worktree, str], Optional[str]]
ReleaseFetcher = Callable[[str, GithubReleaseOptions], Awaitable[GithubRelease]]
Downloader = Callable[[str, Path, ArchiveKind], Awaitable[None]]
PlatformProbe = Callable[[], Tuple[Os, Architecture]]
StatusSink = Callable[[str, InstallationStatus], None]


def log_installation_status(server_id: str, status: InstallationStatus) -> None:
    """Default status sink."""
    log_with_data(logger, logging.INFO, "Installation status changed", {
        "server_id": server_id,
        "status": status.value,
    })


class LanguageServerResolver:
    """Resolves the executable for one language server.

    Precedence is: configured binary path, search path, cached download,
    fresh download. Downloads are unpacked into ``work_dir``, which the
    resolver owns outright: stale entries are removed after each install.
    """

    def __init__(
        self,
        server: LanguageServerConfig,
        work_dir: Path,
        settings_provider: SettingsProvider = load_lsp_settings,
        search_path: SearchPathLookup = which,
        release_fetcher: ReleaseFetcher = latest_github_release,
        downloader: Downloader = download_and_extract,
        platform_probe: PlatformProbe = current_platform,
        status_sink: StatusSink = log_installation_status,
    ):
        self.server = server
        self.work_dir = Path(work_dir).absolute()
        self.settings_provider = settings_provider
        self.search_path = search_path
        self.release_fetcher = release_fetcher
        self.downloader = downloader
        self.platform_probe = platform_probe
        self.status_sink = status_sink

        self.cached_binary: Optional[BinaryDescriptor] = None
        self.last_cleanup_warnings: List[CleanupWarning] = []

    async def resolve(self, server_id: str, worktree: Worktree) -> BinaryDescriptor:
        lsp_settings = self.settings_provider(server_id, worktree)
        if lsp_settings.binary is not None and lsp_settings.binary.path is not None:
            log_with_data(logger, logging.DEBUG, "Using configured binary", {
                "server_id": server_id,
                "path": lsp_settings.binary.path,
            })
            return BinaryDescriptor(
                path=lsp_settings.binary.path,
                arguments=lsp_settings.binary.arguments,
            )

        path = self.search_path(worktree, self.server.command_name)
        if path:
            log_with_data(logger, logging.DEBUG, "Using binary from search path", {
                "server_id": server_id,
                "path": path,
            })
            return BinaryDescriptor(path=path, arguments=[])

        if self.cached_binary is not None and is_file(self.cached_binary.path):
            log_with_data(logger, logging.DEBUG, "Using cached binary", {
                "server_id": server_id,
                "path": self.cached_binary.path,
            })
            return self.cached_binary

        return await self.download_language_server(server_id)

    async def download_language_server(self, server_id: str) -> BinaryDescriptor:
        """Install the latest release into the working directory."""
        tool = self.server.command_name
        self.status_sink(server_id, InstallationStatus.CHECKING_FOR_UPDATE)

        os_, arch = self.platform_probe()
        mapping = get_platform_mapping(os_)
        arch_tag = get_arch_tag(arch, tool)

        release = await self.release_fetcher(
            self.server.repo,
            GithubReleaseOptions(require_assets=True, pre_release=False),
        )
        version = release.version

        asset_name = self.server.asset_name(
            version, mapping.asset_os, arch_tag, mapping.archive_suffix
        )
        asset = next((a for a in release.assets if a.name == asset_name), None)
        if asset is None:
            raise AssetNotFoundError(asset_name, version)

        version_dir = self.server.version_dir(version)
        binary_path = self.work_dir / self.server.binary_path(version)

        if not is_file(str(binary_path)):
            self.status_sink(server_id, InstallationStatus.DOWNLOADING)
            log_with_data(logger, logging.INFO, "Downloading language server", {
                "server_id": server_id,
                "version": version,
                "asset": asset_name,
                "url": asset.download_url,
            })

            try:
                self.work_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise NetworkOrFilesystemError(
                    f"failed to create working directory {e}",
                    details={"work_dir": str(self.work_dir)}
                ) from e

            await self.downloader(
                asset.download_url, self.work_dir / version_dir, mapping.archive_kind
            )
            self.last_cleanup_warnings = remove_stale_entries(self.work_dir, version_dir)

            if not is_file(str(binary_path)):
                raise NetworkOrFilesystemError(
                    f"downloaded archive did not contain {self.server.binary_path(version)}",
                    details={"asset": asset_name, "version": version}
                )

        self.status_sink(server_id, InstallationStatus.NONE)

        binary = BinaryDescriptor(path=str(binary_path), arguments=[])
        self.cached_binary = binary
        log_with_data(logger, logging.INFO, "Language server ready", {
            "server_id": server_id,
            "version": version,
            "path": binary.path,
        })
        return binary
