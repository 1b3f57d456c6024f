import pytest
from pathlib import Path
from unittest.mock import MagicMock

from ltex_launcher.config import LauncherConfig
from ltex_launcher.resolver import LanguageServerResolver
from ltex_launcher.servers import LTEX_LS_PLUS
from ltex_launcher.types import (
    Architecture,
    GithubRelease,
    LspSettings,
    Os,
    ReleaseAsset,
    Worktree,
)

VERSION = "18.2.0"
DOWNLOAD_BASE = "https://github.com/ltex-plus/ltex-ls-plus/releases/download"


def make_release(version: str = VERSION) -> GithubRelease:
    names = [
        f"ltex-ls-plus-{version}-linux-x64.tar.gz",
        f"ltex-ls-plus-{version}-linux-aarch64.tar.gz",
        f"ltex-ls-plus-{version}-mac-x64.tar.gz",
        f"ltex-ls-plus-{version}-mac-aarch64.tar.gz",
        f"ltex-ls-plus-{version}-windows-x64.zip",
    ]
    return GithubRelease(
        version=version,
        assets=[
            ReleaseAsset(name=name, download_url=f"{DOWNLOAD_BASE}/{version}/{name}")
            for name in names
        ],
    )


class FakeReleaseFetcher:
    """Returns a fixed release and records lookups"""

    def __init__(self, release: GithubRelease):
        self.release = release
        self.calls = []

    async def __call__(self, repo, options):
        self.calls.append((repo, options))
        return self.release


class FakeDownloader:
    """Unpacks a fake server layout the way the real archives do"""

    def __init__(self, tool: str = "ltex-ls-plus"):
        self.tool = tool
        self.calls = []

    async def __call__(self, url, dest_dir, kind):
        self.calls.append((url, dest_dir, kind))
        binary = dest_dir / dest_dir.name / "bin" / self.tool
        binary.parent.mkdir(parents=True, exist_ok=True)
        binary.write_text("#!/bin/sh\n")
        binary.chmod(0o755)


class StatusRecorder:
    def __init__(self):
        self.events = []

    def __call__(self, server_id, status):
        self.events.append((server_id, status))

    @property
    def statuses(self):
        return [status for _, status in self.events]


@pytest.fixture
def worktree(tmp_path) -> Worktree:
    root = tmp_path / "project"
    root.mkdir()
    return Worktree(root=root, env={"PATH": ""})


@pytest.fixture
def work_dir(tmp_path) -> Path:
    return tmp_path / "work"


@pytest.fixture
def release_fetcher():
    return FakeReleaseFetcher(make_release())


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def status_sink():
    return StatusRecorder()


@pytest.fixture
def make_resolver(work_dir, release_fetcher, downloader, status_sink):
    """Build a resolver whose collaborators never touch the network"""

    def _make(**overrides) -> LanguageServerResolver:
        collaborators = dict(
            settings_provider=lambda server_id, worktree: LspSettings(),
            search_path=MagicMock(return_value=None),
            release_fetcher=release_fetcher,
            downloader=downloader,
            platform_probe=lambda: (Os.LINUX, Architecture.X86_64),
            status_sink=status_sink,
        )
        collaborators.update(overrides)
        return LanguageServerResolver(LTEX_LS_PLUS, work_dir, **collaborators)

    return _make


@pytest.fixture
def launcher_config(tmp_path) -> LauncherConfig:
    return LauncherConfig(work_dir=tmp_path / "data")
