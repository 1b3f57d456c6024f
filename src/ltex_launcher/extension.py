"""Host-facing language server extension."""

import logging
from functools import partial
from typing import Any, Dict, Optional

from ltex_launcher.binaries.releases import latest_github_release
from ltex_launcher.config import LauncherConfig, load_config
from ltex_launcher.errors import ResolutionError, log_error
from ltex_launcher.logging import get_logger, log_with_data
from ltex_launcher.resolver import LanguageServerResolver, SettingsProvider
from ltex_launcher.servers import get_server_config
from ltex_launcher.settings import load_lsp_settings
from ltex_launcher.types import Command, InstallationStatus, LspSettings, Worktree

logger = get_logger(__name__)


class LtexExtension:
    """Builds launch commands and settings passthroughs for LTeX servers.

    One resolver is kept per server id, each owning its own subdirectory
    of the configured working directory. Extra keyword arguments are
    handed to every resolver and replace its default collaborators.
    """

    def __init__(
        self,
        config: Optional[LauncherConfig] = None,
        settings_provider: Optional[SettingsProvider] = None,
        **collaborators: Any,
    ):
        self.config = config or load_config()
        self.settings_provider = settings_provider or partial(
            load_lsp_settings, settings_file=self.config.settings_file
        )
        collaborators.setdefault(
            "release_fetcher",
            partial(
                latest_github_release,
                api_base=self.config.github_api,
                token=self.config.github_token,
            ),
        )
        self.collaborators = collaborators
        self.resolvers: Dict[str, LanguageServerResolver] = {}

    def resolver_for(self, server_id: str) -> LanguageServerResolver:
        if server_id not in self.resolvers:
            server = get_server_config(server_id)
            self.resolvers[server_id] = LanguageServerResolver(
                server,
                self.config.work_dir / server.server_id,
                settings_provider=self.settings_provider,
                **self.collaborators,
            )
        return self.resolvers[server_id]

    async def language_server_command(self, server_id: str, worktree: Worktree) -> Command:
        resolver = self.resolver_for(server_id)
        try:
            binary = await resolver.resolve(server_id, worktree)
        except ResolutionError as e:
            resolver.status_sink(server_id, InstallationStatus.FAILED)
            log_error(e, {"server_id": server_id, "worktree": str(worktree.root)}, logger)
            raise

        return Command(command=binary.path, args=list(binary.arguments or []), env={})

    def _settings_or_default(self, server_id: str, worktree: Worktree) -> LspSettings:
        try:
            return self.settings_provider(server_id, worktree)
        except ResolutionError as e:
            log_with_data(logger, logging.WARNING, "Ignoring unreadable settings", {
                "server_id": server_id,
                "error": str(e),
            })
            return LspSettings()

    def language_server_initialization_options(self, server_id: str, worktree: Worktree) -> Any:
        return self._settings_or_default(server_id, worktree).initialization_options

    def language_server_workspace_configuration(self, server_id: str, worktree: Worktree) -> Any:
        return self._settings_or_default(server_id, worktree).settings
