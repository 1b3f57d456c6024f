"""Known language server variants and their release layouts."""

from dataclasses import dataclass
from typing import Dict

from ltex_launcher.errors import UnknownLanguageServerError


@dataclass(frozen=True)
class LanguageServerConfig:
    """Release layout of one language server"""
    server_id: str
    command_name: str
    repo: str
    asset_template: str = "{tool}-{version}-{os}-{arch}.{suffix}"
    version_dir_template: str = "{tool}-{version}"
    binary_template: str = "{version_dir}/{version_dir}/bin/{tool}"

    def asset_name(self, version: str, os_tag: str, arch_tag: str, suffix: str) -> str:
        return self.asset_template.format(
            tool=self.command_name,
            version=version,
            os=os_tag,
            arch=arch_tag,
            suffix=suffix,
        )

    def version_dir(self, version: str) -> str:
        return self.version_dir_template.format(tool=self.command_name, version=version)

    def binary_path(self, version: str) -> str:
        """Binary location relative to the working directory."""
        return self.binary_template.format(
            version_dir=self.version_dir(version), tool=self.command_name
        )


LTEX_LS_PLUS = LanguageServerConfig(
    server_id="ltex-ls-plus",
    command_name="ltex-ls-plus",
    repo="ltex-plus/ltex-ls-plus",
)

LTEX_LS = LanguageServerConfig(
    server_id="ltex-ls",
    command_name="ltex-ls",
    repo="valentjn/ltex-ls",
)

LANGUAGE_SERVERS: Dict[str, LanguageServerConfig] = {
    LTEX_LS_PLUS.server_id: LTEX_LS_PLUS,
    LTEX_LS.server_id: LTEX_LS,
}


def get_server_config(server_id: str) -> LanguageServerConfig:
    try:
        return LANGUAGE_SERVERS[server_id]
    except KeyError:
        raise UnknownLanguageServerError(server_id) from None
