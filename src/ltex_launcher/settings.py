"""Worktree-scoped language server settings."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ltex_launcher.config import DEFAULT_SETTINGS_FILE
from ltex_launcher.errors import SettingsError
from ltex_launcher.logging import get_logger, log_with_data
from ltex_launcher.types import BinarySettings, LspSettings, Worktree

logger = get_logger(__name__)


def read_settings_file(path: Path) -> Dict[str, Any]:
    """Read a JSON settings file, treating a missing file as empty."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SettingsError(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise SettingsError(str(path), "top-level value must be an object")
    return data


def parse_binary_settings(data: Any, source: str) -> BinarySettings:
    if not isinstance(data, dict):
        raise SettingsError(source, "`binary` must be an object")

    path = data.get("path")
    if path is not None and not isinstance(path, str):
        raise SettingsError(source, "`binary.path` must be a string")

    arguments = data.get("arguments")
    if arguments is not None:
        if not isinstance(arguments, list) or not all(isinstance(a, str) for a in arguments):
            raise SettingsError(source, "`binary.arguments` must be a list of strings")

    return BinarySettings(path=path, arguments=arguments)


def load_lsp_settings(
    server_id: str,
    worktree: Worktree,
    settings_file: str = DEFAULT_SETTINGS_FILE,
) -> LspSettings:
    """Load settings for one language server from the worktree settings file.

    Settings live under ``lsp.<server_id>`` with optional ``binary``,
    ``initialization_options`` and ``settings`` keys.
    """
    path = Path(worktree.root) / settings_file
    data = read_settings_file(path)

    lsp = data.get("lsp", {})
    if not isinstance(lsp, dict):
        raise SettingsError(str(path), "`lsp` must be an object")

    server = lsp.get(server_id)
    if server is None:
        return LspSettings()
    if not isinstance(server, dict):
        raise SettingsError(str(path), f"`lsp.{server_id}` must be an object")

    binary = server.get("binary")
    settings = LspSettings(
        binary=parse_binary_settings(binary, str(path)) if binary is not None else None,
        initialization_options=server.get("initialization_options"),
        settings=server.get("settings"),
    )

    log_with_data(logger, logging.DEBUG, "Loaded language server settings", {
        "server_id": server_id,
        "path": str(path),
        "has_binary": settings.binary is not None,
    })
    return settings
