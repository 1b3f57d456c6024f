"""Tests for the MCP host adapter."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ltex_launcher.extension import LtexExtension
from ltex_launcher.server import handle_tool_call, init_server, tools
from ltex_launcher.types import Architecture, InstallationStatus, Os


@pytest.fixture
def extension(launcher_config, release_fetcher, downloader, status_sink):
    return LtexExtension(
        config=launcher_config,
        search_path=MagicMock(return_value="/usr/bin/ltex-ls-plus"),
        release_fetcher=release_fetcher,
        downloader=downloader,
        platform_probe=lambda: (Os.LINUX, Architecture.X86_64),
        status_sink=status_sink,
    )


def test_tool_definitions():
    assert [t.name for t in tools] == [
        "language_server_command",
        "language_server_initialization_options",
        "language_server_workspace_configuration",
    ]
    for tool in tools:
        assert tool.inputSchema["required"] == ["server_id", "worktree"]


@pytest.mark.asyncio
async def test_init_server(extension):
    server = await init_server(extension)
    assert server.name == "ltex-launcher"


@pytest.mark.asyncio
async def test_command_tool(extension, worktree):
    result = await handle_tool_call(
        extension,
        "language_server_command",
        {"server_id": "ltex-ls-plus", "worktree": str(worktree.root)},
    )

    assert result == {
        "success": True,
        "data": {"command": "/usr/bin/ltex-ls-plus", "args": [], "env": {}},
    }
    json.dumps(result)


@pytest.mark.asyncio
async def test_configuration_tools(extension, worktree):
    settings = worktree.root / ".ltex" / "settings.json"
    settings.parent.mkdir()
    settings.write_text(json.dumps({
        "lsp": {"ltex-ls-plus": {"initialization_options": {"a": 1}, "settings": {"b": 2}}}
    }))
    arguments = {"server_id": "ltex-ls-plus", "worktree": str(worktree.root)}

    init = await handle_tool_call(extension, "language_server_initialization_options", arguments)
    workspace = await handle_tool_call(extension, "language_server_workspace_configuration", arguments)

    assert init == {"success": True, "data": {"a": 1}}
    assert workspace == {"success": True, "data": {"b": 2}}


@pytest.mark.asyncio
async def test_resolution_error_payload(extension, worktree):
    result = await handle_tool_call(
        extension,
        "language_server_command",
        {"server_id": "vale-ls", "worktree": str(worktree.root)},
    )

    assert result["success"] is False
    assert result["error"] == "Unknown language server: vale-ls"
    assert result["details"] == {"server_id": "vale-ls"}
    assert isinstance(result["code"], int)


@pytest.mark.asyncio
async def test_missing_argument(extension):
    result = await handle_tool_call(extension, "language_server_command", {"server_id": "ltex-ls-plus"})

    assert result == {"success": False, "error": "Missing argument: worktree"}


@pytest.mark.asyncio
async def test_unknown_tool(extension, worktree):
    result = await handle_tool_call(
        extension, "restart", {"server_id": "ltex-ls-plus", "worktree": str(worktree.root)}
    )

    assert result == {"success": False, "error": "Unknown tool: restart"}


@pytest.mark.asyncio
async def test_download_timeout_payload(launcher_config, worktree, release_fetcher, status_sink):
    """A stalled download reaches the host as a structured failure"""
    extension = LtexExtension(
        config=launcher_config,
        search_path=MagicMock(return_value=None),
        release_fetcher=release_fetcher,
        platform_probe=lambda: (Os.LINUX, Architecture.X86_64),
        status_sink=status_sink,
    )
    request = MagicMock()
    request.__aenter__ = AsyncMock(side_effect=asyncio.TimeoutError())
    request.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    session.get = MagicMock(return_value=request)

    with patch("aiohttp.ClientSession", return_value=session):
        result = await handle_tool_call(
            extension,
            "language_server_command",
            {"server_id": "ltex-ls-plus", "worktree": str(worktree.root)},
        )

    assert result["success"] is False
    assert result["error"] == "failed to download file: TimeoutError"
    assert status_sink.statuses[-1] == InstallationStatus.FAILED
