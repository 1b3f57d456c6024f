"""MCP server exposing the extension to a host."""
import asyncio
import json
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import stdio
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions

from ltex_launcher import __version__
from ltex_launcher.config import load_config
from ltex_launcher.errors import ResolutionError
from ltex_launcher.extension import LtexExtension
from ltex_launcher.logging import configure_logging, get_logger
from ltex_launcher.worktrees import create_worktree

logger = get_logger("server")

TOOL_INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "server_id": {"type": "string", "description": "Language server identifier"},
        "worktree": {"type": "string", "description": "Worktree root directory"},
    },
    "required": ["server_id", "worktree"],
}

tools = [
    types.Tool(
        name="language_server_command",
        description="Resolve (downloading if needed) the command that launches a language server",
        inputSchema=TOOL_INPUT_SCHEMA,
    ),
    types.Tool(
        name="language_server_initialization_options",
        description="Get the configured initialization options for a language server",
        inputSchema=TOOL_INPUT_SCHEMA,
    ),
    types.Tool(
        name="language_server_workspace_configuration",
        description="Get the configured workspace configuration for a language server",
        inputSchema=TOOL_INPUT_SCHEMA,
    ),
]


async def handle_tool_call(
    extension: LtexExtension, name: str, arguments: Dict[str, Any]
) -> Dict[str, Any]:
    """Run one tool and build its JSON result."""
    try:
        server_id = arguments["server_id"]
        worktree = create_worktree(arguments["worktree"])

        if name == "language_server_command":
            command = await extension.language_server_command(server_id, worktree)
            return {"success": True, "data": asdict(command)}

        elif name == "language_server_initialization_options":
            return {
                "success": True,
                "data": extension.language_server_initialization_options(server_id, worktree),
            }

        elif name == "language_server_workspace_configuration":
            return {
                "success": True,
                "data": extension.language_server_workspace_configuration(server_id, worktree),
            }

        return {"success": False, "error": f"Unknown tool: {name}"}

    except KeyError as e:
        return {"success": False, "error": f"Missing argument: {e.args[0]}"}
    except ResolutionError as e:
        return {"success": False, "error": str(e), "code": e.code, "details": e.details}


async def init_server(extension: Optional[LtexExtension] = None) -> Server:
    extension = extension or LtexExtension()
    logger.info(f"Registered tools: {', '.join(t.name for t in tools)}")

    server = Server("ltex-launcher")

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("Tools requested")
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        logger.debug(f"Tool call received: {name} with arguments {arguments}")
        result = await handle_tool_call(extension, name, arguments)
        return [types.TextContent(type="text", text=json.dumps(result))]

    return server


async def serve() -> None:
    config = load_config()
    configure_logging(config.log_level)
    logger.info("Starting language server launcher")
    server = await init_server(LtexExtension(config))
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name="ltex-launcher",
            server_version=__version__,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
