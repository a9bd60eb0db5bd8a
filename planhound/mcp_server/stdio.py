"""Stdio MCP server.

CRITICAL: NO stdout output allowed - breaks JSON-RPC protocol
"""

import argparse
import asyncio
import logging
import sys
from typing import Any

import mcp.server.stdio
import mcp.types as types
from loguru import logger as loguru_logger
from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions

from planhound.core.config.config import Config
from planhound.mcp_server.common import add_common_mcp_arguments, handle_tool_call
from planhound.mcp_server.tools import TOOL_REGISTRY
from planhound.services.factory import PlanHoundServices, create_services
from planhound.version import __version__

SERVER_NAME = "PlanHound Plan Compression"

# CRITICAL: Disable ALL logging to prevent JSON-RPC corruption
logging.disable(logging.CRITICAL)
for logger_name in ["", "mcp", "server"]:
    logging.getLogger(logger_name).setLevel(logging.CRITICAL + 1)

loguru_logger.remove()
loguru_logger.add(lambda _: None, level="CRITICAL")


class StdioMCPServer:
    """MCP server speaking JSON-RPC over stdin/stdout."""

    def __init__(self, config: Config, services: PlanHoundServices | None = None):
        """Initialize stdio MCP server.

        Args:
            config: Validated configuration object
            services: Prebuilt services; created from ``config`` when omitted
        """
        self.config = config
        self.services = services or create_services(config)
        self.server: Server = Server(SERVER_NAME)
        self._register_tools()

    def _register_tools(self) -> None:
        """Register tool handlers with the stdio server."""

        # The MCP SDK's call_tool decorator expects a SINGLE handler function
        # with signature (tool_name: str, arguments: dict) that handles ALL tools
        @self.server.call_tool()  # type: ignore[misc]
        async def handle_all_tools(
            tool_name: str, arguments: dict[str, Any]
        ) -> list[types.TextContent]:
            return await handle_tool_call(
                tool_name=tool_name,
                arguments=arguments,
                services=self.services,
            )

        @self.server.list_tools()  # type: ignore[misc]
        async def list_tools() -> list[types.Tool]:
            return [
                types.Tool(
                    name=tool_name,
                    description=tool.description,
                    inputSchema=tool.parameters,
                )
                for tool_name, tool in TOOL_REGISTRY.items()
            ]

    async def run(self) -> None:
        """Run the stdio server until the client disconnects."""
        init_options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=__version__,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, init_options)


async def main(args: Any = None) -> None:
    """Main entry point for the MCP stdio server.

    Args:
        args: Pre-parsed arguments. If None, will parse from sys.argv.
    """
    if args is None:
        parser = argparse.ArgumentParser(
            description="PlanHound MCP stdio server",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        add_common_mcp_arguments(parser)
        args = parser.parse_args()

    config = Config.load(args)

    try:
        server = StdioMCPServer(config)
        await server.run()
    except Exception:
        # CRITICAL: Cannot print to stderr in MCP mode - breaks JSON-RPC protocol
        sys.exit(1)


def main_sync() -> None:
    """Synchronous wrapper for CLI entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
