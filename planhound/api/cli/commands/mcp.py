"""MCP command: run the stdio MCP server."""

import argparse

from planhound.core.config.config import Config


async def mcp_command(args: argparse.Namespace, config: Config) -> None:
    # Importing the server silences all logging; stdout belongs to JSON-RPC
    from planhound.mcp_server.stdio import StdioMCPServer

    server = StdioMCPServer(config)
    await server.run()
