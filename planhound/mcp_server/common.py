"""Protocol-independent tool call handling for MCP servers."""

import argparse
import json
from typing import Any

import mcp.types as types

from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.config.compression_config import CompressionConfig
from planhound.core.config.index_config import IndexConfig
from planhound.core.exceptions import PlanHoundError, PlanValidationError
from planhound.mcp_server.tools import execute_tool
from planhound.services.factory import PlanHoundServices


def format_tool_error(error: Exception) -> dict[str, Any]:
    """JSON payload returned to the client instead of a protocol error."""
    payload: dict[str, Any] = {"error": str(error), "type": type(error).__name__}
    if isinstance(error, PlanValidationError):
        payload["errors"] = error.errors
    return payload


async def handle_tool_call(
    tool_name: str,
    arguments: dict[str, Any],
    services: PlanHoundServices | None,
) -> list[types.TextContent]:
    """Run a registry tool and wrap its result as MCP text content.

    Failures are reported as ``{"error": ...}`` payloads so one bad call
    never takes the server down.
    """
    try:
        result = await execute_tool(tool_name, services, arguments or {})
    except (PlanHoundError, ValueError, KeyError, TypeError) as e:
        result = format_tool_error(e)
    return [types.TextContent(type="text", text=json.dumps(result, indent=2, default=str))]


def add_common_mcp_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every MCP transport."""
    IndexConfig.add_cli_arguments(parser)
    ChunkingConfig.add_cli_arguments(parser)
    CompressionConfig.add_cli_arguments(parser)
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug mode"
    )
