"""MCP command argument parser for PlanHound CLI."""

import argparse
from typing import Any, cast

from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.config.compression_config import CompressionConfig
from planhound.core.config.index_config import IndexConfig


def add_mcp_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "mcp",
        help="Run the MCP server over stdio",
        description="Serve plan compression and chunking tools to MCP clients over stdio.",
    )

    IndexConfig.add_cli_arguments(parser)
    ChunkingConfig.add_cli_arguments(parser)
    CompressionConfig.add_cli_arguments(parser)

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_mcp_subparser"]
