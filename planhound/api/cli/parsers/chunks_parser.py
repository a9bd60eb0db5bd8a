"""Chunks command argument parser for PlanHound CLI."""

import argparse
from pathlib import Path
from typing import Any, cast

from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.config.index_config import IndexConfig


def add_chunks_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "chunks",
        help="Get code chunks for a plan scope or step",
        description=(
            "Resolve a scope (or the scope of a step) against the workspace and "
            "split it into bounded code chunks."
        ),
    )

    parser.add_argument(
        "plan",
        type=Path,
        help="Path to a TaskPlan JSON file ('-' reads stdin)",
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--scope", metavar="SCOPE_ID", help="Scope ID to chunk")
    target.add_argument("--step", metavar="STEP_ID", help="Step ID whose scope is chunked")

    IndexConfig.add_cli_arguments(parser)
    ChunkingConfig.add_cli_arguments(parser)

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_chunks_subparser"]
