"""Compress command argument parser for PlanHound CLI."""

import argparse
from pathlib import Path
from typing import Any, cast

from planhound.core.config.compression_config import CompressionConfig


def add_compress_subparser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "compress",
        help="Validate and compress a task plan",
        description=(
            "Correct step levels, repair scopes, merge execution steps and "
            "truncate a task plan to the given limits."
        ),
    )

    parser.add_argument(
        "plan",
        type=Path,
        help="Path to a TaskPlan JSON file ('-' reads stdin)",
    )

    CompressionConfig.add_cli_arguments(parser)

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )
    output.add_argument(
        "--compact",
        action="store_true",
        help="Print only the compact text form of the compressed plan",
    )

    return cast(argparse.ArgumentParser, parser)


__all__: list[str] = ["add_compress_subparser"]
