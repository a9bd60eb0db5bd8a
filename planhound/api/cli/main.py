"""PlanHound command line entry point."""

import argparse
import asyncio
import sys

from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from planhound.api.cli.parsers.chunks_parser import add_chunks_subparser
from planhound.api.cli.parsers.compress_parser import add_compress_subparser
from planhound.api.cli.parsers.mcp_parser import add_mcp_subparser
from planhound.core.config.config import Config
from planhound.core.exceptions import PlanHoundError, PlanValidationError
from planhound.version import __version__


def setup_logging(verbose: bool = False) -> None:
    """Route loguru to stderr; stdout is reserved for command output."""
    logger.remove()
    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        )
    else:
        logger.add(
            sys.stderr,
            level="WARNING",
            format="<level>{level}</level>: {message}",
        )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planhound",
        description="Compress task plans and chunk code for LLM coding agents",
    )
    parser.add_argument("--version", action="version", version=f"planhound {__version__}")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    add_compress_subparser(subparsers)
    add_chunks_subparser(subparsers)
    add_mcp_subparser(subparsers)
    return parser


async def run_command(args: argparse.Namespace, config: Config) -> None:
    if args.command == "compress":
        from planhound.api.cli.commands.compress import compress_command

        await compress_command(args, config)
    elif args.command == "chunks":
        from planhound.api.cli.commands.chunks import chunks_command

        await chunks_command(args, config)
    elif args.command == "mcp":
        from planhound.api.cli.commands.mcp import mcp_command

        await mcp_command(args, config)
    else:
        raise ValueError(f"Unknown command: {args.command}")


def run(argv: list[str] | None = None) -> int:
    """Parse ``argv``, run the command and return the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 2

    try:
        config = Config.load(args)
    except (ValidationError, ValueError) as e:
        Console(stderr=True, soft_wrap=True).print(
            f"[red]Invalid configuration:[/red] {escape(str(e))}", highlight=False
        )
        return 2

    if args.command != "mcp":
        setup_logging(config.debug)

    try:
        asyncio.run(run_command(args, config))
    except PlanValidationError as e:
        console = Console(stderr=True, soft_wrap=True)
        console.print("[red]Invalid plan:[/red]")
        for error in e.errors:
            console.print(f"  - {error}", markup=False, highlight=False)
        return 1
    except PlanHoundError as e:
        Console(stderr=True, soft_wrap=True).print(
            f"[red]Error:[/red] {escape(str(e))}", highlight=False
        )
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
