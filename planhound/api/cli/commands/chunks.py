"""Chunks command: chunk the scope of a plan step or a scope by id."""

import argparse
import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from planhound.api.cli.utils.plan_file import load_plan_data
from planhound.core.config.config import Config
from planhound.core.exceptions import PlanHoundError
from planhound.core.models.plan_schema import parse_plan
from planhound.core.models.results import ChunkingResult
from planhound.services.factory import create_services


def render_chunking_result(result: ChunkingResult, console: Console) -> None:
    table = Table(title=f"{result.stats.total_chunks} chunks")
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Type")
    table.add_column("Tokens", justify="right")
    table.add_column("Summary", overflow="fold")
    for chunk in result.chunks:
        table.add_row(
            chunk.file_path,
            f"{chunk.start_line}-{chunk.end_line}",
            chunk.chunk_type.value,
            str(chunk.estimated_tokens),
            chunk.metadata.summary,
        )
    console.print(table)

    stats = result.stats
    console.print(
        f"Merged: {stats.chunks_merged}  Lines: {stats.total_lines}  "
        f"Estimated tokens: {stats.estimated_tokens}"
    )
    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {escape(warning)}", highlight=False)


async def chunks_command(
    args: argparse.Namespace, config: Config, console: Console | None = None
) -> None:
    plan = parse_plan(load_plan_data(args.plan))
    services = create_services(config)

    if args.step:
        result = services.chunking.get_chunks(plan, step_id=args.step)
    else:
        scope = plan.get_scope(args.scope)
        if scope is None:
            raise PlanHoundError(f'Scope with id "{args.scope}" not found in plan')
        result = services.chunking.get_chunks(plan, scope=scope)

    if getattr(args, "json", False):
        print(json.dumps(result.to_dict(), indent=2))
    else:
        render_chunking_result(result, console or Console())
