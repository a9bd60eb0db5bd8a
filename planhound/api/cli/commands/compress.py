"""Compress command: validate and compress a task plan file."""

import argparse
import json

from rich.console import Console
from rich.table import Table

from planhound.api.cli.utils.plan_file import load_plan_data
from planhound.core.config.config import Config
from planhound.core.models.results import CompressionResult
from planhound.services.plan_compression_service import PlanCompressionService


def render_compression_result(result: CompressionResult, console: Console) -> None:
    stats = result.stats
    summary = Table(title="Plan compression", show_header=True)
    summary.add_column("Metric")
    summary.add_column("Before", justify="right")
    summary.add_column("After", justify="right")
    summary.add_row("Phases", str(stats.phases_before), str(stats.phases_after))
    summary.add_row("Steps", str(stats.steps_before), str(stats.steps_after))
    console.print(summary)
    console.print(
        f"Chunks created: {stats.chunks_created}  Steps merged: {stats.steps_merged}  "
        f"Levels corrected: {stats.levels_corrected}  "
        f"Scopes reassigned: {stats.scopes_reassigned}"
    )

    if result.changes:
        changes = Table(title="Changes")
        changes.add_column("Type", style="cyan")
        changes.add_column("Description")
        for change in result.changes:
            changes.add_row(change.type, change.description)
        console.print(changes)

    if result.warnings:
        warnings = Table(title="Warnings")
        warnings.add_column("Type", style="yellow")
        warnings.add_column("Message")
        for warning in result.warnings:
            warnings.add_row(warning.type, warning.message)
        console.print(warnings)

    console.print()
    console.print(result.compact, markup=False, highlight=False)


async def compress_command(
    args: argparse.Namespace, config: Config, console: Console | None = None
) -> None:
    data = load_plan_data(args.plan)
    result = PlanCompressionService(config.compression).compress(data)

    if getattr(args, "json", False):
        print(json.dumps(result.to_dict(), indent=2))
    elif getattr(args, "compact", False):
        print(result.compact)
    else:
        render_compression_result(result, console or Console())
