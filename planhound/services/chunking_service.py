"""Chunking service: turn plan scopes and steps into bounded code chunks.

The service resolves a scope selector, asks the content index for the
matching symbol or files, builds chunks and then applies the token budget,
dechunking and content stripping, in that order. Chunks are always built
with content so the token budget can re-split them; content is dropped at
the end when the caller did not ask for it.
"""

from typing import Any

from loguru import logger

from planhound.chunking.chunk_builder import (
    apply_token_budget,
    build_symbol_chunks,
    chunk_file_range,
    strip_content,
)
from planhound.chunking.dechunker import dechunk_chunks
from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.exceptions import ChunkingError, StepNotFoundError
from planhound.core.models.chunk import CodeChunk
from planhound.core.models.plan import PlanScope, PlanStep, TaskPlan
from planhound.core.models.plan_schema import parse_plan
from planhound.core.models.results import ChunkingResult, ChunkingStats
from planhound.core.types.common import ResolutionType
from planhound.interfaces.content_index import ContentIndex
from planhound.services.scope_resolver import ScopeResolution, get_step_scope, resolve_scope


class ChunkingService:
    """Produces code chunks for plan scopes using a content index."""

    def __init__(
        self,
        index: ContentIndex | None = None,
        config: ChunkingConfig | None = None,
    ):
        """Initialize chunking service.

        Args:
            index: Content index for symbol and file lookups. Without one,
                file scopes degrade to placeholder ranges and symbol scopes
                to empty results, both with warnings.
            config: Default chunking limits, overridable per call
        """
        self._index = index
        self._config = config or ChunkingConfig()

    @property
    def config(self) -> ChunkingConfig:
        return self._config

    def get_chunks(
        self,
        plan: TaskPlan | dict[str, Any],
        scope: PlanScope | dict[str, Any] | None = None,
        step: PlanStep | dict[str, Any] | None = None,
        step_id: str | None = None,
        options: ChunkingConfig | dict[str, Any] | None = None,
    ) -> ChunkingResult:
        """Chunks for a step (preferred when given) or a scope of ``plan``.

        Args:
            plan: Plan owning the scopes, object or wire form
            scope: Scope to chunk
            step: Step whose scope is chunked
            step_id: Id of a step in ``plan``, alternative to ``step``
            options: Per-call limits; camelCase dict keys as sent by agents

        Raises:
            ChunkingError: If neither a scope nor a step is given
            StepNotFoundError: If ``step_id`` is not in the plan
        """
        task_plan = parse_plan(plan)
        config = (
            options
            if isinstance(options, ChunkingConfig)
            else ChunkingConfig.from_options(options, self._config)
        )

        if step_id is not None:
            step = task_plan.get_step(step_id)
            if step is None:
                raise StepNotFoundError(step_id)
        if isinstance(step, dict):
            step = PlanStep.from_dict(step)
        if isinstance(scope, dict):
            scope = PlanScope.from_dict(scope)

        if step is not None:
            return self.chunks_for_step(step, task_plan, config)
        if scope is not None:
            return self.chunk_scope(scope, task_plan, config)
        raise ChunkingError("Either a step or a scope must be provided")

    def chunks_for_step(
        self, step: PlanStep, plan: TaskPlan, config: ChunkingConfig | None = None
    ) -> ChunkingResult:
        if step.scope_id is None:
            return ChunkingResult.empty("Step has no scope assigned")
        scope = get_step_scope(step, plan)
        if scope is None:
            return ChunkingResult.empty(
                f'Scope "{step.scope_id}" of step "{step.id}" not found in plan'
            )
        return self.chunk_scope(scope, plan, config)

    def chunk_scope(
        self, scope: PlanScope, plan: TaskPlan, config: ChunkingConfig | None = None
    ) -> ChunkingResult:
        config = config or self._config
        resolution = resolve_scope(scope, plan)
        logger.debug(
            f"Chunking scope {scope.id} as {resolution.resolution_type.value}: "
            f"{resolution.instructions}"
        )

        # Build with content; the token budget needs the text
        build_config = config.model_copy(update={"include_content": True})
        kind = resolution.resolution_type
        if kind in (ResolutionType.SYMBOL, ResolutionType.TOOL_ACTION):
            chunks, warnings = self._chunk_symbol(resolution, build_config)
        elif kind in (ResolutionType.PATTERN, ResolutionType.FILE):
            chunks, warnings = self._chunk_files(resolution, build_config)
        else:
            message = (
                f'Chunking for scope type "{kind.value}" requires a symbol index; '
                "no chunks produced"
            )
            logger.warning(message)
            return ChunkingResult.empty(message)

        return self._finalize(chunks, warnings, config)

    def _chunk_symbol(
        self, resolution: ScopeResolution, config: ChunkingConfig
    ) -> tuple[list[CodeChunk], list[str]]:
        name = resolution.parsed_info.get("symbolName")
        if not name:
            return [], ["No symbol information available in scope resolution"]
        if self._index is None:
            logger.warning(f"No content index configured; cannot resolve symbol {name}")
            return [], [f'No content index configured; symbol "{name}" was not resolved']

        symbol = self._index.find_symbol(name)
        if symbol is None:
            return [], [f'Symbol "{name}" not found in content index']
        return build_symbol_chunks(symbol, config), []

    def _chunk_files(
        self, resolution: ScopeResolution, config: ChunkingConfig
    ) -> tuple[list[CodeChunk], list[str]]:
        pattern = resolution.parsed_info.get("pathPattern") or resolution.scope.selector
        if self._index is None:
            logger.warning(f"No content index configured; using placeholder range for {pattern}")
            return (
                chunk_file_range(pattern, 1, config.max_lines_per_chunk, config),
                [
                    f"No content index configured; {pattern} lines 1-"
                    f"{config.max_lines_per_chunk} is a placeholder range"
                ],
            )

        paths = self._index.list_files(pattern)
        if not paths:
            return [], [f"No files match pattern: {pattern}"]

        chunks: list[CodeChunk] = []
        warnings: list[str] = []
        for path in paths:
            record = self._index.read_file(path)
            if record is None:
                warnings.append(f"Could not read file: {path}")
                continue
            chunks.extend(chunk_file_range(path, 1, record.line_count, config, text=record.text))
        return chunks, warnings

    def _finalize(
        self, chunks: list[CodeChunk], warnings: list[str], config: ChunkingConfig
    ) -> ChunkingResult:
        warnings = list(warnings)

        chunks, budget_warnings = apply_token_budget(chunks, config.max_tokens_per_chunk)
        warnings.extend(budget_warnings)

        built_count = len(chunks)
        if config.apply_dechunking:
            chunks, merge_warnings = dechunk_chunks(chunks, config.max_chunks_per_step)
            warnings.extend(merge_warnings)

        if not config.include_content:
            chunks = strip_content(chunks)

        stats = ChunkingStats(
            total_chunks=len(chunks),
            chunks_merged=built_count - len(chunks),
            total_lines=sum(chunk.line_count for chunk in chunks),
            estimated_tokens=sum(chunk.estimated_tokens for chunk in chunks),
        )
        logger.debug(
            f"Produced {stats.total_chunks} chunks ({stats.chunks_merged} merged away, "
            f"{stats.total_lines} lines, ~{stats.estimated_tokens} tokens)"
        )
        return ChunkingResult(chunks=chunks, stats=stats, warnings=warnings)
