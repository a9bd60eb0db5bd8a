"""Domain models for plans, chunks and engine results."""

from planhound.core.models.chunk import BlockInfo, ChunkMetadata, CodeChunk
from planhound.core.models.plan import PlanPhase, PlanScope, PlanStep, TaskPlan
from planhound.core.models.results import (
    ChunkingResult,
    ChunkingStats,
    CompressionResult,
    PlanChange,
    PlanStats,
    PlanWarning,
)

__all__ = [
    "BlockInfo",
    "ChunkMetadata",
    "ChunkingResult",
    "ChunkingStats",
    "CodeChunk",
    "CompressionResult",
    "PlanChange",
    "PlanPhase",
    "PlanScope",
    "PlanStats",
    "PlanStep",
    "PlanWarning",
    "TaskPlan",
]
