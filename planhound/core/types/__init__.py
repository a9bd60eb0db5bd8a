"""Shared enums and type aliases."""

from planhound.core.types.common import (
    ChunkId,
    ChunkType,
    LineNumber,
    PhaseId,
    PlanLevel,
    ResolutionType,
    ScopeId,
    ScopeKind,
    StepId,
    StepKind,
    StepStatus,
    TaskKind,
)

__all__ = [
    "ChunkId",
    "ChunkType",
    "LineNumber",
    "PhaseId",
    "PlanLevel",
    "ResolutionType",
    "ScopeId",
    "ScopeKind",
    "StepId",
    "StepKind",
    "StepStatus",
    "TaskKind",
]
