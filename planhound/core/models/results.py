"""Result records produced by the compression and chunking engines."""

from dataclasses import dataclass, field
from typing import Any

from planhound.core.models.chunk import CodeChunk
from planhound.core.models.plan import TaskPlan


@dataclass(frozen=True)
class PlanChange:
    """One alteration applied to a plan (``level_corrected``, ``steps_merged``, ...)."""

    type: str
    description: str
    component_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.component_id is not None:
            result["componentId"] = self.component_id
        return result


@dataclass(frozen=True)
class PlanWarning:
    """Soft problem found while compressing a plan."""

    type: str
    message: str
    component_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "message": self.message}
        if self.component_id is not None:
            result["componentId"] = self.component_id
        return result


@dataclass(frozen=True)
class PlanStats:
    """Before/after counts and tallies for one compression run."""

    phases_before: int
    phases_after: int
    steps_before: int
    steps_after: int
    chunks_created: int = 0
    steps_merged: int = 0
    levels_corrected: int = 0
    scopes_reassigned: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "phasesBefore": self.phases_before,
            "phasesAfter": self.phases_after,
            "stepsBefore": self.steps_before,
            "stepsAfter": self.steps_after,
            "chunksCreated": self.chunks_created,
            "stepsMerged": self.steps_merged,
            "levelsCorrected": self.levels_corrected,
            "scopesReassigned": self.scopes_reassigned,
        }


@dataclass(frozen=True)
class CompressionResult:
    """Output of the plan compressor."""

    plan: TaskPlan
    warnings: list[PlanWarning]
    changes: list[PlanChange]
    stats: PlanStats
    compact: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "plan": self.plan.to_dict(),
            "warnings": [w.to_dict() for w in self.warnings],
            "changes": [c.to_dict() for c in self.changes],
            "stats": self.stats.to_dict(),
            "toon": self.compact,
        }


@dataclass(frozen=True)
class ChunkingStats:
    total_chunks: int = 0
    chunks_merged: int = 0
    total_lines: int = 0
    estimated_tokens: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalChunks": self.total_chunks,
            "chunksMerged": self.chunks_merged,
            "totalLines": self.total_lines,
            "estimatedTokens": self.estimated_tokens,
        }


@dataclass(frozen=True)
class ChunkingResult:
    """Output of the chunking engine."""

    chunks: list[CodeChunk] = field(default_factory=list)
    stats: ChunkingStats = field(default_factory=ChunkingStats)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls, *warnings: str) -> "ChunkingResult":
        return cls(chunks=[], stats=ChunkingStats(), warnings=list(warnings))

    def to_dict(self) -> dict[str, Any]:
        return {
            "chunks": [chunk.to_dict() for chunk in self.chunks],
            "stats": self.stats.to_dict(),
            "warnings": list(self.warnings),
        }
