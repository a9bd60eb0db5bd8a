"""Task plan domain models.

A plan is a value: phases, scopes and steps are frozen dataclasses holding
tuples, so a transformation always builds a new plan (usually through
``dataclasses.replace``) and never shares a mutable collection with the
version it came from.

Wire format (``from_dict``/``to_dict``) uses the camelCase keys that agents
send and receive.
"""

from dataclasses import dataclass, field
from typing import Any

from planhound.core.types.common import (
    PlanLevel,
    ScopeKind,
    StepKind,
    StepStatus,
    TaskKind,
)


def _dedupe(values: Any) -> tuple[str, ...]:
    """Order-preserving de-duplication into a tuple of strings."""
    return tuple(dict.fromkeys(str(v) for v in values))


@dataclass(frozen=True)
class PlanPhase:
    """High-level stage of work."""

    id: str
    name: str
    level: PlanLevel
    order: int
    summary: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanPhase":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            level=PlanLevel(int(data["level"])),
            order=int(data["order"]),
            summary=data.get("summary"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "level": int(self.level),
            "order": self.order,
        }
        if self.summary is not None:
            result["summary"] = self.summary
        return result


@dataclass(frozen=True)
class PlanScope:
    """Part of the codebase a step applies to."""

    id: str
    kind: ScopeKind
    label: str
    selector: str
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanScope":
        return cls(
            id=str(data["id"]),
            kind=ScopeKind(data["kind"]),
            label=str(data["label"]),
            selector=str(data["selector"]),
            description=data.get("description"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "selector": self.selector,
        }
        if self.description is not None:
            result["description"] = self.description
        return result


@dataclass(frozen=True)
class PlanStep:
    """Single unit of work inside a phase."""

    id: str
    phase_id: str
    level: PlanLevel
    order: int
    kind: StepKind
    title: str
    summary: str
    scope_id: str | None = None
    dependencies: tuple[str, ...] = ()
    suggested_tools: tuple[str, ...] = ()
    status: StepStatus | None = None

    def __post_init__(self) -> None:
        # Accept any iterable from callers but always store tuples
        object.__setattr__(self, "dependencies", _dedupe(self.dependencies))
        object.__setattr__(self, "suggested_tools", _dedupe(self.suggested_tools))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanStep":
        status = data.get("status")
        return cls(
            id=str(data["id"]),
            phase_id=str(data["phaseId"]),
            level=PlanLevel(int(data["level"])),
            order=int(data["order"]),
            kind=StepKind(data["kind"]),
            title=str(data["title"]),
            summary=str(data.get("summary", "")),
            scope_id=data.get("scopeId"),
            dependencies=tuple(data.get("dependencies") or ()),
            suggested_tools=tuple(data.get("suggestedTools") or ()),
            status=StepStatus(status) if status else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "phaseId": self.phase_id,
            "level": int(self.level),
            "order": self.order,
            "kind": self.kind.value,
            "title": self.title,
            "summary": self.summary,
            "scopeId": self.scope_id,
            "dependencies": list(self.dependencies),
            "suggestedTools": list(self.suggested_tools),
        }
        if self.status is not None:
            result["status"] = self.status.value
        return result


@dataclass(frozen=True)
class TaskPlan:
    """Complete hierarchical task plan."""

    goal: str
    task_kind: TaskKind
    phases: tuple[PlanPhase, ...] = ()
    scopes: tuple[PlanScope, ...] = ()
    steps: tuple[PlanStep, ...] = ()
    context_summary: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "phases", tuple(self.phases))
        object.__setattr__(self, "scopes", tuple(self.scopes))
        object.__setattr__(self, "steps", tuple(self.steps))
        object.__setattr__(self, "metadata", dict(self.metadata))

    # -- lookups ---------------------------------------------------------

    def phase_ids(self) -> set[str]:
        return {phase.id for phase in self.phases}

    def scope_ids(self) -> set[str]:
        return {scope.id for scope in self.scopes}

    def step_ids(self) -> set[str]:
        return {step.id for step in self.steps}

    def get_phase(self, phase_id: str) -> PlanPhase | None:
        return next((p for p in self.phases if p.id == phase_id), None)

    def get_scope(self, scope_id: str) -> PlanScope | None:
        return next((s for s in self.scopes if s.id == scope_id), None)

    def get_step(self, step_id: str) -> PlanStep | None:
        return next((s for s in self.steps if s.id == step_id), None)

    def global_scope(self) -> PlanScope | None:
        return next((s for s in self.scopes if s.kind == ScopeKind.GLOBAL), None)

    # -- wire format -----------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskPlan":
        """Build a plan from its wire form without structural validation.

        Use ``planhound.core.models.plan_schema.parse_plan`` for untrusted
        input; it reports shape errors with field paths.
        """
        return cls(
            goal=str(data["goal"]),
            task_kind=TaskKind(data.get("taskKind", TaskKind.OTHER.value)),
            context_summary=data.get("contextSummary"),
            phases=tuple(PlanPhase.from_dict(p) for p in data.get("phases", [])),
            scopes=tuple(PlanScope.from_dict(s) for s in data.get("scopes", [])),
            steps=tuple(PlanStep.from_dict(s) for s in data.get("steps", [])),
            metadata=dict(data.get("metadata") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "goal": self.goal,
            "taskKind": self.task_kind.value,
        }
        if self.context_summary is not None:
            result["contextSummary"] = self.context_summary
        result["phases"] = [phase.to_dict() for phase in self.phases]
        result["scopes"] = [scope.to_dict() for scope in self.scopes]
        result["steps"] = [step.to_dict() for step in self.steps]
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result
