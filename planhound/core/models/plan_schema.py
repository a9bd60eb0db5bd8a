"""Pydantic schemas for the plan wire format.

``PlanSchema`` checks field shapes only; it is what incoming plans are parsed
with, since the compressor repairs dangling references itself.
``StrictPlanSchema`` adds the cardinality rules a finished plan must meet
(at least one phase and one step). Cross references are checked in
``planhound.planning.integrity``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from planhound.core.exceptions import PlanValidationError
from planhound.core.models.plan import TaskPlan
from planhound.core.types.common import (
    PlanLevel,
    ScopeKind,
    StepKind,
    StepStatus,
    TaskKind,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PhaseSchema(_WireModel):
    id: str = Field(min_length=1, description="Phase ID")
    name: str = Field(min_length=1)
    level: PlanLevel
    order: int = Field(ge=0)
    summary: str | None = None


class ScopeSchema(_WireModel):
    id: str = Field(min_length=1, description="Scope ID")
    kind: ScopeKind
    label: str = Field(min_length=1)
    selector: str = Field(min_length=1)
    description: str | None = None


class StepSchema(_WireModel):
    id: str = Field(min_length=1, description="Step ID")
    phase_id: str = Field(alias="phaseId", min_length=1)
    level: PlanLevel
    order: int = Field(ge=0)
    kind: StepKind
    title: str = Field(min_length=1)
    summary: str = ""
    scope_id: str | None = Field(default=None, alias="scopeId")
    dependencies: list[str] = Field(default_factory=list)
    suggested_tools: list[str] = Field(default_factory=list, alias="suggestedTools")
    status: StepStatus | None = None


class PlanSchema(_WireModel):
    goal: str = Field(min_length=1)
    task_kind: TaskKind = Field(default=TaskKind.OTHER, alias="taskKind")
    context_summary: str | None = Field(default=None, alias="contextSummary")
    phases: list[PhaseSchema] = Field(default_factory=list)
    scopes: list[ScopeSchema] = Field(default_factory=list)
    steps: list[StepSchema] = Field(default_factory=list)
    metadata: dict[str, str] | None = None


class StrictPlanSchema(PlanSchema):
    phases: list[PhaseSchema] = Field(min_length=1)
    steps: list[StepSchema] = Field(min_length=1)


def format_validation_error(error: ValidationError) -> list[str]:
    """Flatten a pydantic error into ``"path: message"`` strings."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def parse_plan(data: Any) -> TaskPlan:
    """Validate the shape of a wire-format plan and build a ``TaskPlan``.

    Raises:
        PlanValidationError: If fields are missing or have the wrong type
    """
    if isinstance(data, TaskPlan):
        return data
    try:
        schema = PlanSchema.model_validate(data)
    except ValidationError as e:
        raise PlanValidationError(format_validation_error(e)) from e
    return TaskPlan.from_dict(schema.model_dump(mode="json", by_alias=True, exclude_none=True))


def check_plan_shape(plan: TaskPlan) -> list[str]:
    """Return shape and cardinality problems of a finished plan."""
    try:
        StrictPlanSchema.model_validate(plan.to_dict())
    except ValidationError as e:
        return format_validation_error(e)
    return []
