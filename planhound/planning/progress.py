"""Step-by-step execution helpers for plans."""

from dataclasses import replace
from typing import Any

from planhound.core.exceptions import StepNotFoundError
from planhound.core.models.plan import PlanStep, TaskPlan
from planhound.core.types.common import StepStatus


def is_step_executable(step: PlanStep, plan: TaskPlan) -> bool:
    """A step can run when it is not started and every dependency is done."""
    if step.status not in (None, StepStatus.TODO):
        return False

    by_id = {s.id: s for s in plan.steps}
    for dep_id in step.dependencies:
        dep = by_id.get(dep_id)
        if dep is None or dep.status != StepStatus.DONE:
            return False
    return True


def get_executable_steps(plan: TaskPlan) -> list[PlanStep]:
    """Executable steps sorted by phase order, then step order."""
    phase_order = {phase.id: phase.order for phase in plan.phases}
    executable = [step for step in plan.steps if is_step_executable(step, plan)]
    # Steps of unknown phases sort last
    return sorted(
        executable,
        key=lambda s: (phase_order.get(s.phase_id, float("inf")), s.order),
    )


def get_next_executable_step(plan: TaskPlan) -> PlanStep | None:
    steps = get_executable_steps(plan)
    return steps[0] if steps else None


def update_step_status(plan: TaskPlan, step_id: str, status: StepStatus) -> TaskPlan:
    """Return a copy of ``plan`` with one step's status changed.

    Raises:
        StepNotFoundError: If no step has ``step_id``
    """
    if plan.get_step(step_id) is None:
        raise StepNotFoundError(step_id)
    steps = tuple(
        replace(step, status=status) if step.id == step_id else step for step in plan.steps
    )
    return replace(plan, steps=steps)


def mark_step_in_progress(plan: TaskPlan, step_id: str) -> TaskPlan:
    return update_step_status(plan, step_id, StepStatus.IN_PROGRESS)


def mark_step_done(plan: TaskPlan, step_id: str) -> TaskPlan:
    return update_step_status(plan, step_id, StepStatus.DONE)


def mark_step_blocked(plan: TaskPlan, step_id: str) -> TaskPlan:
    return update_step_status(plan, step_id, StepStatus.BLOCKED)


def get_plan_progress(plan: TaskPlan) -> dict[str, Any]:
    """Status counts and the rounded percentage of done steps."""
    counts = {status: 0 for status in StepStatus}
    for step in plan.steps:
        counts[step.status or StepStatus.TODO] += 1

    total = len(plan.steps)
    done = counts[StepStatus.DONE]
    # Round half up, matching how agents display progress
    percentage = int(done * 100 / total + 0.5) if total else 0
    return {
        "total": total,
        "todo": counts[StepStatus.TODO],
        "inProgress": counts[StepStatus.IN_PROGRESS],
        "done": done,
        "blocked": counts[StepStatus.BLOCKED],
        "percentage": percentage,
    }
