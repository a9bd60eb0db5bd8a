"""Global size limits for plans: phase count, then steps per phase."""

from dataclasses import replace

from loguru import logger

from planhound.core.models.plan import PlanStep, TaskPlan
from planhound.core.models.results import PlanChange


def _strip_dependencies(steps: list[PlanStep], removed: set[str]) -> list[PlanStep]:
    if not removed:
        return steps
    stripped = []
    for step in steps:
        deps = tuple(dep for dep in step.dependencies if dep not in removed)
        stripped.append(step if deps == step.dependencies else replace(step, dependencies=deps))
    return stripped


def truncate_phases(
    plan: TaskPlan, target_max_phases: int | None
) -> tuple[TaskPlan, list[PlanChange]]:
    """Keep the first ``target_max_phases`` phases and drop their steps' peers."""
    if not target_max_phases or len(plan.phases) <= target_max_phases:
        return plan, []

    kept_phases = plan.phases[:target_max_phases]
    kept_ids = {phase.id for phase in kept_phases}
    kept_steps = [step for step in plan.steps if step.phase_id in kept_ids]
    removed = {step.id for step in plan.steps if step.phase_id not in kept_ids}

    logger.debug(
        f"Dropping {len(plan.phases) - target_max_phases} phases and {len(removed)} steps"
    )
    change = PlanChange(
        type="phases_truncated",
        description=(
            f"Truncated plan from {len(plan.phases)} to {target_max_phases} phases "
            f"({len(removed)} steps dropped)"
        ),
    )
    return (
        replace(plan, phases=kept_phases, steps=tuple(_strip_dependencies(kept_steps, removed))),
        [change],
    )


def truncate_steps(
    plan: TaskPlan, target_max_steps: int | None
) -> tuple[TaskPlan, list[PlanChange]]:
    """Keep the lowest-order ``target_max_steps`` steps of every phase."""
    if not target_max_steps:
        return plan, []

    by_phase: dict[str, list[PlanStep]] = {}
    for step in plan.steps:
        by_phase.setdefault(step.phase_id, []).append(step)

    removed: set[str] = set()
    for phase_steps in by_phase.values():
        if len(phase_steps) > target_max_steps:
            ordered = sorted(phase_steps, key=lambda s: s.order)
            removed.update(step.id for step in ordered[target_max_steps:])

    if not removed:
        return plan, []

    kept = [step for step in plan.steps if step.id not in removed]
    change = PlanChange(
        type="steps_truncated",
        description=(
            f"Truncated {len(removed)} steps to respect limit of "
            f"{target_max_steps} steps per phase"
        ),
    )
    return replace(plan, steps=tuple(_strip_dependencies(kept, removed))), [change]


def apply_global_limits(
    plan: TaskPlan,
    target_max_phases: int | None = None,
    target_max_steps: int | None = None,
) -> tuple[TaskPlan, list[PlanChange]]:
    """Apply the phase limit, then the per-phase step limit."""
    plan, phase_changes = truncate_phases(plan, target_max_phases)
    plan, step_changes = truncate_steps(plan, target_max_steps)
    return plan, phase_changes + step_changes
