"""Abstraction level policy for plan steps.

Each step kind belongs to a fixed level; ``refine`` follows the level of the
phase it sits in.
"""

from dataclasses import replace

from loguru import logger

from planhound.core.models.plan import TaskPlan
from planhound.core.models.results import PlanChange
from planhound.core.types.common import PlanLevel, StepKind

_LEVEL_BY_KIND: dict[StepKind, PlanLevel] = {
    StepKind.CLARIFY_GOAL: PlanLevel.ABSTRACT,
    StepKind.GATHER_CONTEXT: PlanLevel.PLANNING,
    StepKind.SCAN_CODE: PlanLevel.PLANNING,
    StepKind.DESIGN_SOLUTION: PlanLevel.PLANNING,
    StepKind.EDIT_CODE: PlanLevel.EXECUTION,
    StepKind.RUN_TESTS: PlanLevel.EXECUTION,
}


def expected_level_for_step_kind(kind: StepKind, phase_level: PlanLevel) -> PlanLevel:
    """Level a step of ``kind`` should have inside a phase at ``phase_level``."""
    return _LEVEL_BY_KIND.get(kind, phase_level)


def validate_plan_levels(plan: TaskPlan) -> tuple[TaskPlan, list[PlanChange]]:
    """Rewrite step levels that disagree with the policy.

    Steps whose phase does not exist are left alone; the final structural
    validation reports them.
    """
    changes: list[PlanChange] = []
    phases = {phase.id: phase for phase in plan.phases}

    steps = []
    for step in plan.steps:
        phase = phases.get(step.phase_id)
        if phase is None:
            steps.append(step)
            continue

        expected = expected_level_for_step_kind(step.kind, phase.level)
        if step.level != expected:
            changes.append(
                PlanChange(
                    type="level_corrected",
                    description=(
                        f'Changed step "{step.title}" level from '
                        f"{int(step.level)} to {int(expected)}"
                    ),
                    component_id=step.id,
                )
            )
            step = replace(step, level=expected)
        steps.append(step)

    if changes:
        logger.debug(f"Corrected levels of {len(changes)} steps")
    return replace(plan, steps=tuple(steps)), changes
