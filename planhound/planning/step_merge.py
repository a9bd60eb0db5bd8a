"""Step-level dechunking for plans.

Execution-level steps that share ``(phase_id, scope_id, kind)`` are merged
into a single step when a group grows past ``max_micro_steps_per_phase``.
Dependencies on absorbed steps are redirected to the surviving step.
"""

from dataclasses import dataclass, replace

from loguru import logger

from planhound.core.exceptions import EmptyMergeError
from planhound.core.models.plan import PlanStep, TaskPlan
from planhound.core.models.results import PlanChange
from planhound.core.types.common import PlanLevel, StepKind


@dataclass(frozen=True)
class StepMergeResult:
    plan: TaskPlan
    changes: list[PlanChange]
    redirects: dict[str, str]
    chunks_created: int = 0
    steps_merged: int = 0


def merge_steps(steps: list[PlanStep]) -> PlanStep:
    """Collapse ``steps`` into one step.

    The lowest-order step keeps its identity; summaries are joined with
    ``"; "``, tools and dependencies are unioned without duplicates and the
    order becomes the minimum order. A single step is returned unchanged.

    Raises:
        EmptyMergeError: If ``steps`` is empty
    """
    if not steps:
        raise EmptyMergeError("Cannot merge empty list of steps")
    if len(steps) == 1:
        return steps[0]

    ordered = sorted(steps, key=lambda s: s.order)
    base = ordered[0]
    summaries = [s.summary for s in ordered if s.summary]
    return replace(
        base,
        title=f"{base.title} (merged {len(steps)} steps)",
        summary="; ".join(summaries),
        suggested_tools=tuple(tool for s in ordered for tool in s.suggested_tools),
        dependencies=tuple(dep for s in ordered for dep in s.dependencies),
        order=base.order,
    )


def rewrite_dependencies(
    steps: list[PlanStep], redirects: dict[str, str]
) -> list[PlanStep]:
    """Point dependencies at surviving ids and drop duplicates and self edges."""
    rewritten = []
    for step in steps:
        deps = tuple(
            dep
            for dep in dict.fromkeys(redirects.get(dep, dep) for dep in step.dependencies)
            if dep != step.id
        )
        rewritten.append(step if deps == step.dependencies else replace(step, dependencies=deps))
    return rewritten


def dechunk_plan_steps(
    plan: TaskPlan, max_micro_steps_per_phase: int | None
) -> StepMergeResult:
    """Merge over-large groups of execution steps.

    The merged step takes the position of the first absorbed step; all other
    steps keep their relative order.
    """
    if not max_micro_steps_per_phase:
        return StepMergeResult(plan=plan, changes=[], redirects={})

    groups: dict[tuple[str, str | None, StepKind], list[PlanStep]] = {}
    for step in plan.steps:
        if step.level != PlanLevel.EXECUTION:
            continue
        groups.setdefault((step.phase_id, step.scope_id, step.kind), []).append(step)

    changes: list[PlanChange] = []
    redirects: dict[str, str] = {}
    replacements: dict[str, PlanStep] = {}  # first member id -> merged step
    chunks_created = 0
    steps_merged = 0

    for group in groups.values():
        if len(group) <= max_micro_steps_per_phase:
            continue
        merged = merge_steps(group)
        for member in group:
            if member.id != merged.id:
                redirects[member.id] = merged.id
        replacements[group[0].id] = merged
        chunks_created += 1
        steps_merged += len(group) - 1
        changes.append(
            PlanChange(
                type="steps_merged",
                description=f"Merged {len(group)} steps into chunk: {merged.title}",
                component_id=merged.id,
            )
        )

    if not replacements:
        return StepMergeResult(plan=plan, changes=[], redirects={})

    survivors = {merged.id for merged in replacements.values()}
    steps: list[PlanStep] = []
    for step in plan.steps:
        if step.id in replacements:
            steps.append(replacements[step.id])
        elif step.id in redirects or step.id in survivors:
            # absorbed, or the survivor already emitted at its group's position
            continue
        else:
            steps.append(step)

    steps = rewrite_dependencies(steps, redirects)
    logger.info(
        f"Merged {steps_merged + chunks_created} execution steps into {chunks_created} "
        f"chunks (limit {max_micro_steps_per_phase} per group)"
    )
    return StepMergeResult(
        plan=replace(plan, steps=tuple(steps)),
        changes=changes,
        redirects=redirects,
        chunks_created=chunks_created,
        steps_merged=steps_merged,
    )
