"""Dependency graph integrity for plans.

``repair_dependencies`` removes dangling and self edges and breaks cycles so
the executor consuming a plan can always order its steps.
``validate_plan_structure`` checks every structural invariant and raises.
"""

from dataclasses import replace

from loguru import logger

from planhound.core.exceptions import PlanValidationError
from planhound.core.models.plan import PlanStep, TaskPlan
from planhound.core.models.plan_schema import check_plan_shape
from planhound.core.models.results import PlanChange, PlanWarning


def find_cycle_edges(steps: list[PlanStep]) -> list[tuple[str, str]]:
    """Back edges ``(step_id, dependency_id)`` found by a depth-first walk.

    Removing every returned edge leaves the dependency relation acyclic.
    Steps are visited in sequence order so the result is deterministic.
    Dependencies on unknown ids are ignored.
    """
    graph = {step.id: step.dependencies for step in steps}
    state: dict[str, int] = {}  # 1 = on stack, 2 = done
    back_edges: list[tuple[str, str]] = []

    for step in steps:
        if step.id in state:
            continue
        state[step.id] = 1
        stack = [(step.id, iter(graph[step.id]))]
        while stack:
            node, deps = stack[-1]
            for dep in deps:
                if dep not in graph:
                    continue
                if state.get(dep) == 1:
                    back_edges.append((node, dep))
                elif dep not in state:
                    state[dep] = 1
                    stack.append((dep, iter(graph[dep])))
                    break
            else:
                state[node] = 2
                stack.pop()
    return back_edges


def repair_dependencies(
    plan: TaskPlan,
) -> tuple[TaskPlan, list[PlanChange], list[PlanWarning]]:
    """Drop dangling, self and cycle-closing dependency edges."""
    changes: list[PlanChange] = []
    warnings: list[PlanWarning] = []
    step_ids = plan.step_ids()

    steps: list[PlanStep] = []
    for step in plan.steps:
        deps = tuple(dep for dep in step.dependencies if dep in step_ids and dep != step.id)
        if deps != step.dependencies:
            dropped = [dep for dep in step.dependencies if dep not in deps]
            changes.append(
                PlanChange(
                    type="dependency_removed",
                    description=(
                        f'Removed invalid dependencies {", ".join(dropped)} from step "{step.title}"'
                    ),
                    component_id=step.id,
                )
            )
            step = replace(step, dependencies=deps)
        steps.append(step)

    back_edges = find_cycle_edges(steps)
    if back_edges:
        to_drop: dict[str, set[str]] = {}
        for node, dep in back_edges:
            to_drop.setdefault(node, set()).add(dep)
            changes.append(
                PlanChange(
                    type="dependency_cycle_broken",
                    description=f"Removed dependency {node} -> {dep} to break a cycle",
                    component_id=node,
                )
            )
            warnings.append(
                PlanWarning(
                    type="dependency_cycle",
                    message=f"Step {node} and {dep} depended on each other; edge removed",
                    component_id=node,
                )
            )
        steps = [
            replace(s, dependencies=tuple(d for d in s.dependencies if d not in to_drop[s.id]))
            if s.id in to_drop
            else s
            for s in steps
        ]
        logger.warning(f"Broke {len(back_edges)} dependency cycles")

    return replace(plan, steps=tuple(steps)), changes, warnings


def structural_problems(plan: TaskPlan) -> list[str]:
    """All invariant violations of ``plan`` as messages (empty when valid)."""
    problems = check_plan_shape(plan)

    phase_ids = plan.phase_ids()
    scope_ids = plan.scope_ids()
    step_ids = plan.step_ids()

    if len(step_ids) != len(plan.steps):
        problems.append("Step IDs must be unique")
    if any(step.phase_id not in phase_ids for step in plan.steps):
        problems.append("All steps must reference existing phases")
    if any(step.scope_id is not None and step.scope_id not in scope_ids for step in plan.steps):
        problems.append("All step scopeIds must reference existing scopes or be null")
    if any(dep not in step_ids for step in plan.steps for dep in step.dependencies):
        problems.append("All step dependencies must reference existing steps")
    if any(step.id in step.dependencies for step in plan.steps):
        problems.append("Steps must not depend on themselves")
    if find_cycle_edges(list(plan.steps)):
        problems.append("Step dependencies must not form a cycle")
    return problems


def validate_plan_structure(plan: TaskPlan) -> TaskPlan:
    """Return ``plan`` unchanged if valid.

    Raises:
        PlanValidationError: Listing every violated invariant
    """
    problems = structural_problems(plan)
    if problems:
        raise PlanValidationError(problems)
    return plan
