"""Scope repair for plans.

After validation a plan has exactly one global scope and every non-null
``scope_id`` on a step resolves to an existing scope.
"""

from dataclasses import replace

from loguru import logger

from planhound.core.models.plan import PlanScope, TaskPlan
from planhound.core.models.results import PlanChange
from planhound.core.types.common import ScopeKind
from planhound.utils.ids import generate_id


def create_global_scope() -> PlanScope:
    return PlanScope(
        id=generate_id("scope-global"),
        kind=ScopeKind.GLOBAL,
        label="Workspace",
        selector="workspace root",
        description="Entire workspace (auto-created)",
    )


def validate_plan_scopes(plan: TaskPlan) -> tuple[TaskPlan, list[PlanChange]]:
    """Ensure a single global scope and repair dangling scope references."""
    changes: list[PlanChange] = []
    scopes = list(plan.scopes)
    redirects: dict[str, str] = {}

    global_scopes = [s for s in scopes if s.kind == ScopeKind.GLOBAL]
    if not global_scopes:
        global_scope = create_global_scope()
        scopes.append(global_scope)
        changes.append(
            PlanChange(
                type="scope_created",
                description="Created missing global scope",
                component_id=global_scope.id,
            )
        )
    else:
        global_scope = global_scopes[0]
        for duplicate in global_scopes[1:]:
            redirects[duplicate.id] = global_scope.id
            changes.append(
                PlanChange(
                    type="scope_deduplicated",
                    description=(
                        f'Removed extra global scope "{duplicate.label}" in favour of '
                        f'"{global_scope.label}"'
                    ),
                    component_id=duplicate.id,
                )
            )
        scopes = [s for s in scopes if s.id not in redirects]

    valid_ids = {scope.id for scope in scopes}
    steps = []
    for step in plan.steps:
        if step.scope_id is None or step.scope_id in valid_ids:
            steps.append(step)
            continue

        if step.scope_id in redirects:
            steps.append(replace(step, scope_id=redirects[step.scope_id]))
            continue

        changes.append(
            PlanChange(
                type="scope_reassigned",
                description=f'Reassigned step "{step.title}" from invalid scope to global scope',
                component_id=step.id,
            )
        )
        steps.append(replace(step, scope_id=global_scope.id))

    if changes:
        logger.debug(f"Scope validation applied {len(changes)} changes")
    return replace(plan, scopes=tuple(scopes), steps=tuple(steps)), changes
