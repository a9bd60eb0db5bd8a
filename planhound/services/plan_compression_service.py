"""Plan compression service.

Runs the compression pipeline over a task plan:
1. Level validation (step levels follow their kind)
2. Scope validation (one global scope, no dangling scope ids)
3. Step dechunking of over-large execution step groups
4. Global truncation of phases and steps per phase
5. Dependency repair (dangling, self and cyclic edges)
6. Safety net so a non-empty plan never comes back empty
7. Final structural validation, reported as warnings
"""

from dataclasses import replace
from typing import Any

from loguru import logger

from planhound.core.config.compression_config import CompressionConfig
from planhound.core.models.plan import TaskPlan
from planhound.core.models.plan_schema import parse_plan
from planhound.core.models.results import (
    CompressionResult,
    PlanChange,
    PlanStats,
    PlanWarning,
)
from planhound.planning.compact_encoding import to_compact_text
from planhound.planning.integrity import repair_dependencies, structural_problems
from planhound.planning.level_policy import (
    expected_level_for_step_kind,
    validate_plan_levels,
)
from planhound.planning.scope_validation import validate_plan_scopes
from planhound.planning.step_merge import dechunk_plan_steps
from planhound.planning.truncation import apply_global_limits


class PlanCompressionService:
    """Validates and compresses task plans within configured size limits."""

    def __init__(self, config: CompressionConfig | None = None):
        """Initialize compression service.

        Args:
            config: Default limits, overridable per call
        """
        self._config = config or CompressionConfig()

    @property
    def config(self) -> CompressionConfig:
        return self._config

    def compress(
        self,
        plan: TaskPlan | dict[str, Any],
        config: CompressionConfig | None = None,
    ) -> CompressionResult:
        """Compress a plan.

        Args:
            plan: Plan object or its wire form
            config: Limits for this call (defaults to the service config)

        Returns:
            CompressionResult with the compressed plan, warnings, changes,
            stats and compact text

        Raises:
            PlanValidationError: If a wire-form plan has malformed fields
        """
        limits = config or self._config
        original = parse_plan(plan)
        changes: list[PlanChange] = []
        warnings: list[PlanWarning] = []

        logger.info(
            f"Compressing plan with {len(original.phases)} phases and "
            f"{len(original.steps)} steps (max phases={limits.target_max_phases}, "
            f"max steps={limits.target_max_steps}, "
            f"max micro steps={limits.max_micro_steps_per_phase})"
        )

        current, level_changes = validate_plan_levels(original)
        changes.extend(level_changes)

        current, scope_changes = validate_plan_scopes(current)
        changes.extend(scope_changes)
        validated = current

        merge = dechunk_plan_steps(current, limits.max_micro_steps_per_phase)
        current = merge.plan
        changes.extend(merge.changes)

        current, limit_changes = apply_global_limits(
            current, limits.target_max_phases, limits.target_max_steps
        )
        changes.extend(limit_changes)

        current, repair_changes, repair_warnings = repair_dependencies(current)
        changes.extend(repair_changes)
        warnings.extend(repair_warnings)

        if not current.steps and validated.steps:
            current, warning = self._preserve_first_step(current, validated)
            warnings.append(warning)

        for problem in structural_problems(current):
            warnings.append(PlanWarning(type="validation_error", message=problem))

        stats = PlanStats(
            phases_before=len(original.phases),
            phases_after=len(current.phases),
            steps_before=len(original.steps),
            steps_after=len(current.steps),
            chunks_created=merge.chunks_created,
            steps_merged=merge.steps_merged,
            levels_corrected=sum(1 for c in changes if c.type == "level_corrected"),
            scopes_reassigned=sum(1 for c in changes if c.type == "scope_reassigned"),
        )

        if warnings:
            logger.warning(f"Plan compression produced {len(warnings)} warnings")
        logger.info(
            f"Compressed plan to {stats.phases_after} phases and {stats.steps_after} "
            f"steps ({len(changes)} changes)"
        )

        return CompressionResult(
            plan=current,
            warnings=warnings,
            changes=changes,
            stats=stats,
            compact=to_compact_text(current),
        )

    def _preserve_first_step(
        self, plan: TaskPlan, validated: TaskPlan
    ) -> tuple[TaskPlan, PlanWarning]:
        """Re-insert the first original step into an emptied plan."""
        step = validated.steps[0]

        phase = plan.get_phase(step.phase_id)
        if phase is None and plan.phases:
            phase = plan.phases[0]
        if phase is not None:
            step = replace(
                step,
                phase_id=phase.id,
                level=expected_level_for_step_kind(step.kind, phase.level),
            )

        if step.scope_id is not None and plan.get_scope(step.scope_id) is None:
            global_scope = plan.global_scope()
            step = replace(step, scope_id=global_scope.id if global_scope else None)

        step = replace(step, dependencies=())
        logger.warning(f"Compression removed every step; preserving step {step.id}")
        return (
            replace(plan, steps=(step,)),
            PlanWarning(
                type="steps_preserved",
                message=(
                    f'All steps were removed by compression; kept first step "{step.title}"'
                ),
                component_id=step.id,
            ),
        )


def compress_plan(
    plan: TaskPlan | dict[str, Any],
    target_max_phases: int | None = None,
    target_max_steps: int | None = None,
    max_micro_steps_per_phase: int | None = None,
) -> CompressionResult:
    """Compress ``plan`` with the given limits (all optional)."""
    config = CompressionConfig(
        target_max_phases=target_max_phases,
        target_max_steps=target_max_steps,
        max_micro_steps_per_phase=max_micro_steps_per_phase,
    )
    return PlanCompressionService(config).compress(plan)
