"""Plan compression engine: validation, merging, truncation and execution helpers."""

from planhound.planning.compact_encoding import to_compact_text
from planhound.planning.integrity import (
    find_cycle_edges,
    repair_dependencies,
    structural_problems,
    validate_plan_structure,
)
from planhound.planning.level_policy import expected_level_for_step_kind, validate_plan_levels
from planhound.planning.progress import (
    get_executable_steps,
    get_next_executable_step,
    get_plan_progress,
    is_step_executable,
    mark_step_blocked,
    mark_step_done,
    mark_step_in_progress,
    update_step_status,
)
from planhound.planning.scope_validation import create_global_scope, validate_plan_scopes
from planhound.planning.step_merge import dechunk_plan_steps, merge_steps
from planhound.planning.truncation import apply_global_limits

__all__ = [
    "apply_global_limits",
    "create_global_scope",
    "dechunk_plan_steps",
    "expected_level_for_step_kind",
    "find_cycle_edges",
    "get_executable_steps",
    "get_next_executable_step",
    "get_plan_progress",
    "is_step_executable",
    "mark_step_blocked",
    "mark_step_done",
    "mark_step_in_progress",
    "merge_steps",
    "repair_dependencies",
    "structural_problems",
    "to_compact_text",
    "update_step_status",
    "validate_plan_levels",
    "validate_plan_scopes",
    "validate_plan_structure",
]
