"""Tests for the plan compression pipeline."""

import copy
from dataclasses import replace

import pytest

from planhound.core.config.compression_config import CompressionConfig
from planhound.core.exceptions import PlanValidationError
from planhound.core.models.plan import TaskPlan
from planhound.core.types.common import PlanLevel, ScopeKind
from planhound.planning.integrity import structural_problems
from planhound.services.plan_compression_service import PlanCompressionService, compress_plan
from tests.fixtures.sample_plans import (
    SYMBOL_SCOPE,
    bugfix_plan_data,
    make_step,
    micro_step_plan,
    wide_plan,
)


def assert_plan_integrity(plan: TaskPlan) -> None:
    assert structural_problems(plan) == []
    assert len([s for s in plan.scopes if s.kind == ScopeKind.GLOBAL]) == 1


class TestCompress:
    def test_valid_plan_passes_through(self, plan: TaskPlan) -> None:
        result = PlanCompressionService().compress(plan)

        assert result.plan == plan
        assert result.changes == []
        assert result.warnings == []
        assert result.stats.steps_before == result.stats.steps_after == 5
        assert result.compact.startswith("Goal: Fix login timeout\n")

    def test_wire_form_input(self) -> None:
        data = bugfix_plan_data()
        snapshot = copy.deepcopy(data)

        result = PlanCompressionService().compress(data)

        assert len(result.plan.steps) == 5
        assert data == snapshot

    def test_input_plan_is_not_modified(self) -> None:
        original = micro_step_plan(6)
        before = original.to_dict()

        compress_plan(original, max_micro_steps_per_phase=3)

        assert original.to_dict() == before

    def test_malformed_input_raises(self) -> None:
        data = bugfix_plan_data()
        del data["goal"]

        with pytest.raises(PlanValidationError):
            PlanCompressionService().compress(data)

    def test_micro_steps_are_merged(self) -> None:
        result = compress_plan(micro_step_plan(6), max_micro_steps_per_phase=3)

        assert [s.id for s in result.plan.steps] == ["prep", "e0", "verify"]
        assert result.stats.chunks_created == 1
        assert result.stats.steps_merged == 5
        assert result.stats.steps_after == 3
        assert [c.type for c in result.changes] == ["steps_merged"]
        assert_plan_integrity(result.plan)

    def test_phase_and_step_limits(self) -> None:
        result = compress_plan(wide_plan(5, 3), target_max_phases=2, target_max_steps=2)

        assert result.stats.phases_before == 5
        assert result.stats.phases_after == 2
        assert result.stats.steps_after == 4
        assert_plan_integrity(result.plan)

    def test_levels_and_scopes_are_repaired(self, plan: TaskPlan) -> None:
        broken = replace(
            plan,
            scopes=(SYMBOL_SCOPE,),
            steps=(replace(plan.steps[0], level=PlanLevel.EXECUTION),) + plan.steps[1:],
        )

        result = PlanCompressionService().compress(broken)

        assert result.stats.levels_corrected == 1
        # s1 and s5 pointed at dropped scopes
        assert result.stats.scopes_reassigned == 2
        assert result.plan.get_step("s1").level == PlanLevel.ABSTRACT
        assert_plan_integrity(result.plan)

    def test_cycles_are_broken_with_warning(self, plan: TaskPlan) -> None:
        cyclic = replace(
            plan,
            steps=(
                make_step("a", dependencies=("b",)),
                make_step("b", order=1, dependencies=("a",)),
            ),
        )

        result = PlanCompressionService().compress(cyclic)

        assert [w.type for w in result.warnings] == ["dependency_cycle"]
        assert_plan_integrity(result.plan)

    def test_plan_is_never_emptied(self, plan: TaskPlan) -> None:
        # the first phase has no steps, so keeping one phase drops them all
        without_first = replace(plan, steps=plan.steps[1:])

        result = compress_plan(without_first, target_max_phases=1)

        (step,) = result.plan.steps
        assert step.id == "s2"
        assert step.phase_id == "phase-understand"
        assert step.dependencies == ()
        assert [w.type for w in result.warnings] == ["steps_preserved"]
        assert_plan_integrity(result.plan)

    def test_empty_input_is_reported(self, plan: TaskPlan) -> None:
        result = PlanCompressionService().compress(replace(plan, steps=()))

        assert result.plan.steps == ()
        assert any(w.type == "validation_error" for w in result.warnings)

    def test_per_call_config_overrides_service_default(self) -> None:
        service = PlanCompressionService(CompressionConfig(target_max_phases=4))

        result = service.compress(wide_plan(5, 1), CompressionConfig(target_max_phases=1))

        assert result.stats.phases_after == 1
        assert service.config.target_max_phases == 4

    def test_result_wire_form(self, plan: TaskPlan) -> None:
        data = compress_plan(plan).to_dict()

        assert set(data) == {"plan", "warnings", "changes", "stats", "toon"}
        assert data["stats"]["stepsAfter"] == 5
        assert data["toon"].startswith("Goal:")
