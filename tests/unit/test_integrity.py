"""Tests for dependency repair and structural validation."""

from dataclasses import replace

import pytest

from planhound.core.exceptions import PlanValidationError
from planhound.core.models.plan import TaskPlan
from planhound.planning.integrity import (
    find_cycle_edges,
    repair_dependencies,
    structural_problems,
    validate_plan_structure,
)
from planhound.services.plan_compression_service import compress_plan
from tests.fixtures.sample_plans import make_step


def with_steps(plan: TaskPlan, *steps) -> TaskPlan:
    return replace(plan, steps=tuple(steps))


def chain(length: int) -> list:
    """Steps where each one depends on the next."""
    return [
        make_step(f"s{i}", order=i, dependencies=(f"s{i + 1}",) if i + 1 < length else ())
        for i in range(length)
    ]


class TestFindCycleEdges:
    def test_acyclic_graph(self, plan: TaskPlan) -> None:
        assert find_cycle_edges(list(plan.steps)) == []

    def test_three_step_cycle(self) -> None:
        steps = [
            make_step("a", dependencies=("c",)),
            make_step("b", dependencies=("a",)),
            make_step("c", dependencies=("b",)),
        ]

        assert find_cycle_edges(steps) == [("b", "a")]

    def test_unknown_dependencies_are_ignored(self) -> None:
        assert find_cycle_edges([make_step("a", dependencies=("ghost",))]) == []


class TestRepairDependencies:
    def test_valid_plan_is_unchanged(self, plan: TaskPlan) -> None:
        repaired, changes, warnings = repair_dependencies(plan)

        assert repaired == plan
        assert changes == []
        assert warnings == []

    def test_dangling_and_self_edges_are_removed(self, plan: TaskPlan) -> None:
        broken = with_steps(plan, make_step("a", dependencies=("ghost", "a")))

        repaired, changes, warnings = repair_dependencies(broken)

        assert repaired.get_step("a").dependencies == ()
        assert changes[0].type == "dependency_removed"
        assert changes[0].description == 'Removed invalid dependencies ghost, a from step "Step a"'
        assert warnings == []

    def test_cycles_are_broken(self, plan: TaskPlan) -> None:
        cyclic = with_steps(
            plan,
            make_step("a", dependencies=("c",)),
            make_step("b", dependencies=("a",)),
            make_step("c", dependencies=("b",)),
        )

        repaired, changes, warnings = repair_dependencies(cyclic)

        assert repaired.get_step("b").dependencies == ()
        assert find_cycle_edges(list(repaired.steps)) == []
        assert [c.type for c in changes] == ["dependency_cycle_broken"]
        assert changes[0].description == "Removed dependency b -> a to break a cycle"
        assert [w.type for w in warnings] == ["dependency_cycle"]

    def test_two_step_cycle(self, plan: TaskPlan) -> None:
        cyclic = with_steps(
            plan,
            make_step("a", dependencies=("b",)),
            make_step("b", dependencies=("a",)),
        )

        repaired, _, _ = repair_dependencies(cyclic)

        assert structural_problems(repaired) == []


class TestStructuralValidation:
    def test_valid_plan(self, plan: TaskPlan) -> None:
        assert structural_problems(plan) == []
        assert validate_plan_structure(plan) is plan

    def test_every_problem_is_reported(self, plan: TaskPlan) -> None:
        broken = with_steps(
            plan,
            make_step("a", phase_id="nowhere", scope_id="missing", dependencies=("a", "ghost")),
            make_step("a"),
        )

        problems = structural_problems(broken)

        assert "Step IDs must be unique" in problems
        assert "All steps must reference existing phases" in problems
        assert "All step scopeIds must reference existing scopes or be null" in problems
        assert "All step dependencies must reference existing steps" in problems
        assert "Steps must not depend on themselves" in problems

    def test_cycle_is_a_problem(self, plan: TaskPlan) -> None:
        cyclic = with_steps(
            plan,
            make_step("a", dependencies=("b",)),
            make_step("b", dependencies=("a",)),
        )

        assert "Step dependencies must not form a cycle" in structural_problems(cyclic)

    def test_empty_plan_raises(self, plan: TaskPlan) -> None:
        with pytest.raises(PlanValidationError) as exc_info:
            validate_plan_structure(with_steps(plan))

        assert any(error.startswith("steps") for error in exc_info.value.errors)


class TestLongChains:
    def test_long_chain_has_no_cycle(self, plan: TaskPlan) -> None:
        steps = chain(2000)

        assert find_cycle_edges(steps) == []
        assert structural_problems(with_steps(plan, *steps)) == []

    def test_cycle_closing_a_long_chain(self) -> None:
        steps = chain(2000)
        steps[-1] = make_step("s1999", order=1999, dependencies=("s0",))

        assert find_cycle_edges(steps) == [("s1999", "s0")]

    def test_compress_long_chain(self, plan: TaskPlan) -> None:
        result = compress_plan(with_steps(plan, *chain(1500)))

        assert result.stats.steps_after == 1500
        assert result.plan.get_step("s0").dependencies == ("s1",)
        assert not any(c.type == "dependency_cycle_broken" for c in result.changes)
