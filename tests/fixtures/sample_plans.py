"""Plan builders shared by the test suite."""

from typing import Any

from planhound.core.models.plan import PlanPhase, PlanScope, PlanStep, TaskPlan
from planhound.core.types.common import PlanLevel, ScopeKind, StepKind, TaskKind

_KIND_LEVEL = {
    StepKind.CLARIFY_GOAL: PlanLevel.ABSTRACT,
    StepKind.GATHER_CONTEXT: PlanLevel.PLANNING,
    StepKind.SCAN_CODE: PlanLevel.PLANNING,
    StepKind.DESIGN_SOLUTION: PlanLevel.PLANNING,
    StepKind.EDIT_CODE: PlanLevel.EXECUTION,
    StepKind.RUN_TESTS: PlanLevel.EXECUTION,
    StepKind.REFINE: PlanLevel.EXECUTION,
}


def make_phase(phase_id: str, order: int, level: PlanLevel = PlanLevel.EXECUTION) -> PlanPhase:
    return PlanPhase(id=phase_id, name=f"Phase {phase_id}", level=level, order=order)


def make_step(
    step_id: str,
    phase_id: str = "phase-exec",
    kind: StepKind = StepKind.EDIT_CODE,
    order: int = 0,
    scope_id: str | None = "scope-global",
    dependencies: tuple[str, ...] = (),
    level: PlanLevel | None = None,
    summary: str | None = None,
    tools: tuple[str, ...] = (),
) -> PlanStep:
    return PlanStep(
        id=step_id,
        phase_id=phase_id,
        level=level if level is not None else _KIND_LEVEL[kind],
        order=order,
        kind=kind,
        title=f"Step {step_id}",
        summary=summary if summary is not None else f"Do {step_id}",
        scope_id=scope_id,
        dependencies=dependencies,
        suggested_tools=tools,
    )


GLOBAL_SCOPE = PlanScope(
    id="scope-global",
    kind=ScopeKind.GLOBAL,
    label="Workspace",
    selector="workspace root",
)
SYMBOL_SCOPE = PlanScope(
    id="scope-auth",
    kind=ScopeKind.SYMBOL,
    label="Auth service",
    selector="AuthService",
)
FILE_SCOPE = PlanScope(
    id="scope-server",
    kind=ScopeKind.FILE,
    label="Server sources",
    selector="files in src/server",
)


def bugfix_plan() -> TaskPlan:
    """Small, valid three-phase plan."""
    return TaskPlan(
        goal="Fix login timeout",
        task_kind=TaskKind.BUGFIX,
        context_summary="Users are logged out after 5 minutes",
        phases=(
            make_phase("phase-understand", 0, PlanLevel.ABSTRACT),
            make_phase("phase-plan", 1, PlanLevel.PLANNING),
            make_phase("phase-exec", 2, PlanLevel.EXECUTION),
        ),
        scopes=(GLOBAL_SCOPE, SYMBOL_SCOPE, FILE_SCOPE),
        steps=(
            make_step("s1", "phase-understand", StepKind.CLARIFY_GOAL, 0),
            make_step("s2", "phase-plan", StepKind.SCAN_CODE, 0, "scope-auth", ("s1",)),
            make_step("s3", "phase-plan", StepKind.DESIGN_SOLUTION, 1, "scope-auth", ("s2",)),
            make_step("s4", "phase-exec", StepKind.EDIT_CODE, 0, "scope-auth", ("s3",)),
            make_step("s5", "phase-exec", StepKind.RUN_TESTS, 1, "scope-server", ("s4",)),
        ),
    )


def wide_plan(phase_count: int = 5, steps_per_phase: int = 2) -> TaskPlan:
    """Plan with ``phase_count`` execution phases chained by dependencies."""
    phases = tuple(make_phase(f"p{i}", i) for i in range(phase_count))
    steps = []
    previous: str | None = None
    for i in range(phase_count):
        for j in range(steps_per_phase):
            step_id = f"p{i}-s{j}"
            steps.append(
                make_step(
                    step_id,
                    f"p{i}",
                    StepKind.EDIT_CODE,
                    j,
                    dependencies=(previous,) if previous else (),
                )
            )
            previous = step_id
    return TaskPlan(
        goal="Refactor the data layer",
        task_kind=TaskKind.REFACTOR,
        phases=phases,
        scopes=(GLOBAL_SCOPE,),
        steps=tuple(steps),
    )


def micro_step_plan(count: int = 6) -> TaskPlan:
    """One execution phase with ``count`` edit steps on the same scope."""
    steps = [make_step("prep", kind=StepKind.RUN_TESTS, order=0)]
    for i in range(count):
        steps.append(
            make_step(
                f"e{i}",
                kind=StepKind.EDIT_CODE,
                order=i + 1,
                scope_id="scope-auth",
                dependencies=(f"e{i - 1}",) if i else ("prep",),
                tools=("editor",) if i % 2 == 0 else ("editor", "grep"),
            )
        )
    steps.append(make_step("verify", kind=StepKind.RUN_TESTS, order=count + 1, dependencies=("e3",)))
    return TaskPlan(
        goal="Tidy AuthService",
        task_kind=TaskKind.REFACTOR,
        phases=(make_phase("phase-exec", 0),),
        scopes=(GLOBAL_SCOPE, SYMBOL_SCOPE),
        steps=tuple(steps),
    )


def bugfix_plan_data() -> dict[str, Any]:
    """Wire form of :func:`bugfix_plan`."""
    return bugfix_plan().to_dict()
