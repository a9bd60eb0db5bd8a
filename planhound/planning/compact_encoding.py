"""Compact pipe-delimited text form of a plan for token-lean agent prompts.

Example::

    Goal: Fix login timeout
    TaskKind: bugfix

    Phases:
    ID|Name|Level|Order|Summary
    ---|----|-----|-----|-------
    phase-1|Understand|0|0|
"""

from planhound.core.models.plan import TaskPlan

PHASE_HEADER = ("ID", "Name", "Level", "Order", "Summary")
SCOPE_HEADER = ("ID", "Kind", "Label", "Selector")
STEP_HEADER = ("ID", "Phase", "Level", "Order", "Kind", "Title", "Dependencies")


def escape_cell(value: object) -> str:
    """Make a value safe for one table cell."""
    if value is None:
        return ""
    text = str(value)
    return (
        text.replace("\\", "\\\\")
        .replace("|", "\\|")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )


def _table(title: str, header: tuple[str, ...], rows: list[tuple]) -> list[str]:
    lines = [f"{title}:", "|".join(header), "|".join("-" * max(3, len(h)) for h in header)]
    lines.extend("|".join(escape_cell(cell) for cell in row) for row in rows)
    return lines


def to_compact_text(plan: TaskPlan) -> str:
    lines = [
        f"Goal: {escape_cell(plan.goal)}",
        f"TaskKind: {plan.task_kind.value}",
    ]
    if plan.context_summary:
        lines.append(f"Context: {escape_cell(plan.context_summary)}")
    lines.append("")

    lines.extend(
        _table(
            "Phases",
            PHASE_HEADER,
            [(p.id, p.name, int(p.level), p.order, p.summary) for p in plan.phases],
        )
    )
    lines.append("")
    lines.extend(
        _table(
            "Scopes",
            SCOPE_HEADER,
            [(s.id, s.kind.value, s.label, s.selector) for s in plan.scopes],
        )
    )
    lines.append("")
    lines.extend(
        _table(
            "Steps",
            STEP_HEADER,
            [
                (
                    s.id,
                    s.phase_id,
                    int(s.level),
                    s.order,
                    s.kind.value,
                    s.title,
                    ",".join(s.dependencies),
                )
                for s in plan.steps
            ],
        )
    )
    return "\n".join(lines)
