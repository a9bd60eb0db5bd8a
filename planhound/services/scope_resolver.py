"""Translate plan scope selectors into actionable resolution info.

Selectors are free text written by planning agents. Recognised forms, tried
in order:

- ``workspace root`` (or a global scope) -> global
- ``use <tool>.<function>('Name')`` -> tool_action on symbol ``Name``
- ``module related to: <description>`` (or a module scope) -> module
- ``files in <path>``, a path or glob (or a file scope) -> pattern
- a bare identifier (or a symbol scope without whitespace) -> symbol
- anything else -> module, using the selector as description
"""

import re
from dataclasses import dataclass, field
from typing import Any

from planhound.core.models.plan import PlanScope, PlanStep, TaskPlan
from planhound.core.types.common import ResolutionType, ScopeKind

_TOOL_ACTION_RE = re.compile(
    r"use\s+(\w+)\.(\w+)\(\s*['\"]([^'\"]+)['\"]\s*\)", re.IGNORECASE
)
_MODULE_RE = re.compile(r"module\s+related\s+to:\s*(.+)", re.IGNORECASE | re.DOTALL)
_FILES_IN_RE = re.compile(r"^files?\s+in\s+(\S+)", re.IGNORECASE)
_PATH_RE = re.compile(r"^[\w.\-*/]+$")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")


@dataclass
class ScopeResolution:
    """How a scope should be turned into code."""

    scope: PlanScope
    resolution_type: ResolutionType
    parsed_info: dict[str, Any] = field(default_factory=dict)
    instructions: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "scope": self.scope.to_dict(),
            "resolutionType": self.resolution_type.value,
            "parsedInfo": dict(self.parsed_info),
            "instructions": self.instructions,
        }


def _looks_like_path(selector: str) -> bool:
    # "src/server", "**/*.py"; dotted names like "Service.method" are symbols
    return bool(_PATH_RE.match(selector)) and ("/" in selector or "*" in selector)


def translate_scope_selector(scope: PlanScope) -> ScopeResolution:
    selector = scope.selector.strip()

    if selector.lower() == "workspace root" or scope.kind == ScopeKind.GLOBAL:
        return ScopeResolution(
            scope=scope,
            resolution_type=ResolutionType.GLOBAL,
            instructions="Use the entire workspace as the scope",
        )

    if match := _TOOL_ACTION_RE.search(selector):
        tool_name = f"{match.group(1)}.{match.group(2)}"
        symbol_name = match.group(3)
        return ScopeResolution(
            scope=scope,
            resolution_type=ResolutionType.TOOL_ACTION,
            parsed_info={
                "toolName": tool_name,
                "toolArgs": {"name": symbol_name},
                "symbolName": symbol_name,
            },
            instructions=f'Call {tool_name} with symbol name "{symbol_name}"',
        )

    module_match = _MODULE_RE.search(selector)
    if module_match or scope.kind == ScopeKind.MODULE:
        description = module_match.group(1).strip() if module_match else selector
        return ScopeResolution(
            scope=scope,
            resolution_type=ResolutionType.MODULE,
            parsed_info={"moduleDescription": description},
            instructions=(
                f"Find module related to: {description}. "
                "Use semantic search to locate relevant code areas."
            ),
        )

    files_match = _FILES_IN_RE.match(selector)
    if files_match or _looks_like_path(selector) or scope.kind == ScopeKind.FILE:
        path_pattern = files_match.group(1) if files_match else selector
        return ScopeResolution(
            scope=scope,
            resolution_type=ResolutionType.PATTERN,
            parsed_info={"pathPattern": path_pattern},
            instructions=f"Search for files matching pattern: {path_pattern}",
        )

    # Symbol scopes written as prose fall through to a module description
    if _IDENTIFIER_RE.match(selector) or (
        scope.kind == ScopeKind.SYMBOL and not any(ch.isspace() for ch in selector)
    ):
        return ScopeResolution(
            scope=scope,
            resolution_type=ResolutionType.SYMBOL,
            parsed_info={"symbolName": selector},
            instructions=f'Find symbol named "{selector}"',
        )

    return ScopeResolution(
        scope=scope,
        resolution_type=ResolutionType.MODULE,
        parsed_info={"moduleDescription": selector},
        instructions=(
            f"Resolve scope using description: {selector}. "
            "Use semantic search to find relevant code."
        ),
    )


def resolve_scope(scope: PlanScope, plan: TaskPlan) -> ScopeResolution:
    """Translate ``scope`` and add plan context to module instructions."""
    resolution = translate_scope_selector(scope)
    if plan.goal and resolution.resolution_type == ResolutionType.MODULE:
        resolution.instructions = f"{resolution.instructions} (Goal: {plan.goal})"
    return resolution


def get_step_scope(step: PlanStep, plan: TaskPlan) -> PlanScope | None:
    if step.scope_id is None:
        return None
    return plan.get_scope(step.scope_id)
