"""Declarative tool registry for the MCP server.

Every tool is defined once here with its JSON schema and an async
implementation. Servers only translate between their protocol and
``execute_tool``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypedDict, cast

from planhound.core.models.plan_schema import parse_plan
from planhound.core.types.common import StepStatus
from planhound.planning.progress import (
    get_executable_steps,
    get_next_executable_step,
    get_plan_progress,
    update_step_status,
)
from planhound.services.factory import PlanHoundServices
from planhound.version import __version__


class HealthStatus(TypedDict):
    status: str
    version: str
    index_configured: bool
    index_type: str | None


_PLAN_PARAMETER = {
    "description": "TaskPlan JSON object (goal, taskKind, phases, scopes, steps)",
    "type": "object",
}


async def health_check_impl(services: PlanHoundServices | None) -> HealthStatus:
    """Core health check implementation."""
    index = services.index if services is not None else None
    health_status = {
        "status": "healthy",
        "version": __version__,
        "index_configured": index is not None,
        "index_type": type(index).__name__ if index is not None else None,
    }
    return cast(HealthStatus, health_status)


async def validate_plan_impl(
    services: PlanHoundServices,
    plan: dict[str, Any],
    target_max_phases: int | None = None,
    target_max_steps: int | None = None,
    max_micro_steps_per_phase: int | None = None,
) -> dict[str, Any]:
    """Validate and compress a plan, returning plan, changes, warnings, stats and compact text."""
    config = services.compression.config.model_copy(
        update={
            key: value
            for key, value in {
                "target_max_phases": target_max_phases,
                "target_max_steps": target_max_steps,
                "max_micro_steps_per_phase": max_micro_steps_per_phase,
            }.items()
            if value is not None
        }
    )
    result = services.compression.compress(plan, config)
    return result.to_dict()


async def get_chunks_impl(
    services: PlanHoundServices,
    plan: dict[str, Any],
    scope: dict[str, Any] | None = None,
    step: dict[str, Any] | None = None,
    step_id: str | None = None,
    options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    result = services.chunking.get_chunks(
        plan, scope=scope, step=step, step_id=step_id, options=options
    )
    return result.to_dict()


async def plan_progress_impl(plan: dict[str, Any]) -> dict[str, Any]:
    task_plan = parse_plan(plan)
    progress = get_plan_progress(task_plan)
    next_step = get_next_executable_step(task_plan)
    progress["nextStepId"] = next_step.id if next_step else None
    return progress


async def next_step_impl(plan: dict[str, Any]) -> dict[str, Any]:
    """Next executable step plus the ids of every currently executable step."""
    task_plan = parse_plan(plan)
    executable = get_executable_steps(task_plan)
    return {
        "step": executable[0].to_dict() if executable else None,
        "executableStepIds": [step.id for step in executable],
    }


async def update_step_status_impl(
    plan: dict[str, Any], step_id: str, status: str
) -> dict[str, Any]:
    task_plan = parse_plan(plan)
    updated = update_step_status(task_plan, step_id, StepStatus(status))
    return {"plan": updated.to_dict(), "progress": get_plan_progress(updated)}


@dataclass
class Tool:
    """Tool definition with metadata and implementation."""

    name: str
    description: str
    parameters: dict[str, Any]
    implementation: Callable
    requires_services: bool = True


# Define all tools declaratively
TOOL_DEFINITIONS = [
    Tool(
        name="health_check",
        description="Check server health status",
        parameters={
            "properties": {},
            "type": "object",
        },
        implementation=health_check_impl,
        requires_services=False,
    ),
    Tool(
        name="validate_plan",
        description="Validate and compress a hierarchical task plan. Corrects step levels, repairs scopes, merges over-large groups of execution steps, truncates to the given limits and keeps the dependency graph consistent. Returns the plan with a list of changes, warnings, stats and a compact text form.",
        parameters={
            "properties": {
                "plan": _PLAN_PARAMETER,
                "targetMaxPhases": {
                    "description": "Maximum number of phases to keep",
                    "type": "integer",
                },
                "targetMaxSteps": {
                    "description": "Maximum number of steps per phase",
                    "type": "integer",
                },
                "maxMicroStepsPerPhase": {
                    "description": "Execution steps per (phase, scope, kind) group before they are merged",
                    "type": "integer",
                },
            },
            "required": ["plan"],
            "type": "object",
        },
        implementation=validate_plan_impl,
    ),
    Tool(
        name="get_chunks",
        description="Get bounded code chunks for a plan scope or step. Large symbols are split along logical boundaries and too many chunks are merged into summaries.",
        parameters={
            "properties": {
                "plan": _PLAN_PARAMETER,
                "scope": {
                    "description": "PlanScope to chunk. Required if step and stepId are not provided.",
                    "type": "object",
                },
                "step": {
                    "description": "PlanStep whose scope is chunked",
                    "type": "object",
                },
                "stepId": {
                    "description": "ID of a step in the plan whose scope is chunked",
                    "type": "string",
                },
                "options": {
                    "description": "Chunking options (maxChunksPerStep, maxLinesPerChunk, maxTokensPerChunk, includeContent, applyDechunking)",
                    "type": "object",
                },
            },
            "required": ["plan"],
            "type": "object",
        },
        implementation=get_chunks_impl,
    ),
    Tool(
        name="plan_progress",
        description="Count plan steps by status and report completion percentage and the next executable step",
        parameters={
            "properties": {"plan": _PLAN_PARAMETER},
            "required": ["plan"],
            "type": "object",
        },
        implementation=plan_progress_impl,
        requires_services=False,
    ),
    Tool(
        name="next_step",
        description="Return the next step whose dependencies are all done, ordered by phase then step order",
        parameters={
            "properties": {"plan": _PLAN_PARAMETER},
            "required": ["plan"],
            "type": "object",
        },
        implementation=next_step_impl,
        requires_services=False,
    ),
    Tool(
        name="update_step_status",
        description="Set the status of one step and return the updated plan with its progress",
        parameters={
            "properties": {
                "plan": _PLAN_PARAMETER,
                "stepId": {"description": "ID of the step to update", "type": "string"},
                "status": {
                    "description": "New status",
                    "enum": [status.value for status in StepStatus],
                    "type": "string",
                },
            },
            "required": ["plan", "stepId", "status"],
            "type": "object",
        },
        implementation=update_step_status_impl,
        requires_services=False,
    ),
]

# Create registry as a dict for easy lookup
TOOL_REGISTRY: dict[str, Tool] = {tool.name: tool for tool in TOOL_DEFINITIONS}


async def execute_tool(
    tool_name: str,
    services: PlanHoundServices | None,
    arguments: dict[str, Any],
) -> dict[str, Any]:
    """Execute a tool from the registry with proper argument handling.

    Args:
        tool_name: Name of the tool to execute
        services: Service bundle (may be None for plan-only tools)
        arguments: Tool arguments from the request

    Returns:
        Tool execution result

    Raises:
        ValueError: If tool not found in registry or services are missing
        Exception: If tool execution fails
    """
    if tool_name not in TOOL_REGISTRY:
        raise ValueError(f"Unknown tool: {tool_name}")

    tool = TOOL_REGISTRY[tool_name]
    if tool.requires_services and services is None:
        raise ValueError(f"Tool {tool_name} requires initialized services")

    if tool_name == "health_check":
        result = await tool.implementation(services)
        return dict(result)

    elif tool_name == "validate_plan":
        return await tool.implementation(
            services=services,
            plan=arguments["plan"],
            target_max_phases=arguments.get("targetMaxPhases"),
            target_max_steps=arguments.get("targetMaxSteps"),
            max_micro_steps_per_phase=arguments.get("maxMicroStepsPerPhase"),
        )

    elif tool_name == "get_chunks":
        return await tool.implementation(
            services=services,
            plan=arguments["plan"],
            scope=arguments.get("scope"),
            step=arguments.get("step"),
            step_id=arguments.get("stepId"),
            options=arguments.get("options"),
        )

    elif tool_name in ("plan_progress", "next_step"):
        return await tool.implementation(plan=arguments["plan"])

    elif tool_name == "update_step_status":
        return await tool.implementation(
            plan=arguments["plan"],
            step_id=arguments["stepId"],
            status=arguments["status"],
        )

    else:
        raise ValueError(f"Tool {tool_name} not implemented in execute_tool")
