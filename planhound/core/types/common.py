"""Common enums and type aliases shared across PlanHound."""

from enum import Enum, IntEnum
from typing import NewType

StepId = NewType("StepId", str)
PhaseId = NewType("PhaseId", str)
ScopeId = NewType("ScopeId", str)
ChunkId = NewType("ChunkId", str)
LineNumber = NewType("LineNumber", int)


class PlanLevel(IntEnum):
    """Abstraction level of a phase or step.

    0 frames the goal, 1 plans against concrete code areas, 2 executes.
    """

    ABSTRACT = 0
    PLANNING = 1
    EXECUTION = 2


class StepKind(str, Enum):
    """Kind of work a plan step performs."""

    CLARIFY_GOAL = "clarify_goal"
    GATHER_CONTEXT = "gather_context"
    SCAN_CODE = "scan_code"
    DESIGN_SOLUTION = "design_solution"
    EDIT_CODE = "edit_code"
    RUN_TESTS = "run_tests"
    REFINE = "refine"


class ScopeKind(str, Enum):
    """Granularity of a work scope."""

    GLOBAL = "global"
    MODULE = "module"
    FILE = "file"
    SYMBOL = "symbol"


class TaskKind(str, Enum):
    """Task category; fixes the phase template of a generated plan."""

    BUGFIX = "bugfix"
    FEATURE = "feature"
    REFACTOR = "refactor"
    OTHER = "other"


class StepStatus(str, Enum):
    """Execution status of a plan step."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"


class ChunkType(str, Enum):
    """Kind of code chunk returned by the chunking engine."""

    SYMBOL = "symbol"
    SUB_SYMBOL = "sub_symbol"
    FILE_RANGE = "file_range"
    SUMMARY = "summary"


class ResolutionType(str, Enum):
    """How a scope selector should be interpreted."""

    GLOBAL = "global"
    MODULE = "module"
    FILE = "file"
    SYMBOL = "symbol"
    PATTERN = "pattern"
    TOOL_ACTION = "tool_action"
