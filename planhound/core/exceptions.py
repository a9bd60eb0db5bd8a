"""Exception hierarchy for PlanHound.

Only misuse-class problems are raised. Structural defects in a plan and
failed index lookups are reported as warnings on the result objects instead.
"""


class PlanHoundError(Exception):
    """Base class for all PlanHound errors."""


class PlanValidationError(PlanHoundError):
    """A plan violates its structural invariants."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid plan")


class EmptyMergeError(PlanHoundError, ValueError):
    """Raised when a merge is requested over zero units."""


class StepNotFoundError(PlanHoundError, KeyError):
    """Raised when a step id is explicitly requested but absent from the plan."""

    def __init__(self, step_id: str):
        self.step_id = step_id
        super().__init__(step_id)

    def __str__(self) -> str:
        return f'Step with id "{self.step_id}" not found in plan'


class ChunkingError(PlanHoundError):
    """Invalid chunking request (for example neither scope nor step given)."""
