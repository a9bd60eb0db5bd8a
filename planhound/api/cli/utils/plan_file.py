"""Reading task plans from files or stdin."""

import json
import sys
from pathlib import Path
from typing import Any

from planhound.core.exceptions import PlanHoundError


def load_plan_data(path: Path) -> dict[str, Any]:
    """Load a plan's wire form from ``path`` (``-`` for stdin).

    Raises:
        PlanHoundError: If the file cannot be read or is not a JSON object
    """
    try:
        text = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
    except OSError as e:
        raise PlanHoundError(f"Cannot read plan file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlanHoundError(f"Plan file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise PlanHoundError(f"Plan file {path} must contain a JSON object")
    # Accept the output of `planhound compress --json` as input
    if "plan" in data and isinstance(data["plan"], dict) and "goal" not in data:
        return data["plan"]
    return data
