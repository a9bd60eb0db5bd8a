"""Approximate token counting for budgeting decisions."""

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str | None) -> int:
    """Estimate token count as ceil(characters / 4). Never exact."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)
