"""Chunk and component id generation."""

import uuid


def generate_id(prefix: str = "chunk", index: int | None = None) -> str:
    """Return ``<prefix>-<8 hex chars>[-<index>]``."""
    suffix = f"-{index}" if index is not None else ""
    return f"{prefix}-{uuid.uuid4().hex[:8]}{suffix}"
