"""Chunking configuration for PlanHound.

Controls how scopes are split into code chunks and when chunks are merged
back into summaries.
"""

import argparse
import os
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ChunkingConfig(BaseModel):
    """Chunking limits and output options.

    Configuration can be provided via:
    - Environment variables (PLANHOUND_CHUNKING__*)
    - CLI arguments
    - Tool call options
    - Default values
    """

    max_chunks_per_step: int = Field(
        default=5, ge=1, description="Maximum chunks per file before dechunking"
    )
    max_lines_per_chunk: int = Field(
        default=100, ge=1, description="Maximum lines in a single chunk"
    )
    max_tokens_per_chunk: int | None = Field(
        default=None,
        ge=1,
        description="Optional token budget per chunk (estimated, 4 chars per token)",
    )
    include_content: bool = Field(
        default=True, description="Attach raw code to chunks"
    )
    apply_dechunking: bool = Field(
        default=True, description="Merge chunks into summaries when over the limit"
    )
    min_sub_chunk_lines: int = Field(
        default=5,
        ge=1,
        description="Sub-symbol spans shorter than this are folded into the next span",
    )

    @field_validator("max_tokens_per_chunk", mode="before")
    def validate_token_budget(cls, v: Any) -> Any:
        """Treat 0 and empty strings as "no budget"."""
        if v in (0, "0", ""):
            return None
        return v

    @classmethod
    def from_options(
        cls, options: dict[str, Any] | None, base: "ChunkingConfig | None" = None
    ) -> "ChunkingConfig":
        """Overlay camelCase tool options on top of a base configuration."""
        data = (base or cls()).model_dump()
        for key, field_name in _OPTION_KEYS.items():
            if options and options.get(key) is not None:
                data[field_name] = options[key]
        return cls(**data)

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add chunking-related CLI arguments."""
        parser.add_argument(
            "--max-chunks",
            type=int,
            help="Maximum chunks per file before dechunking (default: 5)",
        )
        parser.add_argument(
            "--max-lines",
            type=int,
            help="Maximum lines per chunk (default: 100)",
        )
        parser.add_argument(
            "--max-tokens",
            type=int,
            help="Optional estimated token budget per chunk",
        )
        parser.add_argument(
            "--no-content",
            action="store_true",
            help="Omit code content from chunks",
        )
        parser.add_argument(
            "--no-dechunk",
            action="store_true",
            help="Never merge chunks into summaries",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load chunking config from environment variables."""
        config: dict[str, Any] = {}
        if value := os.getenv("PLANHOUND_CHUNKING__MAX_CHUNKS_PER_STEP"):
            config["max_chunks_per_step"] = int(value)
        if value := os.getenv("PLANHOUND_CHUNKING__MAX_LINES_PER_CHUNK"):
            config["max_lines_per_chunk"] = int(value)
        if value := os.getenv("PLANHOUND_CHUNKING__MAX_TOKENS_PER_CHUNK"):
            config["max_tokens_per_chunk"] = int(value)
        if value := os.getenv("PLANHOUND_CHUNKING__INCLUDE_CONTENT"):
            config["include_content"] = value.strip().lower() in ("1", "true", "yes", "on")
        if value := os.getenv("PLANHOUND_CHUNKING__APPLY_DECHUNKING"):
            config["apply_dechunking"] = value.strip().lower() in ("1", "true", "yes", "on")
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract chunking config from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "max_chunks", None) is not None:
            overrides["max_chunks_per_step"] = args.max_chunks
        if getattr(args, "max_lines", None) is not None:
            overrides["max_lines_per_chunk"] = args.max_lines
        if getattr(args, "max_tokens", None) is not None:
            overrides["max_tokens_per_chunk"] = args.max_tokens
        if getattr(args, "no_content", False):
            overrides["include_content"] = False
        if getattr(args, "no_dechunk", False):
            overrides["apply_dechunking"] = False
        return overrides

    def __repr__(self) -> str:
        return (
            f"ChunkingConfig(max_chunks_per_step={self.max_chunks_per_step}, "
            f"max_lines_per_chunk={self.max_lines_per_chunk})"
        )


# Wire option name -> config field
_OPTION_KEYS = {
    "maxChunksPerStep": "max_chunks_per_step",
    "maxLinesPerChunk": "max_lines_per_chunk",
    "maxTokensPerChunk": "max_tokens_per_chunk",
    "includeContent": "include_content",
    "applyDechunking": "apply_dechunking",
}
