"""Content index configuration."""

import argparse
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class IndexConfig(BaseModel):
    """Where the filesystem content index reads files from."""

    root: Path | None = Field(
        default=None, description="Workspace root used to resolve file scopes"
    )
    max_file_bytes: int = Field(
        default=2_000_000,
        ge=1,
        description="Files larger than this are not read into chunks",
    )

    @field_validator("root")
    def validate_root(cls, v: Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is not None and not isinstance(v, Path):
            return Path(v)
        return v

    def is_configured(self) -> bool:
        return self.root is not None

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--root",
            type=Path,
            help="Workspace root for resolving file scopes (default: none)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if root := os.getenv("PLANHOUND_INDEX__ROOT"):
            config["root"] = Path(root)
        if max_bytes := os.getenv("PLANHOUND_INDEX__MAX_FILE_BYTES"):
            config["max_file_bytes"] = int(max_bytes)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if getattr(args, "root", None):
            overrides["root"] = args.root
        return overrides

    def __repr__(self) -> str:
        return f"IndexConfig(root={self.root})"
