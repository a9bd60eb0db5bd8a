"""Plan compression limits."""

import argparse
import os
from typing import Any

from pydantic import BaseModel, Field


class CompressionConfig(BaseModel):
    """Size limits applied by the plan compressor.

    Every limit is optional; an unset limit disables the matching stage.
    Environment variables use the PLANHOUND_COMPRESSION__* prefix.
    """

    target_max_phases: int | None = Field(
        default=None, ge=1, description="Maximum number of phases to keep"
    )
    target_max_steps: int | None = Field(
        default=None, ge=1, description="Maximum number of steps per phase"
    )
    max_micro_steps_per_phase: int | None = Field(
        default=None,
        ge=1,
        description="Execution steps per (phase, scope, kind) group before merging",
    )

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add compression-related CLI arguments."""
        parser.add_argument(
            "--max-phases",
            type=int,
            help="Maximum number of phases to keep (truncate if exceeded)",
        )
        parser.add_argument(
            "--max-steps",
            type=int,
            help="Maximum number of steps per phase (truncate if exceeded)",
        )
        parser.add_argument(
            "--max-micro-steps",
            type=int,
            help="Maximum execution steps per group before merging",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load compression limits from environment variables."""
        config: dict[str, Any] = {}
        if value := os.getenv("PLANHOUND_COMPRESSION__TARGET_MAX_PHASES"):
            config["target_max_phases"] = int(value)
        if value := os.getenv("PLANHOUND_COMPRESSION__TARGET_MAX_STEPS"):
            config["target_max_steps"] = int(value)
        if value := os.getenv("PLANHOUND_COMPRESSION__MAX_MICRO_STEPS_PER_PHASE"):
            config["max_micro_steps_per_phase"] = int(value)
        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract compression limits from CLI arguments."""
        overrides: dict[str, Any] = {}
        if getattr(args, "max_phases", None) is not None:
            overrides["target_max_phases"] = args.max_phases
        if getattr(args, "max_steps", None) is not None:
            overrides["target_max_steps"] = args.max_steps
        if getattr(args, "max_micro_steps", None) is not None:
            overrides["max_micro_steps_per_phase"] = args.max_micro_steps
        return overrides

    @classmethod
    def from_options(
        cls, options: dict[str, Any] | None, base: "CompressionConfig | None" = None
    ) -> "CompressionConfig":
        """Overlay camelCase tool arguments on top of a base configuration."""
        data = (base or cls()).model_dump()
        for key, field_name in _OPTION_KEYS.items():
            if options and options.get(key) is not None:
                data[field_name] = options[key]
        return cls(**data)


# Wire option name -> config field
_OPTION_KEYS = {
    "targetMaxPhases": "target_max_phases",
    "targetMaxSteps": "target_max_steps",
    "maxMicroStepsPerPhase": "max_micro_steps_per_phase",
}
