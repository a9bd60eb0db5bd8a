"""Top-level configuration for PlanHound.

Sources are layered: defaults, then PLANHOUND_* environment variables, then
CLI arguments.
"""

import os
from typing import Any

from pydantic import BaseModel, Field

from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.config.compression_config import CompressionConfig
from planhound.core.config.index_config import IndexConfig


class Config(BaseModel):
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    compression: CompressionConfig = Field(default_factory=CompressionConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    debug: bool = Field(default=False, description="Enable debug logging")

    @classmethod
    def load(cls, args: Any = None) -> "Config":
        """Build configuration from environment and optional CLI arguments."""
        chunking = ChunkingConfig.load_from_env()
        compression = CompressionConfig.load_from_env()
        index = IndexConfig.load_from_env()
        debug = os.getenv("PLANHOUND_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")

        if args is not None:
            chunking.update(ChunkingConfig.extract_cli_overrides(args))
            compression.update(CompressionConfig.extract_cli_overrides(args))
            index.update(IndexConfig.extract_cli_overrides(args))
            if getattr(args, "verbose", False):
                debug = True

        return cls(
            chunking=ChunkingConfig(**chunking),
            compression=CompressionConfig(**compression),
            index=IndexConfig(**index),
            debug=debug,
        )
