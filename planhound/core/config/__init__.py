"""Configuration models for PlanHound."""

from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.config.compression_config import CompressionConfig
from planhound.core.config.config import Config
from planhound.core.config.index_config import IndexConfig

__all__ = ["ChunkingConfig", "CompressionConfig", "Config", "IndexConfig"]
