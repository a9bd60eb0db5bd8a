"""Service bundle construction shared by the CLI and the MCP server."""

from dataclasses import dataclass

from loguru import logger

from planhound.core.config.config import Config
from planhound.interfaces.content_index import ContentIndex
from planhound.providers.index.filesystem_index import FileSystemContentIndex
from planhound.services.chunking_service import ChunkingService
from planhound.services.plan_compression_service import PlanCompressionService


@dataclass
class PlanHoundServices:
    """Services used by tool implementations."""

    compression: PlanCompressionService
    chunking: ChunkingService
    index: ContentIndex | None = None


def create_index(config: Config) -> ContentIndex | None:
    root = config.index.root
    if root is None:
        return None
    if not root.is_dir():
        logger.warning(f"Index root {root} is not a directory; file scopes will use placeholders")
        return None
    return FileSystemContentIndex(root, max_file_bytes=config.index.max_file_bytes)


def create_services(config: Config, index: ContentIndex | None = None) -> PlanHoundServices:
    """Build the service bundle.

    Args:
        config: Loaded configuration
        index: Content index to use instead of one built from ``config.index``
    """
    if index is None:
        index = create_index(config)
    logger.debug(f"Creating services (index={type(index).__name__ if index else None})")
    return PlanHoundServices(
        compression=PlanCompressionService(config.compression),
        chunking=ChunkingService(index, config.chunking),
        index=index,
    )
