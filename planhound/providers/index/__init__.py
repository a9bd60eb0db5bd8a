"""Content index providers."""

from planhound.providers.index.filesystem_index import FileSystemContentIndex

__all__ = ["FileSystemContentIndex"]
