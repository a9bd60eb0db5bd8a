"""Interfaces to collaborators outside PlanHound."""

from planhound.interfaces.content_index import ContentIndex, FileRecord, SymbolRecord

__all__ = ["ContentIndex", "FileRecord", "SymbolRecord"]
