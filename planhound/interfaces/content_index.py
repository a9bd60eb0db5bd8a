"""Content index interface.

The chunking engine never reads the codebase itself. It asks a content index
to resolve a symbol name or a file path to text and a line range. Real symbol
resolution (LSP, tree-sitter, ...) lives outside PlanHound; any object
implementing this protocol can be plugged in.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class SymbolRecord:
    """A resolved symbol with its source text.

    ``text`` holds exactly the lines ``start_line..end_line`` (inclusive).
    """

    name: str
    kind: str
    file_path: str
    start_line: int
    end_line: int
    text: str

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class FileRecord:
    """A resolved file with its full text."""

    path: str
    text: str

    @property
    def line_count(self) -> int:
        return max(1, len(self.text.splitlines()))


@runtime_checkable
class ContentIndex(Protocol):
    """Lookup service for symbols and files."""

    def find_symbol(self, name: str) -> SymbolRecord | None:
        """Resolve a symbol name, or None when unknown."""
        ...

    def read_file(self, path: str) -> FileRecord | None:
        """Read a file relative to the workspace, or None when missing."""
        ...

    def list_files(self, pattern: str) -> list[str]:
        """Return workspace-relative paths matching a glob or directory pattern."""
        ...
