"""Code chunk models returned by the chunking engine."""

from dataclasses import dataclass, field
from typing import Any

from planhound.core.types.common import ChunkType


@dataclass(frozen=True)
class BlockInfo:
    """Logical block (if/for/while/switch/try/...) found in code."""

    kind: str
    start_line: int
    end_line: int
    depth: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "depth": self.depth,
        }


@dataclass(frozen=True)
class ChunkMetadata:
    """Descriptive data attached to a chunk."""

    line_count: int
    estimated_tokens: int = 0
    summary: str = ""
    symbol_name: str | None = None
    symbol_kind: str | None = None
    parent_symbol_name: str | None = None
    merged_from: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "lineCount": self.line_count,
            "estimatedTokens": self.estimated_tokens,
            "summary": self.summary,
        }
        if self.symbol_name is not None:
            result["symbolName"] = self.symbol_name
        if self.symbol_kind is not None:
            result["symbolKind"] = self.symbol_kind
        if self.parent_symbol_name is not None:
            result["parentSymbolName"] = self.parent_symbol_name
        if self.merged_from is not None:
            result["mergedFrom"] = list(self.merged_from)
        return result


@dataclass(frozen=True)
class CodeChunk:
    """A bounded fragment of source code (or a summary of several).

    Lines are 1-based and inclusive on both ends.
    """

    id: str
    file_path: str
    start_line: int
    end_line: int
    chunk_type: ChunkType
    metadata: ChunkMetadata
    content: str | None = None
    blocks: tuple[BlockInfo, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.start_line > self.end_line:
            raise ValueError(
                f"Chunk {self.id}: start_line {self.start_line} > end_line {self.end_line}"
            )
        if self.metadata.line_count != self.end_line - self.start_line + 1:
            raise ValueError(
                f"Chunk {self.id}: line_count {self.metadata.line_count} does not match "
                f"span {self.start_line}-{self.end_line}"
            )
        if self.chunk_type == ChunkType.SUB_SYMBOL and not self.metadata.parent_symbol_name:
            raise ValueError(f"Sub-symbol chunk {self.id} has no parent symbol name")
        if self.chunk_type == ChunkType.SUMMARY and not self.metadata.merged_from:
            raise ValueError(f"Summary chunk {self.id} has no contributors")
        object.__setattr__(self, "blocks", tuple(self.blocks))

    @property
    def line_count(self) -> int:
        return self.metadata.line_count

    @property
    def estimated_tokens(self) -> int:
        return self.metadata.estimated_tokens

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "filePath": self.file_path,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "type": self.chunk_type.value,
            "metadata": self.metadata.to_dict(),
        }
        if self.content is not None:
            result["content"] = self.content
        if self.blocks:
            result["blocks"] = [block.to_dict() for block in self.blocks]
        return result
