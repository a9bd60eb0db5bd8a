"""Build bounded code chunks from symbols and file ranges.

A symbol that fits in ``max_lines_per_chunk`` becomes one chunk. A larger
symbol is split along logical boundaries found by the boundary detector,
with fixed-size windows as a fallback for spans that are still too large.
File ranges are always split into fixed consecutive windows.
"""

from dataclasses import replace

from loguru import logger

from planhound.chunking.boundaries import scan_boundaries
from planhound.chunking.tokens import CHARS_PER_TOKEN, estimate_tokens
from planhound.core.config.chunking_config import ChunkingConfig
from planhound.core.models.chunk import BlockInfo, ChunkMetadata, CodeChunk
from planhound.core.types.common import ChunkType
from planhound.interfaces.content_index import SymbolRecord
from planhound.utils.ids import generate_id


def _slice_lines(lines: list[str], first_line: int, start: int, end: int) -> str:
    """Text of lines ``start..end`` where ``lines[0]`` is line ``first_line``."""
    return "\n".join(lines[start - first_line : end - first_line + 1])


def _windows(start: int, end: int, size: int) -> list[tuple[int, int]]:
    """Consecutive ``(start, end)`` windows of ``size`` lines covering the span."""
    spans = []
    current = start
    while current <= end:
        window_end = min(current + size - 1, end)
        spans.append((current, window_end))
        current = window_end + 1
    return spans


def _token_windows(
    lines: list[str], first_line: int, end_line: int, max_tokens: int
) -> list[tuple[int, int]]:
    """Greedy line spans whose text stays within ``max_tokens``.

    A single line over the budget still gets a span of its own.
    """
    spans = []
    span_start = first_line
    max_chars = max_tokens * CHARS_PER_TOKEN
    chars = -1  # no newline before the first line of a span
    for offset, line in enumerate(lines[: end_line - first_line + 1]):
        line_no = first_line + offset
        if line_no > span_start and chars + 1 + len(line) > max_chars:
            spans.append((span_start, line_no - 1))
            span_start = line_no
            chars = -1
        chars += 1 + len(line)
    spans.append((span_start, end_line))
    return spans


def create_symbol_chunk(symbol: SymbolRecord, config: ChunkingConfig) -> CodeChunk:
    """Single chunk covering a whole symbol."""
    line_count = symbol.line_count
    return CodeChunk(
        id=generate_id("symbol"),
        file_path=symbol.file_path,
        start_line=symbol.start_line,
        end_line=symbol.end_line,
        chunk_type=ChunkType.SYMBOL,
        metadata=ChunkMetadata(
            line_count=line_count,
            estimated_tokens=estimate_tokens(symbol.text),
            summary=f"{symbol.kind} {symbol.name} ({line_count} lines)",
            symbol_name=symbol.name,
            symbol_kind=symbol.kind,
        ),
        content=symbol.text if config.include_content else None,
    )


def _sub_symbol_chunk(
    symbol: SymbolRecord,
    lines: list[str],
    blocks: list[BlockInfo],
    start: int,
    end: int,
    index: int,
    config: ChunkingConfig,
) -> CodeChunk:
    code = _slice_lines(lines, symbol.start_line, start, end)
    return CodeChunk(
        id=generate_id("sub-symbol", index),
        file_path=symbol.file_path,
        start_line=start,
        end_line=end,
        chunk_type=ChunkType.SUB_SYMBOL,
        metadata=ChunkMetadata(
            line_count=end - start + 1,
            estimated_tokens=estimate_tokens(code),
            summary=f"Sub-chunk of {symbol.kind} {symbol.name}: lines {start}-{end}",
            symbol_name=f"{symbol.name} (part {index + 1})",
            symbol_kind=symbol.kind,
            parent_symbol_name=symbol.name,
        ),
        content=code if config.include_content else None,
        blocks=tuple(b for b in blocks if b.start_line >= start and b.end_line <= end),
    )


def sub_symbol_spans(
    boundaries: list[int], max_lines: int, min_lines: int
) -> list[tuple[int, int]]:
    """Turn sorted boundary lines into gap-free, non-overlapping spans.

    The first and last boundaries are the unit's own start and end. Each
    boundary after the first closes the span before it; a span shorter than
    ``min_lines`` is carried into the next one unless it is the last. Spans
    longer than ``max_lines`` are cut into fixed windows.
    """
    if not boundaries:
        return []
    spans: list[tuple[int, int]] = []
    span_start = boundaries[0]
    if len(boundaries) == 1:
        return [(span_start, span_start)]

    for position in range(1, len(boundaries)):
        is_last = position == len(boundaries) - 1
        span_end = boundaries[position] if is_last else boundaries[position] - 1
        if not is_last and span_end - span_start + 1 < min_lines:
            continue
        spans.extend(_windows(span_start, span_end, max_lines))
        span_start = boundaries[position]
    return spans


def chunk_large_symbol(symbol: SymbolRecord, config: ChunkingConfig) -> list[CodeChunk]:
    """Split an oversized symbol into sub-symbol chunks along logical boundaries."""
    lines = symbol.text.split("\n")
    scan = scan_boundaries(symbol.text, symbol.start_line)

    boundary_set = {symbol.start_line, symbol.end_line}
    boundary_set.update(
        line
        for line in scan.candidate_lines()
        if symbol.start_line <= line <= symbol.end_line
    )
    boundaries = sorted(boundary_set)

    spans = sub_symbol_spans(
        boundaries, config.max_lines_per_chunk, config.min_sub_chunk_lines
    )
    chunks = [
        _sub_symbol_chunk(symbol, lines, scan.blocks, start, end, index, config)
        for index, (start, end) in enumerate(spans)
    ]
    logger.debug(
        f"Split {symbol.kind} {symbol.name} ({symbol.line_count} lines) into "
        f"{len(chunks)} sub-chunks using {len(boundaries)} boundaries"
    )
    return chunks


def build_symbol_chunks(symbol: SymbolRecord, config: ChunkingConfig) -> list[CodeChunk]:
    """Chunks for one resolved symbol, bounded by ``max_lines_per_chunk``."""
    if symbol.line_count <= config.max_lines_per_chunk:
        return [create_symbol_chunk(symbol, config)]
    return chunk_large_symbol(symbol, config)


def chunk_file_range(
    file_path: str,
    start_line: int,
    end_line: int,
    config: ChunkingConfig,
    text: str | None = None,
) -> list[CodeChunk]:
    """Split ``start_line..end_line`` of a file into fixed consecutive windows.

    Args:
        file_path: Path reported on each chunk
        start_line: First line (1-based)
        end_line: Last line (inclusive)
        config: Chunking limits
        text: Full file text, line 1 first. Without it chunks carry no
            content and a token estimate of 0.
    """
    if end_line < start_line:
        raise ValueError(f"Invalid file range {start_line}-{end_line} for {file_path}")

    lines = text.split("\n") if text is not None else None
    spans = _windows(start_line, end_line, config.max_lines_per_chunk)
    chunks = []
    for index, (start, end) in enumerate(spans):
        code = _slice_lines(lines, 1, start, end) if lines is not None else None
        line_count = end - start + 1
        chunks.append(
            CodeChunk(
                id=generate_id("file", index if len(spans) > 1 else None),
                file_path=file_path,
                start_line=start,
                end_line=end,
                chunk_type=ChunkType.FILE_RANGE,
                metadata=ChunkMetadata(
                    line_count=line_count,
                    estimated_tokens=estimate_tokens(code),
                    summary=f"File range: lines {start}-{end} ({line_count} lines)",
                ),
                content=code if config.include_content else None,
            )
        )
    return chunks


def apply_token_budget(
    chunks: list[CodeChunk], max_tokens: int | None
) -> tuple[list[CodeChunk], list[str]]:
    """Re-split chunks whose estimated tokens exceed ``max_tokens``.

    Only chunks that still carry content can be re-split. A symbol chunk that
    is re-split becomes sub-symbol chunks of that symbol.
    """
    if not max_tokens:
        return chunks, []

    result: list[CodeChunk] = []
    warnings: list[str] = []
    for chunk in chunks:
        if chunk.estimated_tokens <= max_tokens or chunk.content is None:
            if chunk.estimated_tokens > max_tokens:
                warnings.append(
                    f"Chunk {chunk.id} exceeds token budget "
                    f"({chunk.estimated_tokens} > {max_tokens}) and has no content to split"
                )
            result.append(chunk)
            continue

        pieces = _split_by_tokens(chunk, chunk.content, max_tokens)
        warnings.append(
            f"Split chunk {chunk.id} ({chunk.estimated_tokens} tokens) into "
            f"{len(pieces)} pieces to respect {max_tokens} tokens per chunk"
        )
        result.extend(pieces)
    return result, warnings


def _split_by_tokens(chunk: CodeChunk, content: str, max_tokens: int) -> list[CodeChunk]:
    lines = content.split("\n")

    parent = chunk.metadata.parent_symbol_name or chunk.metadata.symbol_name
    chunk_type = chunk.chunk_type
    if chunk_type == ChunkType.SYMBOL:
        chunk_type = ChunkType.SUB_SYMBOL

    pieces = []
    spans = _token_windows(lines, chunk.start_line, chunk.end_line, max_tokens)
    for index, (start, end) in enumerate(spans):
        code = _slice_lines(lines, chunk.start_line, start, end)
        if chunk_type == ChunkType.SUB_SYMBOL:
            kind = chunk.metadata.symbol_kind or "symbol"
            summary = f"Sub-chunk of {kind} {parent}: lines {start}-{end}"
            symbol_name = f"{parent} (part {index + 1})"
        else:
            summary = f"File range: lines {start}-{end} ({end - start + 1} lines)"
            symbol_name = None
        pieces.append(
            replace(
                chunk,
                id=f"{chunk.id}-{index}",
                start_line=start,
                end_line=end,
                chunk_type=chunk_type,
                metadata=replace(
                    chunk.metadata,
                    line_count=end - start + 1,
                    estimated_tokens=estimate_tokens(code),
                    summary=summary,
                    symbol_name=symbol_name,
                    parent_symbol_name=parent if chunk_type == ChunkType.SUB_SYMBOL else None,
                ),
                content=code,
                blocks=tuple(
                    b for b in chunk.blocks if b.start_line >= start and b.end_line <= end
                ),
            )
        )
    return pieces


def strip_content(chunks: list[CodeChunk]) -> list[CodeChunk]:
    """Copies of ``chunks`` without code content."""
    return [
        replace(chunk, content=None) if chunk.content is not None else chunk for chunk in chunks
    ]
