"""Merge-on-overflow for code chunks ("dechunking").

When a request yields more chunks than ``max_chunks_per_step``, adjacent
chunks of the same file are collapsed into Summary chunks that describe what
they replaced instead of carrying the code. ``merged_from`` on a Summary is
the only trace of its contributors.

The cap applies per file: every file group is reduced to at most
``max_chunks_per_step`` chunks, so a request touching several files can still
return more than that in total.
"""

import math

from loguru import logger

from planhound.core.exceptions import EmptyMergeError
from planhound.core.models.chunk import ChunkMetadata, CodeChunk
from planhound.core.types.common import ChunkType
from planhound.utils.ids import generate_id


def _describe_chunk(chunk: CodeChunk) -> str:
    span = f"lines {chunk.start_line}-{chunk.end_line}"
    line_count = chunk.end_line - chunk.start_line + 1
    if chunk.metadata.symbol_name:
        return f"{chunk.metadata.symbol_name} ({span}, {line_count} lines)"
    if chunk.metadata.summary:
        return f"{chunk.metadata.summary} ({span}, {line_count} lines)"
    return f"{span} ({line_count} lines)"


def summarize_chunks(chunks: list[CodeChunk]) -> str:
    """Human-readable description of a set of chunks, grouped by file."""
    by_file: dict[str, list[CodeChunk]] = {}
    for chunk in chunks:
        by_file.setdefault(chunk.file_path, []).append(chunk)

    parts = [
        f"{file_path}: {', '.join(_describe_chunk(c) for c in file_chunks)}"
        for file_path, file_chunks in by_file.items()
    ]
    return f"Merged chunks: {'; '.join(parts)}"


def merge_chunk_batch(batch: list[CodeChunk]) -> CodeChunk:
    """Collapse a batch into one Summary chunk.

    A batch of one is returned unchanged.

    Raises:
        EmptyMergeError: If ``batch`` is empty
    """
    if not batch:
        raise EmptyMergeError("Cannot merge empty list of chunks")
    if len(batch) == 1:
        return batch[0]

    start_line = min(c.start_line for c in batch)
    end_line = max(c.end_line for c in batch)
    return CodeChunk(
        id=generate_id("merged"),
        file_path=batch[0].file_path,
        start_line=start_line,
        end_line=end_line,
        chunk_type=ChunkType.SUMMARY,
        metadata=ChunkMetadata(
            line_count=end_line - start_line + 1,
            estimated_tokens=sum(c.estimated_tokens for c in batch),
            summary=summarize_chunks(batch),
            merged_from=tuple(c.id for c in batch),
        ),
    )


def dechunk_chunks(
    chunks: list[CodeChunk], max_chunks_per_step: int
) -> tuple[list[CodeChunk], list[str]]:
    """Reduce each file's chunks to at most ``max_chunks_per_step``.

    Returns:
        Tuple of (chunks, warnings); one warning per Summary produced
    """
    if max_chunks_per_step < 1:
        raise ValueError("max_chunks_per_step must be at least 1")
    if len(chunks) <= max_chunks_per_step:
        return list(chunks), []

    by_file: dict[str, list[CodeChunk]] = {}
    for chunk in chunks:
        by_file.setdefault(chunk.file_path, []).append(chunk)

    merged: list[CodeChunk] = []
    warnings: list[str] = []
    for file_path, file_chunks in by_file.items():
        ordered = sorted(file_chunks, key=lambda c: c.start_line)
        # Batches of N keep a group of up to N*N chunks within N; larger
        # groups need larger batches.
        batch_size = max(max_chunks_per_step, math.ceil(len(ordered) / max_chunks_per_step))
        for offset in range(0, len(ordered), batch_size):
            batch = ordered[offset : offset + batch_size]
            result = merge_chunk_batch(batch)
            merged.append(result)
            if result.chunk_type == ChunkType.SUMMARY and len(batch) > 1:
                warnings.append(
                    f"Merged {len(batch)} chunks into summary "
                    f"({file_path} lines {result.start_line}-{result.end_line})"
                )

    logger.info(
        f"Dechunked {len(chunks)} chunks into {len(merged)} "
        f"(limit {max_chunks_per_step} per file, {len(by_file)} files)"
    )
    return merged, warnings
