"""Semantic chunking engine: boundary detection, chunk building, dechunking."""

from planhound.chunking.boundaries import (
    BoundaryScan,
    detect_logical_blocks,
    find_comment_boundaries,
    scan_boundaries,
)
from planhound.chunking.chunk_builder import (
    apply_token_budget,
    build_symbol_chunks,
    chunk_file_range,
    chunk_large_symbol,
)
from planhound.chunking.dechunker import dechunk_chunks, merge_chunk_batch, summarize_chunks
from planhound.chunking.tokens import estimate_tokens

__all__ = [
    "BoundaryScan",
    "apply_token_budget",
    "build_symbol_chunks",
    "chunk_file_range",
    "chunk_large_symbol",
    "dechunk_chunks",
    "detect_logical_blocks",
    "estimate_tokens",
    "find_comment_boundaries",
    "merge_chunk_batch",
    "scan_boundaries",
    "summarize_chunks",
]
