"""Heuristic detection of logical boundaries inside source code.

Finds control-flow blocks (if/for/while/switch/try/catch/else) by tracking
brace balance line by line, and comment lines. This is not a parser: it
assumes a brace-delimited language and will mis-detect blocks in brace-less
code or dense one-line constructs. Callers only rely on the returned line
numbers being plausible split points.
"""

import re
from dataclasses import dataclass, field

from loguru import logger

from planhound.core.models.chunk import BlockInfo

# First match wins, so "else if (" is reported as an if block
_BLOCK_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bif\s*\("), "if"),
    (re.compile(r"\bfor\s*\("), "for"),
    (re.compile(r"\bwhile\s*\("), "while"),
    (re.compile(r"\bswitch\s*\("), "switch"),
    (re.compile(r"\btry\s*\{"), "try"),
    (re.compile(r"\bcatch\s*\("), "catch"),
    (re.compile(r"\belse\s*\{"), "else"),
)

_LINE_COMMENT_PREFIXES = ("//", "#")
_BLOCK_COMMENT_MARKERS = ("/*", "*/")


@dataclass(frozen=True)
class BoundaryScan:
    """Blocks and comment lines found in one piece of code."""

    blocks: list[BlockInfo] = field(default_factory=list)
    comment_lines: list[int] = field(default_factory=list)

    def candidate_lines(self) -> list[int]:
        """Sorted lines where a new chunk may start.

        A block contributes its first line and the line after its last, so a
        split never separates a block from its closing line.
        """
        lines: set[int] = set(self.comment_lines)
        for block in self.blocks:
            lines.add(block.start_line)
            lines.add(block.end_line + 1)
        return sorted(lines)


def _block_kind(line: str) -> str | None:
    for pattern, kind in _BLOCK_PATTERNS:
        if pattern.search(line):
            return kind
    return None


def detect_logical_blocks(code: str, start_line: int = 1) -> list[BlockInfo]:
    """Detect logical blocks in code.

    Args:
        code: Source text to scan
        start_line: Line number of the first line of ``code`` (1-based)

    Returns:
        Completed blocks in the order their closing line was seen
    """
    blocks: list[BlockInfo] = []
    stack: list[tuple[str, int, int]] = []  # (kind, start_line, depth)
    depth = 0

    for offset, line in enumerate(code.split("\n")):
        line_number = start_line + offset

        kind = _block_kind(line)
        if kind is not None:
            stack.append((kind, line_number, depth))
            depth += 1

        net_braces = line.count("{") - line.count("}")
        if net_braces < 0 and stack:
            block_kind, block_start, block_depth = stack.pop()
            blocks.append(
                BlockInfo(
                    kind=block_kind,
                    start_line=block_start,
                    end_line=line_number,
                    depth=block_depth,
                )
            )
            depth = max(0, depth - 1)

    return blocks


def find_comment_boundaries(code: str, start_line: int = 1) -> list[int]:
    """Return line numbers of comment lines.

    A line counts when it starts with ``//`` or ``#`` (after stripping) or
    contains a block comment marker.
    """
    boundaries: list[int] = []
    for offset, raw in enumerate(code.split("\n")):
        line = raw.strip()
        if line.startswith(_LINE_COMMENT_PREFIXES) or any(
            marker in line for marker in _BLOCK_COMMENT_MARKERS
        ):
            boundaries.append(start_line + offset)
    return boundaries


def scan_boundaries(code: str, start_line: int = 1) -> BoundaryScan:
    """Run block and comment detection over ``code``."""
    scan = BoundaryScan(
        blocks=detect_logical_blocks(code, start_line),
        comment_lines=find_comment_boundaries(code, start_line),
    )
    logger.debug(
        f"Boundary scan from line {start_line}: {len(scan.blocks)} blocks, "
        f"{len(scan.comment_lines)} comment lines"
    )
    return scan
