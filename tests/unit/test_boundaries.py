"""Tests for heuristic logical boundary detection."""

from planhound.chunking.boundaries import (
    detect_logical_blocks,
    find_comment_boundaries,
    scan_boundaries,
)
from planhound.chunking.tokens import estimate_tokens
from planhound.core.models.chunk import BlockInfo

FUNCTION_SOURCE = "\n".join(
    [
        "function login(user) {",
        "  if (user.expired) {",
        "    refresh(user);",
        "  }",
        "  // persist the session",
        "  for (let i = 0; i < 3; i++) {",
        "    retry();",
        "  }",
        "}",
    ]
)


def test_blocks_are_reported_with_absolute_lines() -> None:
    blocks = detect_logical_blocks(FUNCTION_SOURCE, start_line=10)

    assert blocks == [
        BlockInfo(kind="if", start_line=11, end_line=13, depth=0),
        BlockInfo(kind="for", start_line=15, end_line=17, depth=0),
    ]


def test_nested_blocks_track_depth() -> None:
    code = "while (running) {\n  if (ready) {\n  }\n}"

    blocks = detect_logical_blocks(code)

    assert [(b.kind, b.start_line, b.end_line, b.depth) for b in blocks] == [
        ("if", 2, 3, 1),
        ("while", 1, 4, 0),
    ]


def test_unbalanced_closing_brace_is_ignored() -> None:
    assert detect_logical_blocks("}\n}\nfoo();") == []


def test_comment_lines() -> None:
    code = "a = 1\n# hash comment\n/* block\n * middle\n*/\nb = 2\n   // indented"

    assert find_comment_boundaries(code) == [2, 3, 5, 7]


def test_candidate_lines_merge_blocks_and_comments() -> None:
    scan = scan_boundaries(FUNCTION_SOURCE, start_line=10)

    assert scan.comment_lines == [14]
    assert scan.candidate_lines() == [11, 14, 15, 18]


def test_token_estimate_rounds_up() -> None:
    assert estimate_tokens("") == 0
    assert estimate_tokens(None) == 0
    assert estimate_tokens("abcd") == 1
    assert estimate_tokens("abcde") == 2
