"""Split a snippet into top-level declarations and main-body statements.

Import blocks, type declarations and funcs have to live outside main,
everything else goes inside it. Because that reorders lines, every line
is tagged with a ``//line :N`` directive the Go compiler understands, so
errors still point at the user's original line numbers.

Block boundaries are found with a deliberately simple heuristic that
matches gofmt-style code: a block opens when a line *ends* with ``{``
or ``(`` and closes when a line *starts* with the matching closer.
Brackets that open and close within one line never open a block.
Comments and literals are excluded from the check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from goeval.core.exceptions import UnclosedBracketError
from goeval.source.chunker import Chunk, ChunkKind, SourceReader, iter_chunks
from goeval.source.imports import infer_packages

logger = logging.getLogger(__name__)

# Prefixes that start a block belonging outside main
TOP_LEVEL_PREFIXES: tuple[str, ...] = ("func ", "type ", "import ")

_CLOSERS = {"{": "}", "(": ")"}


@dataclass(frozen=True)
class Partition:
    """Result of partitioning a snippet.

    Attributes:
        top_level: Declarations to place before main, with line directives.
        body: Statements to wrap in main, with line directives.
        imports: Canonical paths of inferred standard packages.

    """

    top_level: str
    body: str
    imports: frozenset[str]


@dataclass
class PartitionState:
    """Mutable state of one partitioning pass.

    Invariant: bracket_depth == 0 exactly when closing_char is None.
    """

    bracket_depth: int = 0
    opened_at_line: int = 0
    in_top_level: bool = False
    imports: set[str] = field(default_factory=set)
    # Expected closers of open blocks, innermost last
    closers: list[str] = field(default_factory=list)

    @property
    def closing_char(self) -> str | None:
        return self.closers[-1] if self.closers else None

    def close_block(self) -> None:
        self.closers.pop()
        self.bracket_depth -= 1
        if self.bracket_depth == 0:
            self.opened_at_line = 0

    def open_block(self, opener: str, line_num: int) -> None:
        if self.bracket_depth == 0:
            self.opened_at_line = line_num
        self.closers.append(_CLOSERS[opener])
        self.bracket_depth += 1


def group_by_line(chunks: list[Chunk]) -> dict[int, list[Chunk]]:
    """Bucket chunks by the line they start on."""
    lines: dict[int, list[Chunk]] = {}
    for chunk in chunks:
        lines.setdefault(chunk.line, []).append(chunk)
    return lines


def add_line(buffer: list[str], line_num: int, line: str) -> None:
    """Append a line, prefixed with a line directive when at a line boundary.

    A directive is only inserted when the buffer is empty or ends with a
    newline; otherwise the previous line ended inside a multi-line
    comment or raw string and a directive would corrupt it.

    Args:
        buffer: Output buffer (list of text pieces).
        line_num: Original line number of line.
        line: Verbatim line text (may be empty).

    """
    if not line:
        return
    if not buffer or buffer[-1].endswith("\n"):
        buffer.append(f"//line :{line_num}\n")
    buffer.append(line)


def process_line(line_num: int, chunks: list[Chunk], state: PartitionState) -> str:
    """Update state for one line and return its verbatim text.

    Args:
        line_num: 1-indexed line number.
        chunks: Chunks starting on this line.
        state: Partition state, updated in place.

    Returns:
        The line's chunks concatenated verbatim.

    """
    text_parts = [chunk.text for chunk in chunks if chunk.kind is ChunkKind.TEXT]
    for part in text_parts:
        infer_packages(part, state.imports)

    structural = "".join(text_parts).lstrip(" \t")
    if structural:
        if structural[0] == state.closing_char:
            state.close_block()
        elif state.bracket_depth == 0:
            state.in_top_level = structural.startswith(TOP_LEVEL_PREFIXES)

    structural = structural.strip()
    if structural and structural[-1] in _CLOSERS:
        state.open_block(structural[-1], line_num)

    return "".join(chunk.text for chunk in chunks)


def partition(code: str) -> Partition:
    """Partition a snippet into top-level and main-body text.

    Args:
        code: Snippet source (aliases already expanded).

    Returns:
        Partition with both buffers and the inferred imports.

    Raises:
        NewlineInStringError: If a quoted literal contains a raw newline.
        UnclosedBracketError: If a block is still open after the last line.

    """
    reader = SourceReader(code)
    lines = group_by_line(list(iter_chunks(reader)))
    last_line = reader.line

    state = PartitionState()
    top_level: list[str] = []
    body: list[str] = []

    for line_num in range(1, last_line + 1):
        chunks = lines.get(line_num)
        if not chunks:
            # Covered by a multi-line chunk that started earlier
            continue
        line = process_line(line_num, chunks, state)
        add_line(top_level if state.in_top_level else body, line_num, line)

    if state.bracket_depth > 0:
        raise UnclosedBracketError(line=state.opened_at_line, depth=state.bracket_depth)

    logger.debug(
        "Partitioned %d lines: top_level=%d chars, body=%d chars, imports=%s",
        last_line,
        sum(len(piece) for piece in top_level),
        sum(len(piece) for piece in body),
        sorted(state.imports),
    )
    return Partition(
        top_level="".join(top_level),
        body="".join(body),
        imports=frozenset(state.imports),
    )
