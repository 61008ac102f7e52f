"""Lossless chunking of Go snippets into string/comment/text spans.

The chunker is a small single-pass state machine that only knows enough
Go lexing to keep brackets inside comments and literals away from the
partitioner:

- ``//`` and ``/* */`` comments
- ``"..."`` and ``'...'`` literals with backslash escapes
- ````...```` raw strings (may span lines)

Everything else is plain text. Concatenating the text of all chunks
gives back the input exactly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from goeval.core.exceptions import NewlineInStringError

logger = logging.getLogger(__name__)


class ChunkKind(Enum):
    """Classification of a chunk."""

    STRING = "string"
    COMMENT = "comment"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Chunk:
    """A contiguous slice of the input.

    Attributes:
        kind: What the slice is (literal, comment, or plain text).
        text: The slice itself, verbatim.
        line_breaks: Number of newlines embedded in text.
        line: 1-indexed line on which the chunk starts.

    """

    kind: ChunkKind
    text: str
    line_breaks: int
    line: int


class SourceReader:
    """Read cursor over the input text.

    Supports one-character pushback and marks, which is all the chunker
    needs to look ahead one character past a ``/``.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line = 1

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def read(self) -> str:
        """Return the next character, or "" at end of input."""
        if self.pos >= len(self.text):
            return ""
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
        return ch

    def unread(self) -> None:
        """Push the last character back."""
        if self.pos == 0:
            return
        self.pos -= 1
        if self.text[self.pos] == "\n":
            self.line -= 1

    def mark(self) -> int:
        return self.pos

    def slice_from(self, mark: int) -> str:
        return self.text[mark : self.pos]


def iter_chunks(reader: SourceReader) -> Iterator[Chunk]:
    """Yield chunks from reader until the input is exhausted.

    The generator is lazy and cannot be restarted; it consumes reader.

    Args:
        reader: Read cursor positioned at the start of the text to chunk.

    Yields:
        Chunks in left-to-right order.

    Raises:
        NewlineInStringError: If a quoted literal contains a raw newline.

    """
    while not reader.at_end:
        mark = reader.mark()
        start_line = reader.line
        ch = reader.read()

        if ch == "/":
            nxt = reader.read()
            if nxt == "/":
                kind, breaks = ChunkKind.COMMENT, _read_line_comment(reader)
            elif nxt == "*":
                kind, breaks = ChunkKind.COMMENT, _read_block_comment(reader)
            else:
                if nxt:
                    reader.unread()
                kind, breaks = ChunkKind.TEXT, _read_text(reader)
        elif ch in ('"', "'"):
            kind, breaks = ChunkKind.STRING, _read_quoted(reader, ch)
        elif ch == "`":
            kind, breaks = ChunkKind.STRING, _read_raw_string(reader)
        elif ch == "\n":
            # Empty line
            kind, breaks = ChunkKind.TEXT, 1
        else:
            reader.unread()
            kind, breaks = ChunkKind.TEXT, _read_text(reader)

        yield Chunk(kind=kind, text=reader.slice_from(mark), line_breaks=breaks, line=start_line)


def chunk_source(text: str) -> list[Chunk]:
    """Chunk an entire text eagerly.

    Args:
        text: Snippet source.

    Returns:
        All chunks, in order.

    """
    return list(iter_chunks(SourceReader(text)))


def _read_line_comment(reader: SourceReader) -> int:
    # "//" already consumed; the newline belongs to the comment
    while True:
        ch = reader.read()
        if ch == "":
            return 0
        if ch == "\n":
            return 1


def _read_block_comment(reader: SourceReader) -> int:
    # "/*" already consumed. Unterminated comments run to end of input.
    breaks = 0
    while True:
        ch = reader.read()
        if ch == "":
            return breaks
        if ch == "\n":
            breaks += 1
        elif ch == "*":
            nxt = reader.read()
            if nxt == "/":
                return breaks
            if nxt:
                reader.unread()


def _read_quoted(reader: SourceReader, quote: str) -> int:
    # Opening quote already consumed; literal may not contain a newline
    while True:
        ch = reader.read()
        if ch == "" or ch == quote:
            return 0
        if ch == "\\":
            ch = reader.read()
            if ch == "":
                return 0
        if ch == "\n":
            raise NewlineInStringError("newline in string literal", line=reader.line - 1)


def _read_raw_string(reader: SourceReader) -> int:
    breaks = 0
    while True:
        ch = reader.read()
        if ch == "" or ch == "`":
            return breaks
        if ch == "\n":
            breaks += 1


def _read_text(reader: SourceReader) -> int:
    """Read plain text up to a comment, literal, newline, or end of input."""
    while True:
        ch = reader.read()
        if ch == "":
            return 0
        if ch == "\n":
            return 1
        if ch in ('"', "'", "`"):
            reader.unread()
            return 0
        if ch == "/":
            nxt = reader.read()
            if nxt in ("/", "*"):
                # Comment starts here: give back both characters
                reader.unread()
                reader.unread()
                return 0
            if nxt:
                reader.unread()
