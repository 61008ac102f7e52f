"""Tests for the lossless snippet chunker."""

import pytest

from goeval.core.exceptions import MalformedInputError, NewlineInStringError
from goeval.source.chunker import ChunkKind, SourceReader, chunk_source, iter_chunks


def _kinds(text: str) -> list[tuple[ChunkKind, str]]:
    return [(c.kind, c.text) for c in chunk_source(text)]


class TestRoundTrip:
    """Concatenated chunks reproduce the input exactly."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "\n",
            "x := 1\n",
            "a / b // divide\n",
            "/* multi\nline */ x := `raw\nstring` + \"q\\\"uoted\" + 'c'\n",
            "s := \"http://example.com\" // trailing\n\n\n",
            "/* unterminated\ncomment",
            "x := `unterminated raw",
            "trailing slash /",
            "y := a /b/ c\n",
            "/* a *\n b **/ z\n",
        ],
    )
    def test_concatenation_equals_input(self, text: str) -> None:
        chunks = chunk_source(text)
        assert "".join(c.text for c in chunks) == text

    @pytest.mark.parametrize(
        "text",
        [
            "a\nb\n",
            "/* one\ntwo\nthree */\n",
            "x := `a\nb`\n// c\n",
            "/* a *\n b */\n",
            "q := a /\nb\n",
        ],
    )
    def test_every_newline_counted_once(self, text: str) -> None:
        chunks = chunk_source(text)
        assert sum(c.line_breaks for c in chunks) == text.count("\n")
        for chunk in chunks:
            assert chunk.line_breaks == chunk.text.count("\n")


class TestComments:
    """Tests for comment chunks."""

    def test_line_comment_includes_newline(self) -> None:
        chunks = chunk_source("x := 1 // one\ny\n")
        assert chunks[0].kind is ChunkKind.TEXT
        assert chunks[0].text == "x := 1 "
        assert chunks[1].kind is ChunkKind.COMMENT
        assert chunks[1].text == "// one\n"
        assert chunks[1].line_breaks == 1

    def test_line_comment_at_end_of_input(self) -> None:
        chunks = chunk_source("// last")
        assert len(chunks) == 1
        assert chunks[0].kind is ChunkKind.COMMENT
        assert chunks[0].line_breaks == 0

    def test_block_comment_counts_newlines(self) -> None:
        chunks = chunk_source("/* a\nb\nc */x")
        assert chunks[0].kind is ChunkKind.COMMENT
        assert chunks[0].text == "/* a\nb\nc */"
        assert chunks[0].line_breaks == 2
        assert chunks[1].text == "x"

    def test_unterminated_block_comment_is_best_effort(self) -> None:
        chunks = chunk_source("/* never\nclosed")
        assert len(chunks) == 1
        assert chunks[0].kind is ChunkKind.COMMENT
        assert chunks[0].line_breaks == 1

    def test_star_before_newline_in_block_comment(self) -> None:
        chunks = chunk_source("/* a *\n*/")
        assert len(chunks) == 1
        assert chunks[0].line_breaks == 1

    def test_double_star_close(self) -> None:
        chunks = chunk_source("/** doc **/x")
        assert chunks[0].text == "/** doc **/"
        assert chunks[1].text == "x"


class TestStrings:
    """Tests for quoted and raw literals."""

    def test_double_quoted(self) -> None:
        assert _kinds('x := "a{b"') == [
            (ChunkKind.TEXT, "x := "),
            (ChunkKind.STRING, '"a{b"'),
        ]

    def test_escaped_quote_does_not_close(self) -> None:
        chunks = chunk_source('"a\\"b" + c')
        assert chunks[0].kind is ChunkKind.STRING
        assert chunks[0].text == '"a\\"b"'
        assert chunks[1].text == " + c"

    def test_rune_literal(self) -> None:
        assert _kinds("r := '}'") == [
            (ChunkKind.TEXT, "r := "),
            (ChunkKind.STRING, "'}'"),
        ]

    def test_comment_marker_inside_string_is_not_comment(self) -> None:
        kinds = [c.kind for c in chunk_source('u := "http://x" + y')]
        assert ChunkKind.COMMENT not in kinds

    def test_raw_string_spanning_three_lines(self) -> None:
        chunks = chunk_source("s := `one\ntwo\nthree`\nfunc f() {\n}\n")
        raw = [c for c in chunks if c.kind is ChunkKind.STRING]
        assert len(raw) == 1
        assert raw[0].text == "`one\ntwo\nthree`"
        assert raw[0].line_breaks == 2
        assert raw[0].line == 1
        func_chunk = next(c for c in chunks if c.text.startswith("func"))
        assert func_chunk.line == 4

    def test_raw_string_has_no_escapes(self) -> None:
        chunks = chunk_source("`a\\`b")
        assert chunks[0].text == "`a\\`"
        assert chunks[1].text == "b"

    def test_newline_in_quoted_string_is_fatal(self) -> None:
        with pytest.raises(NewlineInStringError) as exc_info:
            chunk_source('x := 1\ny := "abc\ndef"\n')
        assert exc_info.value.line == 2
        assert isinstance(exc_info.value, MalformedInputError)

    def test_escaped_newline_in_quoted_string_is_fatal(self) -> None:
        with pytest.raises(NewlineInStringError) as exc_info:
            chunk_source('"abc\\\n"')
        assert exc_info.value.line == 1

    def test_unterminated_string_at_end_is_best_effort(self) -> None:
        chunks = chunk_source('x := "open')
        assert chunks[-1].kind is ChunkKind.STRING
        assert chunks[-1].text == '"open'


class TestText:
    """Tests for plain text chunks."""

    def test_empty_line_chunk(self) -> None:
        chunks = chunk_source("\n\n")
        assert [(c.text, c.line_breaks, c.line) for c in chunks] == [
            ("\n", 1, 1),
            ("\n", 1, 2),
        ]

    def test_text_stops_at_end_of_line(self) -> None:
        chunks = chunk_source("a\nb")
        assert [(c.text, c.line) for c in chunks] == [("a\n", 1), ("b", 2)]

    def test_division_is_text(self) -> None:
        chunks = chunk_source("x := a / b\n")
        assert len(chunks) == 1
        assert chunks[0].kind is ChunkKind.TEXT

    def test_slash_before_quote_is_pushed_back(self) -> None:
        assert _kinds('/"s"') == [
            (ChunkKind.TEXT, "/"),
            (ChunkKind.STRING, '"s"'),
        ]

    def test_slash_before_newline_is_counted(self) -> None:
        chunks = chunk_source("/\nx")
        assert chunks[0].text == "/\n"
        assert chunks[0].line_breaks == 1
        assert chunks[1].line == 2

    def test_text_stops_before_comment(self) -> None:
        assert _kinds("a/*c*/b") == [
            (ChunkKind.TEXT, "a"),
            (ChunkKind.COMMENT, "/*c*/"),
            (ChunkKind.TEXT, "b"),
        ]


class TestIterChunks:
    """Tests for the lazy generator interface."""

    def test_generator_is_lazy(self) -> None:
        reader = SourceReader('a\n"b\n')
        chunks = iter_chunks(reader)
        first = next(chunks)
        assert first.text == "a\n"
        with pytest.raises(NewlineInStringError):
            next(chunks)

    def test_generator_is_not_restartable(self) -> None:
        reader = SourceReader("a\nb\n")
        assert len(list(iter_chunks(reader))) == 2
        assert list(iter_chunks(reader)) == []
