from __future__ import annotations

import pytest

from nous_markdown.lexer import Lexer, reconstruct, tokenize
from nous_markdown.models import Token, TokenKind

EOF = TokenKind.EOF
HEADER = TokenKind.HEADER
TEXT = TokenKind.TEXT
NEWLINE = TokenKind.NEWLINE
LIST = TokenKind.LIST
BOLD = TokenKind.BOLD


def _kinds_and_values(text: str) -> list[tuple[TokenKind, str]]:
    return [(token.kind, token.value) for token in tokenize(text)]


def test_empty_input_yields_only_eof():
    assert list(tokenize("")) == [Token(EOF, "", 0)]


def test_header_followed_by_space():
    assert list(tokenize("# Title")) == [
        Token(HEADER, "#", 0),
        Token(TEXT, "Title", 2),
        Token(EOF, "", 7),
    ]


def test_header_run_keeps_every_marker():
    assert _kinds_and_values("###### Six\n") == [
        (HEADER, "######"),
        (TEXT, "Six"),
        (NEWLINE, "\n"),
        (EOF, ""),
    ]


def test_header_without_space_is_text():
    assert _kinds_and_values("##Title\n") == [
        (TEXT, "##Title"),
        (NEWLINE, "\n"),
        (EOF, ""),
    ]


def test_lone_header_marker_at_end_of_input_is_text():
    assert _kinds_and_values("#") == [(TEXT, "#"), (EOF, "")]


def test_only_one_space_after_header_is_dropped():
    assert _kinds_and_values("#  Title") == [
        (HEADER, "#"),
        (TEXT, " Title"),
        (EOF, ""),
    ]


def test_list_items():
    assert list(tokenize("- item\n- two")) == [
        Token(LIST, "-", 0),
        Token(TEXT, "item", 2),
        Token(NEWLINE, "\n", 6),
        Token(LIST, "-", 7),
        Token(TEXT, "two", 9),
        Token(EOF, "", 12),
    ]


def test_dash_without_space_is_text():
    assert _kinds_and_values("list-item") == [
        (TEXT, "list"),
        (TEXT, "-item"),
        (EOF, ""),
    ]


def test_trailing_dash_is_text():
    assert _kinds_and_values("a-") == [(TEXT, "a"), (TEXT, "-"), (EOF, "")]


def test_double_dash_yields_text_then_list():
    assert _kinds_and_values("-- x") == [
        (TEXT, "-"),
        (LIST, "-"),
        (TEXT, "x"),
        (EOF, ""),
    ]


def test_bold_markers():
    assert _kinds_and_values("*a*") == [
        (BOLD, "*"),
        (TEXT, "a"),
        (BOLD, "*"),
        (EOF, ""),
    ]


def test_markers_are_found_mid_line():
    assert _kinds_and_values("see *this* # now\n") == [
        (TEXT, "see "),
        (BOLD, "*"),
        (TEXT, "this"),
        (BOLD, "*"),
        (TEXT, " "),
        (HEADER, "#"),
        (TEXT, "now"),
        (NEWLINE, "\n"),
        (EOF, ""),
    ]


def test_non_ascii_characters_are_scanned_whole():
    assert list(tokenize("é # ü")) == [
        Token(TEXT, "é ", 0),
        Token(HEADER, "#", 2),
        Token(TEXT, "ü", 4),
        Token(EOF, "", 5),
    ]


def test_consecutive_newlines_are_separate_tokens():
    assert _kinds_and_values("\n\n") == [(NEWLINE, "\n"), (NEWLINE, "\n"), (EOF, "")]


def test_tokens_are_produced_lazily():
    lexer = Lexer("# Title\nmore text")
    stream = lexer.tokens()

    first = next(stream)

    assert first == Token(HEADER, "#", 0)
    assert lexer.pos < len(lexer.text)
    assert 0 <= lexer.start <= lexer.pos


def test_token_stream_is_single_pass():
    lexer = Lexer("text")
    list(lexer.tokens())

    with pytest.raises(RuntimeError):
        lexer.tokens()


@pytest.mark.parametrize(
    "text",
    [
        "",
        "# The Title\n",
        "##The Title\n",
        "- list 1\n- list 2\n\n",
        "#  spaced - out * stars\n",
        "-- x",
    ],
)
def test_reconstruct_returns_input(text: str):
    assert reconstruct(tokenize(text)) == text
