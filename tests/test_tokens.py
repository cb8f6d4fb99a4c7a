import pytest

from solidsnake.diagnostics import Span
from solidsnake.tokens import (
    LexingError,
    LexingErrorKind,
    Spanned,
    Token,
    TokenKind,
)


def test_tokens_compare_by_kind_and_value():
    assert Token(TokenKind.INT, "123") == Token(TokenKind.INT, "123")
    assert Token(TokenKind.INT, "123") != Token(TokenKind.FLOAT, "123")
    assert Token(TokenKind.IDENTIFIER, "x") != Token(TokenKind.IDENTIFIER, "y")


def test_keyword_token_has_no_value():
    assert Token(TokenKind.LET).value is None
    assert Token(TokenKind.LET) == Token(TokenKind.LET)


def test_bool_token_holds_bool():
    assert Token(TokenKind.BOOL, True) != Token(TokenKind.BOOL, False)
    assert Token(TokenKind.BOOL, False).value is False


@pytest.mark.parametrize(
    "kind",
    [TokenKind.INT, TokenKind.FLOAT, TokenKind.STRING, TokenKind.IDENTIFIER, TokenKind.COMMENT],
)
def test_text_kinds_require_text(kind):
    with pytest.raises(ValueError):
        Token(kind)


def test_bool_kind_rejects_text():
    with pytest.raises(ValueError):
        Token(TokenKind.BOOL, "true")


def test_plain_kind_rejects_value():
    with pytest.raises(ValueError):
        Token(TokenKind.PLUS, "+")


def test_tokens_are_hashable():
    tokens = {Token(TokenKind.NEWLINE), Token(TokenKind.NEWLINE), Token(TokenKind.DOT)}
    assert len(tokens) == 2


def test_spanned_pairs_node_and_span():
    span = Span(line=1, column=2, start=8, end=9)
    spanned = Spanned(Token(TokenKind.INT, "5"), span)
    assert spanned.node == Token(TokenKind.INT, "5")
    assert spanned.span == span
    assert spanned == Spanned(Token(TokenKind.INT, "5"), span)


def test_lexing_error_defaults():
    error = LexingError()
    assert error.kind is LexingErrorKind.UNKNOWN
    assert error.span == Span()
    assert str(error) == "Unknown lexing error"


def test_lexing_error_messages():
    assert str(LexingError(LexingErrorKind.INVALID_STRING)) == "Invalid string"
    assert (
        str(LexingError(LexingErrorKind.INVALID_NUMBER, detail="invalid integer"))
        == "Invalid number: invalid integer"
    )
    assert str(LexingError(LexingErrorKind.INVALID_CHARACTER, detail="@")) == (
        "Invalid character: @"
    )


def test_with_span_returns_moved_copy():
    original = LexingError(LexingErrorKind.INVALID_STRING, Span(0, 0, 0, 1))
    moved_span = Span(line=3, column=4, start=20, end=25)
    moved = original.with_span(moved_span)
    assert moved.span == moved_span
    assert moved.kind is LexingErrorKind.INVALID_STRING
    assert original.span == Span(0, 0, 0, 1)


def test_lexing_error_equality():
    span = Span(0, 0, 0, 13)
    assert LexingError(LexingErrorKind.INVALID_STRING, span) == LexingError(
        LexingErrorKind.INVALID_STRING, span
    )
    assert LexingError(LexingErrorKind.INVALID_STRING, span) != LexingError(
        LexingErrorKind.UNKNOWN, span
    )


def test_lexing_error_can_be_raised():
    error = LexingError(LexingErrorKind.INVALID_STRING)
    assert str(error) == "Invalid string"
    with pytest.raises(LexingError) as info:
        raise error
    assert info.value is error
    assert info.value.kind is LexingErrorKind.INVALID_STRING