"""Split preprocessed source text into tokens with line and column spans."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import NamedTuple

from solidsnake.diagnostics import Span
from solidsnake.tokens import LexingError, LexingErrorKind, Spanned, Token, TokenKind

LexResult = "Spanned[Token] | LexingError"


class _Action(enum.Enum):
    WORD = enum.auto()  # fixed token, updates position
    BOOL = enum.auto()  # boolean literal, leaves position untouched
    NEWLINE = enum.auto()
    TEXT = enum.auto()  # token carrying its matched text
    STRING = enum.auto()  # quoted string, carries the text between the quotes
    UNTERMINATED = enum.auto()  # string without a closing quote


class _Rule(NamedTuple):
    pattern: re.Pattern[str]
    action: _Action
    kind: TokenKind | None = None
    value: bool | None = None


_FIXED_WORDS: tuple[tuple[str, TokenKind], ...] = (
    ("let", TokenKind.LET),
    ("if", TokenKind.IF),
    ("elif", TokenKind.ELIF),
    ("else", TokenKind.ELSE),
    ("while", TokenKind.WHILE),
    ("break", TokenKind.BREAK),
    ("continue", TokenKind.CONTINUE),
    ("Int", TokenKind.INT_TYPE),
    ("Bool", TokenKind.BOOL_TYPE),
    ("Float", TokenKind.FLOAT_TYPE),
    ("List", TokenKind.LIST),
    ("Array", TokenKind.ARRAY),
    ("==", TokenKind.EQ_EQ),
    ("!=", TokenKind.NOT_EQ),
    (">=", TokenKind.GTE),
    ("<=", TokenKind.LTE),
    (">", TokenKind.GT),
    ("<", TokenKind.LT),
    ("=", TokenKind.ASSIGN),
    ("+", TokenKind.PLUS),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.STAR),
    ("/", TokenKind.SLASH),
    ("%", TokenKind.PERCENT),
    ("not", TokenKind.NOT),
    ("and", TokenKind.AND),
    ("or", TokenKind.OR),
    ("<<", TokenKind.LSHIFT),
    (">>", TokenKind.RSHIFT),
    ("&", TokenKind.BIT_AND),
    ("|", TokenKind.BIT_OR),
    ("(", TokenKind.LPAREN),
    (")", TokenKind.RPAREN),
    ("[", TokenKind.LBRACKET),
    ("]", TokenKind.RBRACKET),
    ("{", TokenKind.LBRACE),
    ("}", TokenKind.RBRACE),
    (":", TokenKind.COLON),
    (",", TokenKind.COMMA),
    (".", TokenKind.DOT),
    ("<<INDENT>>", TokenKind.INDENT),
    ("<<DEDENT>>", TokenKind.DEDENT),
)

# Fixed strings come first: on a tie in length they win over the patterns,
# so keywords are never read as identifiers.
_RULES: tuple[_Rule, ...] = (
    *(_Rule(re.compile(re.escape(text)), _Action.WORD, kind) for text, kind in _FIXED_WORDS),
    _Rule(re.compile("true"), _Action.BOOL, TokenKind.BOOL, True),
    _Rule(re.compile("false"), _Action.BOOL, TokenKind.BOOL, False),
    _Rule(re.compile("\n"), _Action.NEWLINE, TokenKind.NEWLINE),
    _Rule(re.compile(r"#.*"), _Action.TEXT, TokenKind.COMMENT),
    _Rule(re.compile(r"[0-9]+\.[0-9]+"), _Action.TEXT, TokenKind.FLOAT),
    _Rule(re.compile(r"[0-9]+"), _Action.TEXT, TokenKind.INT),
    _Rule(re.compile(r'"(?:[^"\\]|\\.)*"'), _Action.STRING, TokenKind.STRING),
    _Rule(re.compile(r'"[^"]*'), _Action.UNTERMINATED),
    _Rule(re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*"), _Action.TEXT, TokenKind.IDENTIFIER),
)

_WHITESPACE = re.compile(r"[ \t]+")


@dataclass
class _Position:
    """Line bookkeeping carried from token to token."""

    line: int = 0
    column: int = 0
    line_start: int = 0
    pending_line_inc: bool = False

    def _apply_pending(self) -> None:
        if self.pending_line_inc:
            self.line += 1
            self.pending_line_inc = False

    def word(self, start: int) -> None:
        self._apply_pending()
        self.column = start - self.line_start

    def newline(self, start: int, end: int) -> None:
        self._apply_pending()
        # The newline itself still belongs to the line it ends.
        self.pending_line_inc = True
        self.column = start - self.line_start
        self.line_start = end

    def span(self, start: int, end: int) -> Span:
        return Span(line=self.line, column=self.column, start=start, end=end)


def _longest_match(source: str, pos: int) -> tuple[_Rule, int] | None:
    best: tuple[_Rule, int] | None = None
    for rule in _RULES:
        match = rule.pattern.match(source, pos)
        if match is not None and (best is None or match.end() > best[1]):
            best = (rule, match.end())
    return best


def lex(source: str) -> list[Spanned[Token] | LexingError]:
    """Tokenize source, keeping every token's span.

    Offsets are character indices; lines and columns count from zero.
    Problems are reported in place as LexingError items in the result.
    """
    out: list[Spanned[Token] | LexingError] = []
    position = _Position()
    pos = 0
    length = len(source)

    while pos < length:
        blank = _WHITESPACE.match(source, pos)
        if blank is not None:
            pos = blank.end()
            continue

        found = _longest_match(source, pos)
        if found is None:
            out.append(LexingError())
            pos += 1
            continue

        rule, end = found
        start, pos = pos, end
        text = source[start:end]

        if rule.action is _Action.UNTERMINATED:
            position.word(start)
            out.append(LexingError(LexingErrorKind.INVALID_STRING, position.span(start, end)))
            continue

        if rule.action is _Action.NEWLINE:
            position.newline(start, end)
            token = Token(TokenKind.NEWLINE)
        elif rule.action is _Action.BOOL:
            token = Token(TokenKind.BOOL, rule.value)
        elif rule.action is _Action.STRING:
            position.word(start)
            token = Token(TokenKind.STRING, text[1:-1])
        elif rule.action is _Action.TEXT:
            position.word(start)
            token = Token(rule.kind, text)
        else:
            position.word(start)
            token = Token(rule.kind)

        out.append(Spanned(token, position.span(start, end)))

    return out


__all__ = ["lex"]