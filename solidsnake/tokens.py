"""Token kinds, tokens with source spans, and lexing errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from solidsnake.diagnostics import Span

T = TypeVar("T")


class TokenKind(enum.Enum):
    """Every kind of token the lexer produces."""

    # Literals
    INT = enum.auto()
    FLOAT = enum.auto()
    STRING = enum.auto()
    BOOL = enum.auto()
    IDENTIFIER = enum.auto()

    # Keywords
    LET = enum.auto()
    IF = enum.auto()
    ELIF = enum.auto()
    ELSE = enum.auto()
    WHILE = enum.auto()
    BREAK = enum.auto()
    CONTINUE = enum.auto()

    # Types
    INT_TYPE = enum.auto()
    BOOL_TYPE = enum.auto()
    FLOAT_TYPE = enum.auto()
    LIST = enum.auto()
    ARRAY = enum.auto()

    # Operators
    EQ_EQ = enum.auto()
    NOT_EQ = enum.auto()
    GT = enum.auto()
    GTE = enum.auto()
    LT = enum.auto()
    LTE = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    PERCENT = enum.auto()
    ASSIGN = enum.auto()
    NOT = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    LSHIFT = enum.auto()
    RSHIFT = enum.auto()
    BIT_AND = enum.auto()
    BIT_OR = enum.auto()

    # Delimiters
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()
    LBRACKET = enum.auto()
    RBRACKET = enum.auto()
    COLON = enum.auto()
    COMMA = enum.auto()
    DOT = enum.auto()

    # Indentation
    INDENT = enum.auto()
    DEDENT = enum.auto()
    NEWLINE = enum.auto()

    # Comments
    COMMENT = enum.auto()


_TEXT_KINDS = frozenset(
    {
        TokenKind.INT,
        TokenKind.FLOAT,
        TokenKind.STRING,
        TokenKind.IDENTIFIER,
        TokenKind.COMMENT,
    }
)


@dataclass(frozen=True)
class Token:
    """A token kind with its payload: source text for literals, identifiers and
    comments, a bool for boolean literals, and nothing otherwise."""

    kind: TokenKind
    value: str | bool | None = None

    def __post_init__(self) -> None:
        if self.kind in _TEXT_KINDS:
            if not isinstance(self.value, str):
                raise ValueError(f"{self.kind.name} token needs text")
        elif self.kind is TokenKind.BOOL:
            if not isinstance(self.value, bool):
                raise ValueError("BOOL token needs a bool value")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} token takes no value")


@dataclass(frozen=True)
class Spanned(Generic[T]):
    """A value paired with the span of source it came from."""

    node: T
    span: Span


class LexingErrorKind(enum.Enum):
    """The kinds of problem the lexer reports."""

    INVALID_NUMBER = enum.auto()
    INVALID_STRING = enum.auto()
    INVALID_CHARACTER = enum.auto()
    UNKNOWN = enum.auto()


class LexingError(Exception):
    """A lexing problem with its kind, optional detail and source span."""

    def __init__(
        self,
        kind: LexingErrorKind = LexingErrorKind.UNKNOWN,
        span: Span | None = None,
        detail: str | None = None,
    ) -> None:
        self.kind = kind
        self.span = span if span is not None else Span()
        self.detail = detail
        super().__init__(str(self))

    def with_span(self, span: Span) -> LexingError:
        """Return the same error placed at another span."""
        return LexingError(self.kind, span, self.detail)

    def __str__(self) -> str:
        if self.kind is LexingErrorKind.INVALID_NUMBER:
            return f"Invalid number: {self.detail}"
        if self.kind is LexingErrorKind.INVALID_STRING:
            return "Invalid string"
        if self.kind is LexingErrorKind.INVALID_CHARACTER:
            return f"Invalid character: {self.detail}"
        return "Unknown lexing error"

    def __repr__(self) -> str:
        return f"LexingError({self.kind!r}, {self.span!r}, {self.detail!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LexingError):
            return NotImplemented
        return (self.kind, self.span, self.detail) == (
            other.kind,
            other.span,
            other.detail,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.span, self.detail))


__all__ = [
    "LexingError",
    "LexingErrorKind",
    "Spanned",
    "Token",
    "TokenKind",
    "replace",
]