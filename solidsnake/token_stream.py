"""A cursor over lexed tokens with lookahead, backtracking and expectations."""

from __future__ import annotations

from collections.abc import Iterable

from solidsnake.diagnostics import Span
from solidsnake.lexer import lex
from solidsnake.tokens import LexingError, Spanned, Token


class StreamError(Exception):
    """A problem met while consuming tokens from a stream."""


class UnexpectedTokenError(StreamError):
    """The next token was not the one the caller expected."""

    def __init__(self, expected: str, found: str, span: Span) -> None:
        super().__init__(f"expected {expected}, found {found}")
        self.expected = expected
        self.found = found
        self.span = span


class EndOfStreamError(StreamError):
    """A token was required but the stream had none left."""

    def __init__(self) -> None:
        super().__init__("unexpected end of input")


def _describe(token: Token) -> str:
    if token.value is None:
        return token.kind.name
    return f"{token.kind.name}({token.value!r})"


class TokenStream:
    """Sequential access to a list of spanned tokens."""

    def __init__(self, tokens: Iterable[Spanned[Token]]) -> None:
        self._tokens: list[Spanned[Token]] = list(tokens)
        self._pos = 0

    @classmethod
    def from_source(cls, source: str) -> TokenStream:
        """Lex source into a stream; raise the first lexing error found."""
        tokens: list[Spanned[Token]] = []
        for item in lex(source):
            if isinstance(item, LexingError):
                raise item
            tokens.append(item)
        return cls(tokens)

    def _current(self, offset: int = 0) -> Spanned[Token] | None:
        index = self._pos + offset
        if 0 <= index < len(self._tokens):
            return self._tokens[index]
        return None

    def next(self) -> Spanned[Token] | None:
        """Return the current token, or None past the end, and advance."""
        token = self._current()
        self._pos += 1
        return token

    def peek(self, offset: int = 0) -> Spanned[Token] | None:
        """Return the token offset places ahead without consuming anything."""
        return self._current(offset)

    def expect(self, expected: Token) -> Spanned[Token]:
        """Consume and return the current token if it equals expected."""
        token = self._current()
        if token is None:
            raise EndOfStreamError()
        if token.node != expected:
            raise UnexpectedTokenError(
                _describe(expected), _describe(token.node), token.span
            )
        self._pos += 1
        return token

    def save(self) -> int:
        """Return the current position for a later restore."""
        return self._pos

    def restore(self, pos: int) -> None:
        """Move back (or forward) to a position returned by save."""
        self._pos = pos

    def at_end(self) -> bool:
        """True once every token has been consumed."""
        return self._pos >= len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)


__all__ = [
    "EndOfStreamError",
    "StreamError",
    "TokenStream",
    "UnexpectedTokenError",
]