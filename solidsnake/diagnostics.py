"""Source locations and compile-time diagnostics."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A region of source text with the line and column where it starts."""

    line: int = 0
    column: int = 0
    start: int = 0
    end: int = 0


class CompileError(Exception):
    """A single problem found while compiling, tied to a span of source."""

    def __init__(self, message: str, span: Span | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span if span is not None else Span()

    def __str__(self) -> str:
        return self.message


class MixedIndentationError(CompileError):
    """A line indents with a different whitespace character than the file uses."""

    def __init__(self, line: int, span: Span | None = None) -> None:
        super().__init__(f"mixed indentation on line {line}", span)
        self.line = line


class CompileErrors(Exception):
    """Every compile error collected during one pass, raised together."""

    def __init__(self, errors: Iterable[CompileError] = ()) -> None:
        self.errors: list[CompileError] = list(errors)
        super().__init__(str(self))

    def __iter__(self) -> Iterator[CompileError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        return "\n".join(error.message for error in self.errors)