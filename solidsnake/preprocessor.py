"""Turn significant indentation into explicit INDENT and DEDENT markers."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from solidsnake.diagnostics import CompileErrors, MixedIndentationError, Span

INDENT_MARKER = "<<INDENT>>\n"
DEDENT_MARKER = "<<DEDENT>>\n"


@dataclass
class PreprocessResult:
    """Original and transformed source, with a map from transformed to original offsets."""

    original: str
    transformed: str
    rev_offset_map: list[int | None] = field(default_factory=list)

    def _origin(self, index: int) -> int | None:
        if 0 <= index < len(self.rev_offset_map):
            return self.rev_offset_map[index]
        return None

    def map_span_back(
        self, transformed_start: int, transformed_end: int
    ) -> tuple[int, int] | None:
        """Map a span of the transformed code back to the original source."""
        start = self._origin(transformed_start)
        end = self._origin(transformed_end)
        if start is None or end is None:
            return None
        return start, end


class _Output:
    def __init__(self) -> None:
        self.parts: list[str] = []
        self.origins: list[int | None] = []

    def text(self, text: str, first_origin: int) -> None:
        self.parts.append(text)
        self.origins.extend(range(first_origin, first_origin + len(text)))

    def newline(self, origin: int) -> None:
        self.parts.append("\n")
        self.origins.append(origin)

    def marker(self, marker: str) -> None:
        self.parts.append(marker)
        self.origins.extend([None] * len(marker))

    def joined(self) -> str:
        return "".join(self.parts)


def _source_lines(source: str) -> Iterator[tuple[int, str]]:
    """Yield (offset of line start, line without its terminator)."""
    pieces = source.split("\n")
    if pieces and pieces[-1] == "":
        pieces.pop()
    offset = 0
    for raw in pieces:
        yield offset, raw[:-1] if raw.endswith("\r") else raw
        offset += len(raw) + 1


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def preprocess_indentation(source: str) -> PreprocessResult:
    """Rewrite indentation changes as marker lines and strip leading whitespace.

    Blank lines and comment-only lines pass through unchanged. Raises
    CompileErrors if any line mixes tabs and spaces in its indentation.
    """
    out = _Output()
    indent_stack = [0]
    errors: list[MixedIndentationError] = []
    indent_char: str | None = None

    for line_num, (line_start, line) in enumerate(_source_lines(source), start=1):
        raw_indent = _leading_whitespace(line)
        trimmed = line[len(raw_indent):]

        if not trimmed or trimmed.startswith("#"):
            out.text(line, line_start)
            out.newline(line_start + len(line))
            continue

        if indent_char is None:
            if " " in raw_indent:
                indent_char = " "
            elif "\t" in raw_indent:
                indent_char = "\t"

        if indent_char is not None and any(c != indent_char for c in raw_indent):
            span = Span(line=line_num, column=0, start=line_start, end=line_start)
            errors.append(MixedIndentationError(line_num, span))
            continue

        current_indent = len(raw_indent)
        if current_indent > indent_stack[-1]:
            indent_stack.append(current_indent)
            out.marker(INDENT_MARKER)
        else:
            while indent_stack[-1] > current_indent:
                indent_stack.pop()
                out.marker(DEDENT_MARKER)

        out.text(trimmed, line_start + current_indent)
        out.newline(line_start + len(line))

    while len(indent_stack) > 1:
        indent_stack.pop()
        out.marker(DEDENT_MARKER)

    if errors:
        raise CompileErrors(errors)

    return PreprocessResult(
        original=source,
        transformed=out.joined(),
        rev_offset_map=out.origins,
    )